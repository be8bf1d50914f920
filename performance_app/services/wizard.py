import logging
from typing import Optional, Union

from performance_app.exceptions import IncompleteStep
from performance_app.services.storage import EvaluationRecord, EvaluationStorage
from performance_app.services.validation import (
    BACKWARD, FIRST_STEP, FORWARD, EvaluationDraft, StepContext,
    check_step, first_incomplete_step, next_step,
)

logger = logging.getLogger(__name__)


def prefill_draft(employee, evaluator=None) -> EvaluationDraft:
    """Blank draft with the identity fields taken from the employee's profile."""
    return EvaluationDraft(
        employee_name=getattr(employee, "display_name", "") or "",
        employee_code=employee.employee_code or "",
        position=employee.position or "",
        department=employee.department or "",
        branch=employee.branch or "",
        hire_date=employee.hire_date,
        supervisor=getattr(evaluator, "display_name", "") or "",
    )


class EvaluationWizard:
    """
    One in-progress evaluation of `employee` by `evaluator`.

    Owns the current draft and step; every edit is written back through the
    storage so the evaluator can resume later.
    """

    def __init__(self, evaluator, employee, *, is_head_office: bool, storage: Optional[EvaluationStorage] = None):
        self.evaluator = evaluator
        self.employee = employee
        self.context = StepContext(is_head_office=is_head_office)
        self.storage = storage or EvaluationStorage(evaluator)
        self.step = FIRST_STEP
        if self.storage.has_draft(employee.pk):
            self.draft = self.storage.load_draft(employee.pk)
        else:
            self.draft = prefill_draft(employee, evaluator)

    # ---- edits ------------------------------------------------
    def _store(self, draft: EvaluationDraft) -> EvaluationDraft:
        self.draft = draft
        self.storage.save_draft(self.employee.pk, draft)
        return draft

    def replace_draft(self, draft: EvaluationDraft) -> EvaluationDraft:
        return self._store(draft)

    def update(self, **changes) -> EvaluationDraft:
        return self._store(self.draft.with_fields(**changes))

    def rate(self, category, index: int, value) -> EvaluationDraft:
        return self._store(self.draft.with_score(category, index, value))

    # ---- navigation -------------------------------------------
    def current_issue(self) -> Optional[IncompleteStep]:
        return check_step(self.step, self.draft, self.context)

    def advance(self) -> Union[int, IncompleteStep]:
        issue = self.current_issue()
        if issue:
            return issue
        self.step = next_step(self.step, FORWARD, self.context.is_head_office)
        return self.step

    def back(self) -> int:
        self.step = next_step(self.step, BACKWARD, self.context.is_head_office)
        return self.step

    # ---- submission -------------------------------------------
    def submit(self):
        """Evaluation id of the stored evaluation, or the first incomplete step."""
        issue = first_incomplete_step(self.draft, self.context)
        if issue:
            logger.info(
                "Submission for employee %s blocked at step %s: %s",
                self.employee.pk, issue.step, issue.message,
            )
            return issue

        record = EvaluationRecord.from_draft(
            self.draft,
            employee_id=self.employee.pk,
            evaluator_id=self.evaluator.pk,
            is_head_office=self.context.is_head_office,
        )
        return self.storage.submit_evaluation(record)
