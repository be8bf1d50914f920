"""
Django ORM implementation of the persistence calls the scoring, wizard and
approval services rely on. One instance acts for one user (the evaluator for
drafts / submissions, the employee for approvals).
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from performance_app.exceptions import AlreadyApproved
from performance_app.models import (
    Category, CriterionScore, EvalStatus, Evaluation, EvaluationApproval, EvaluationDraftRecord,
)
from performance_app.services.approval import ApprovalRecord
from performance_app.services.ratings import CATEGORY_SLOTS
from performance_app.services.validation import EvaluationDraft

logger = logging.getLogger(__name__)

# Draft attributes copied 1:1 onto Evaluation columns.
SNAPSHOT_FIELDS = (
    "employee_name", "employee_code", "position", "department", "branch", "supervisor",
    "hire_date", "coverage_from", "coverage_to",
    "review_type_probationary", "review_type_regular",
    "review_type_others_improvement", "review_type_others_custom",
    "priority_area_1", "priority_area_2", "priority_area_3", "remarks", "overall_comments",
)


@dataclass(frozen=True)
class EvaluationRecord:
    employee_id: object
    evaluator_id: object
    draft: EvaluationDraft
    overall_score: Decimal
    is_head_office: bool = False
    submitted_at: Optional[datetime] = None
    evaluation_id: object = None
    status: str = EvalStatus.SUBMITTED

    @classmethod
    def from_draft(cls, draft: EvaluationDraft, *, employee_id, evaluator_id, is_head_office=False):
        return cls(
            employee_id=employee_id,
            evaluator_id=evaluator_id,
            draft=draft,
            overall_score=draft.overall_score(is_head_office=is_head_office),
            is_head_office=is_head_office,
            submitted_at=timezone.now(),
        )


def _approval_to_record(approval: EvaluationApproval) -> ApprovalRecord:
    return ApprovalRecord(
        evaluation_id=approval.evaluation_id,
        employee_id=approval.employee_id,
        approved_at=approval.approved_at,
        employee_signature=approval.employee_signature,
        employee_name=approval.employee_name,
        comments=approval.comments,
    )


def draft_from_evaluation(evaluation: Evaluation) -> EvaluationDraft:
    scores = {category: [None] * slots for category, slots in CATEGORY_SLOTS.items()}
    comments = {category: [""] * slots for category, slots in CATEGORY_SLOTS.items()}
    for row in evaluation.criterion_scores.all():
        category = Category(row.category)
        scores[category][row.index - 1] = row.score
        comments[category][row.index - 1] = row.comment
    return EvaluationDraft(
        scores=scores,
        comments=comments,
        **{name: getattr(evaluation, name) for name in SNAPSHOT_FIELDS},
    )


class EvaluationStorage:

    def __init__(self, user):
        self.user = user

    # ---- drafts ----------------------------------------------
    def load_draft(self, employee_id) -> EvaluationDraft:
        record = (EvaluationDraftRecord.objects
                  .filter(evaluator=self.user, employee_id=employee_id)
                  .only("payload")
                  .first())
        if record is None:
            return EvaluationDraft()
        return EvaluationDraft.from_dict(record.payload)

    def has_draft(self, employee_id) -> bool:
        return EvaluationDraftRecord.objects.filter(evaluator=self.user, employee_id=employee_id).exists()

    def save_draft(self, employee_id, draft: EvaluationDraft) -> None:
        EvaluationDraftRecord.objects.update_or_create(
            evaluator=self.user,
            employee_id=employee_id,
            defaults={"payload": draft.to_dict()},
        )

    def discard_draft(self, employee_id) -> None:
        EvaluationDraftRecord.objects.filter(evaluator=self.user, employee_id=employee_id).delete()

    # ---- evaluations -----------------------------------------
    def submit_evaluation(self, record: EvaluationRecord):
        draft = record.draft
        with transaction.atomic():
            evaluation = Evaluation.objects.create(
                employee_id=record.employee_id,
                evaluator_id=record.evaluator_id,
                status=EvalStatus.SUBMITTED,
                overall_score=record.overall_score,
                is_head_office=record.is_head_office,
                submitted_at=record.submitted_at or timezone.now(),
                **{name: getattr(draft, name) for name in SNAPSHOT_FIELDS},
            )
            rows = []
            for category, values in draft.scores.items():
                notes = draft.comments.get(category, ())
                for index, score in enumerate(values, start=1):
                    rows.append(CriterionScore(
                        evaluation=evaluation,
                        category=category,
                        index=index,
                        score=score,
                        comment=notes[index - 1] if index <= len(notes) else "",
                    ))
            CriterionScore.objects.bulk_create(rows)
            self.discard_draft(record.employee_id)

        logger.info(
            "Evaluation %s submitted for employee %s (overall %s)",
            evaluation.evaluation_id, record.employee_id, record.overall_score,
        )
        return evaluation.evaluation_id

    def load_evaluation(self, evaluation_id) -> EvaluationRecord:
        evaluation = (Evaluation.objects
                      .prefetch_related("criterion_scores")
                      .get(pk=evaluation_id))
        return EvaluationRecord(
            employee_id=evaluation.employee_id,
            evaluator_id=evaluation.evaluator_id,
            draft=draft_from_evaluation(evaluation),
            overall_score=evaluation.overall_score,
            is_head_office=evaluation.is_head_office,
            submitted_at=evaluation.submitted_at,
            evaluation_id=evaluation.evaluation_id,
            status=evaluation.status,
        )

    # ---- approvals -------------------------------------------
    def get_approval_record(self, evaluation_id, employee_id) -> Optional[ApprovalRecord]:
        approval = (EvaluationApproval.objects
                    .filter(evaluation_id=evaluation_id,
                            employee_id=employee_id,
                            evaluation__employee_id=employee_id)
                    .first())
        return _approval_to_record(approval) if approval else None

    def put_approval_record(self, record: ApprovalRecord) -> Optional[AlreadyApproved]:
        try:
            with transaction.atomic():
                evaluation = (Evaluation.objects
                              .select_for_update()
                              .get(pk=record.evaluation_id, employee_id=record.employee_id))
                EvaluationApproval.objects.create(
                    evaluation=evaluation,
                    employee_id=record.employee_id,
                    approved_at=record.approved_at,
                    employee_signature=record.employee_signature,
                    employee_name=record.employee_name,
                    comments=record.comments,
                )
                evaluation.status = EvalStatus.APPROVED
                evaluation.save(update_fields=["status", "updated_at"])
        except IntegrityError:
            # a concurrent approval won the one-to-one row
            logger.warning("Approval of evaluation %s lost a race", record.evaluation_id)
            return AlreadyApproved(record.evaluation_id)
        return None
