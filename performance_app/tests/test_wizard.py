import pytest
from datetime import date

from performance_app.exceptions import IncompleteStep
from performance_app.models import Category, Evaluation
from performance_app.services.storage import EvaluationStorage
from performance_app.services.wizard import EvaluationWizard, prefill_draft
from performance_app.tests.conftest import complete_draft


@pytest.mark.django_db
class TestEvaluationWizard:
    def test_new_draft_is_prefilled_from_profiles(self, evaluator, employee):
        draft = prefill_draft(employee, evaluator)
        assert draft.employee_name == "Juan Dela Cruz"
        assert draft.branch == "Branch 12"
        assert draft.hire_date == date(2022, 6, 1)
        assert draft.supervisor == "Maria Santos"
        assert draft.coverage_from is None

    def test_edits_are_saved_and_resumed(self, evaluator, employee):
        wizard = EvaluationWizard(evaluator, employee, is_head_office=False)
        wizard.update(review_type_probationary="3", remarks="Probation check")
        wizard.rate(Category.TEAMWORK, 2, 5)

        resumed = EvaluationWizard(evaluator, employee, is_head_office=False)
        assert resumed.draft.review_type_probationary == "3"
        assert resumed.draft.remarks == "Probation check"
        assert resumed.draft.score(Category.TEAMWORK, 2) == 5

    def test_advance_blocked_until_step_complete(self, evaluator, employee):
        wizard = EvaluationWizard(evaluator, employee, is_head_office=False)

        result = wizard.advance()
        assert result == IncompleteStep(1, "Please select at least one review type")
        assert wizard.step == 1

        wizard.replace_draft(complete_draft())
        assert wizard.advance() == 2
        assert wizard.back() == 1

    def test_head_office_skips_customer_service(self, evaluator, create_user):
        ho_employee = create_user(role="EMP", branch="Head Office - Finance")
        wizard = EvaluationWizard(evaluator, ho_employee, is_head_office=ho_employee.is_head_office)
        wizard.replace_draft(complete_draft())
        wizard.step = 6

        assert wizard.advance() == 8
        assert wizard.back() == 6

    def test_submit_reports_first_gap(self, evaluator, employee):
        wizard = EvaluationWizard(evaluator, employee, is_head_office=False)
        wizard.replace_draft(complete_draft().with_score(Category.ETHICAL_BEHAVIOR, 4, None))

        result = wizard.submit()

        assert isinstance(result, IncompleteStep)
        assert result.step == 6
        assert not Evaluation.objects.exists()

    def test_submit_creates_evaluation(self, evaluator, employee):
        wizard = EvaluationWizard(evaluator, employee, is_head_office=False)
        wizard.replace_draft(complete_draft(score=3))

        evaluation_id = wizard.submit()

        evaluation = Evaluation.objects.get(pk=evaluation_id)
        assert evaluation.employee == employee
        assert evaluation.evaluator == evaluator
        assert str(evaluation.overall_score) == "3.0"
        assert not EvaluationStorage(evaluator).has_draft(employee.pk)

    def test_head_office_submission_without_customer_service(self, evaluator, create_user):
        ho_employee = create_user(role="EMP", branch="HO")
        scores = dict(complete_draft().scores)
        scores[Category.CUSTOMER_SERVICE] = ()
        wizard = EvaluationWizard(evaluator, ho_employee, is_head_office=True)
        wizard.replace_draft(complete_draft(scores=scores))

        evaluation_id = wizard.submit()

        evaluation = Evaluation.objects.get(pk=evaluation_id)
        assert evaluation.is_head_office
        assert str(evaluation.overall_score) == "4.0"
