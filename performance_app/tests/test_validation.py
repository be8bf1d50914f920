import pytest
from datetime import date

from performance_app.exceptions import IncompleteStep, InvalidScoreValue
from performance_app.models import Category
from performance_app.services.validation import (
    BACKWARD, FORWARD, EvaluationDraft, StepContext,
    check_step, first_incomplete_step, is_step_complete, next_step, step_path, validation_message,
)
from performance_app.tests.conftest import complete_draft

BRANCH = StepContext(is_head_office=False)
HEAD_OFFICE = StepContext(is_head_office=True)


class TestStepOne:
    def test_review_type_checked_first(self):
        assert validation_message(1, EvaluationDraft(), BRANCH) == "Please select at least one review type"

    @pytest.mark.parametrize("review", [
        {"review_type_probationary": "3"},
        {"review_type_regular": "Q2"},
        {"review_type_others_improvement": True},
        {"review_type_others_custom": "Promotion review"},
    ])
    def test_any_review_type_satisfies_the_first_check(self, review):
        draft = complete_draft(**dict(
            {"review_type_regular": "", "review_type_probationary": ""}, **review
        ))
        assert is_step_complete(1, draft, BRANCH)

    def test_blank_custom_review_type_does_not_count(self):
        draft = complete_draft(review_type_regular="", review_type_others_custom="   ")
        assert validation_message(1, draft, BRANCH) == "Please select at least one review type"

    def test_text_fields_checked_in_order(self):
        draft = complete_draft(employee_name="", position="", supervisor="")
        assert validation_message(1, draft, BRANCH) == "Please enter the employee's name"
        draft = draft.with_fields(employee_name="Juan")
        assert validation_message(1, draft, BRANCH) == "Please enter the employee's position"
        draft = draft.with_fields(position="Teller")
        assert validation_message(1, draft, BRANCH) == "Please enter the immediate supervisor's name"

    def test_whitespace_only_text_is_missing(self):
        draft = complete_draft(branch="  ")
        assert validation_message(1, draft, BRANCH) == "Please enter the employee's branch"

    def test_coverage_dates(self):
        assert validation_message(1, complete_draft(coverage_from=None), BRANCH) == \
            "Please select Performance Coverage 'From' date"
        assert validation_message(1, complete_draft(coverage_to=None), BRANCH) == \
            "Please select Performance Coverage 'To' date"
        reversed_dates = complete_draft(coverage_from=date(2024, 3, 31), coverage_to=date(2024, 1, 1))
        assert validation_message(1, reversed_dates, BRANCH) == \
            "Performance Coverage 'From' date must be earlier than 'To' date"

    def test_coverage_cannot_start_before_hire_date(self):
        draft = complete_draft(hire_date=date(2024, 2, 1))
        assert validation_message(1, draft, BRANCH) == "Performance Coverage cannot start before Date Hired"

    def test_job_knowledge_scores_checked_after_administrative_fields(self):
        draft = complete_draft().with_score(Category.JOB_KNOWLEDGE, 2, None)
        issue = check_step(1, draft, BRANCH)
        assert issue == IncompleteStep(1, "Please rate Job Knowledge criterion 2 (Keeps Documentation Updated)")


class TestCategorySteps:
    def test_unrated_criterion_blocks_step(self):
        draft = complete_draft().with_score(Category.RELIABILITY, 2, 0)
        assert validation_message(5, draft, BRANCH) == "Please rate Reliability criterion 2 (Punctuality)"

    def test_job_targets_not_required_for_head_office(self):
        draft = complete_draft().with_score(Category.QUALITY_OF_WORK, 5, None)
        assert is_step_complete(2, draft, HEAD_OFFICE)
        assert validation_message(2, draft, BRANCH) == "Please rate Quality of Work criterion 5 (Job Targets)"

    def test_head_office_still_needs_the_other_quality_criteria(self):
        draft = complete_draft().with_score(Category.QUALITY_OF_WORK, 3, None)
        assert not is_step_complete(2, draft, HEAD_OFFICE)

    def test_customer_service_skipped_for_head_office(self):
        draft = complete_draft(scores={Category.JOB_KNOWLEDGE: [4, 4, 4]})
        assert is_step_complete(7, draft, HEAD_OFFICE)
        assert not is_step_complete(7, draft, BRANCH)

    def test_managerial_skills_required(self):
        draft = complete_draft().with_score(Category.MANAGERIAL_SKILLS, 6, None)
        assert validation_message(8, draft, BRANCH) == \
            "Please rate Managerial Skills criterion 6 (Conflict Resolution)"

    def test_overall_assessment_always_complete(self):
        assert is_step_complete(9, EvaluationDraft(), BRANCH)
        assert is_step_complete(9, EvaluationDraft(), HEAD_OFFICE)

    @pytest.mark.parametrize("step", [0, 10])
    def test_unknown_step(self, step):
        with pytest.raises(ValueError):
            check_step(step, EvaluationDraft(), BRANCH)


class TestSubmissionGate:
    def test_complete_draft_has_no_incomplete_step(self):
        assert first_incomplete_step(complete_draft(), BRANCH) is None

    def test_first_gap_wins(self):
        draft = (complete_draft()
                 .with_score(Category.TEAMWORK, 1, None)
                 .with_score(Category.ADAPTABILITY, 3, None))
        issue = first_incomplete_step(draft, BRANCH)
        assert issue.step == 3

    def test_head_office_ignores_customer_service(self):
        scores = dict(complete_draft().scores)
        scores[Category.CUSTOMER_SERVICE] = ()
        draft = complete_draft(scores=scores)
        assert first_incomplete_step(draft, HEAD_OFFICE) is None
        assert first_incomplete_step(draft, BRANCH).step == 7


class TestNavigation:
    def test_branch_path_visits_every_step(self):
        assert step_path(False) == [1, 2, 3, 4, 5, 6, 7, 8, 9]

    def test_head_office_path_skips_customer_service(self):
        assert step_path(True) == [1, 2, 3, 4, 5, 6, 8, 9]

    def test_head_office_jumps_over_step_seven(self):
        assert next_step(6, FORWARD, True) == 8
        assert next_step(8, BACKWARD, True) == 6

    def test_branch_moves_one_step(self):
        assert next_step(6, FORWARD, False) == 7
        assert next_step(8, BACKWARD, False) == 7

    def test_clamped_to_first_and_last(self):
        assert next_step(1, BACKWARD, False) == 1
        assert next_step(9, FORWARD, True) == 9

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            next_step(3, "sideways", False)


class TestDraft:
    def test_edits_return_new_drafts(self):
        draft = EvaluationDraft()
        rated = draft.with_score(Category.TEAMWORK, 1, 5)
        assert draft.score(Category.TEAMWORK, 1) is None
        assert rated.score(Category.TEAMWORK, 1) == 5

    def test_rejects_invalid_score(self):
        with pytest.raises(InvalidScoreValue):
            EvaluationDraft().with_score(Category.TEAMWORK, 1, 6)

    def test_rejects_unknown_criterion(self):
        with pytest.raises(IndexError):
            EvaluationDraft().with_score(Category.TEAMWORK, 4, 3)

    def test_scores_validated_on_construction(self):
        with pytest.raises(InvalidScoreValue):
            EvaluationDraft(scores={Category.TEAMWORK: ["4", 4, 4]})

    def test_dict_round_trip(self):
        draft = complete_draft().with_comment(Category.TEAMWORK, 2, "Helps new hires")
        data = draft.to_dict()
        assert data["coverage_from"] == "2024-01-01"
        assert data["scores"]["TEAMWORK"] == [4, 4, 4]
        assert EvaluationDraft.from_dict(data) == draft

    def test_head_office_overall_drops_customer_service(self):
        scores = dict(complete_draft(score=4).scores)
        scores[Category.CUSTOMER_SERVICE] = [1, 1, 1, 1, 1]
        draft = complete_draft(scores=scores)
        assert str(draft.overall_score(is_head_office=True)) == "4.0"
        # 4 × 0.70 + 1 × 0.30
        assert str(draft.overall_score(is_head_office=False)) == "3.1"
