import pytest
from datetime import date
from uuid import uuid4
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from performance_app.models import Evaluation
from performance_app.services.ratings import CATEGORY_SLOTS
from performance_app.services.storage import EvaluationRecord, EvaluationStorage
from performance_app.services.validation import EvaluationDraft


def uniform_scores(value, **overrides):
    """Every criterion of every category set to `value`; overrides replace whole categories."""
    scores = {category: [value] * slots for category, slots in CATEGORY_SLOTS.items()}
    scores.update(overrides)
    return scores


def complete_draft(score=4, **kw):
    """A draft that passes every step for a branch (non head office) evaluation."""
    data = dict(
        review_type_regular="Q1",
        employee_name="Juan Dela Cruz",
        employee_code="EMP-001",
        position="Teller",
        department="Operations",
        branch="Branch 12",
        supervisor="Maria Santos",
        hire_date=date(2022, 6, 1),
        coverage_from=date(2024, 1, 1),
        coverage_to=date(2024, 3, 31),
        priority_area_1="Cash handling accuracy",
        scores=uniform_scores(score),
    )
    data.update(kw)
    return EvaluationDraft(**data)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def create_user(db):
    User = get_user_model()
    def _create_user(**kw):
        data = {
            "username": f"u_{uuid4().hex[:8]}",
            "email": f"{uuid4().hex[:8]}@test.local",
            "password": "pass12345",
            "name": "Test User",
            "role": "EMP",
            "branch": "Branch 12",
            "position": "Teller",
            "department": "Operations",
            "employee_code": f"EMP-{uuid4().hex[:4]}",
            "hire_date": date(2022, 6, 1),
        }
        data.update(kw)
        return User.objects.create_user(**data)
    return _create_user


@pytest.fixture
def evaluator(create_user):
    return create_user(role="EVALUATOR", name="Maria Santos")


@pytest.fixture
def employee(create_user):
    return create_user(role="EMP", name="Juan Dela Cruz")


@pytest.fixture
def create_evaluation(db, create_user):
    def _create_evaluation(employee=None, evaluator=None, draft=None, is_head_office=False):
        employee = employee or create_user(role="EMP")
        evaluator = evaluator or create_user(role="EVALUATOR")
        record = EvaluationRecord.from_draft(
            draft or complete_draft(),
            employee_id=employee.pk,
            evaluator_id=evaluator.pk,
            is_head_office=is_head_office,
        )
        evaluation_id = EvaluationStorage(evaluator).submit_evaluation(record)
        return Evaluation.objects.get(pk=evaluation_id)
    return _create_evaluation
