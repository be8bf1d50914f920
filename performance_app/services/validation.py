"""
Evaluation wizard: draft value object, per-step completeness rules and step routing.

Everything here is pure. The wizard controller (services/wizard.py) calls
these functions after every edit, so they must stay cheap and side-effect free.
"""
from dataclasses import dataclass, field, fields, replace
from datetime import date
from typing import Dict, List, Mapping, Optional, Tuple

from performance_app.models import Category
from performance_app.exceptions import IncompleteStep
from performance_app.services.ratings import (
    CATEGORY_SLOTS, criterion_title, empty_scores, normalize_category_scores, validate_score,
)
from performance_app.services import scoring

FIRST_STEP = 1
LAST_STEP = 9
CUSTOMER_SERVICE_STEP = 7
OVERALL_ASSESSMENT_STEP = 9

STEP_TITLES = {
    1: "Employee Information / Job Knowledge",
    2: "Quality of Work",
    3: "Adaptability",
    4: "Teamwork",
    5: "Reliability",
    6: "Ethical & Professional Behavior",
    7: "Customer Service",
    8: "Managerial Skills",
    9: "Overall Assessment",
}

STEP_CATEGORIES = {
    1: Category.JOB_KNOWLEDGE,
    2: Category.QUALITY_OF_WORK,
    3: Category.ADAPTABILITY,
    4: Category.TEAMWORK,
    5: Category.RELIABILITY,
    6: Category.ETHICAL_BEHAVIOR,
    7: Category.CUSTOMER_SERVICE,
    8: Category.MANAGERIAL_SKILLS,
}

FORWARD = "next"
BACKWARD = "previous"

# Step 1 text fields, in the order they are checked.
REQUIRED_TEXT_FIELDS = (
    ("employee_name", "Please enter the employee's name"),
    ("employee_code", "Please enter the employee ID"),
    ("position",      "Please enter the employee's position"),
    ("department",    "Please enter the employee's department"),
    ("branch",        "Please enter the employee's branch"),
    ("supervisor",    "Please enter the immediate supervisor's name"),
)


@dataclass(frozen=True)
class StepContext:
    is_head_office: bool = False


@dataclass(frozen=True)
class EvaluationDraft:
    """In-progress evaluation. Edits return a new draft; scores are validated on construction."""

    review_type_probationary: str = ""
    review_type_regular: str = ""
    review_type_others_improvement: bool = False
    review_type_others_custom: str = ""

    employee_name: str = ""
    employee_code: str = ""
    position: str = ""
    department: str = ""
    branch: str = ""
    supervisor: str = ""
    hire_date: Optional[date] = None
    coverage_from: Optional[date] = None
    coverage_to: Optional[date] = None

    priority_area_1: str = ""
    priority_area_2: str = ""
    priority_area_3: str = ""
    remarks: str = ""
    overall_comments: str = ""

    scores: Mapping[str, Tuple[Optional[int], ...]] = field(default_factory=empty_scores)
    comments: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        given = {Category(c): v for c, v in (self.scores or {}).items()}
        scores = {
            category: normalize_category_scores(category, given.get(category, ()))
            for category in CATEGORY_SLOTS
        }
        object.__setattr__(self, "scores", scores)

        notes = {}
        for category, values in (self.comments or {}).items():
            category = Category(category)
            values = tuple(str(v or "") for v in values)[:CATEGORY_SLOTS[category]]
            notes[category] = values + ("",) * (CATEGORY_SLOTS[category] - len(values))
        object.__setattr__(self, "comments", notes)

    # ── edits ────────────────────────────────────────────
    def with_score(self, category, index: int, value) -> "EvaluationDraft":
        category = Category(category)
        if not 1 <= index <= CATEGORY_SLOTS[category]:
            raise IndexError(f"{category.label} has no criterion {index}")
        values = list(self.scores[category])
        values[index - 1] = validate_score(value, field=f"{category.label} criterion {index}")
        scores = dict(self.scores)
        scores[category] = tuple(values)
        return replace(self, scores=scores)

    def with_comment(self, category, index: int, text: str) -> "EvaluationDraft":
        category = Category(category)
        if not 1 <= index <= CATEGORY_SLOTS[category]:
            raise IndexError(f"{category.label} has no criterion {index}")
        values = list(self.comments.get(category, ("",) * CATEGORY_SLOTS[category]))
        values[index - 1] = text or ""
        comments = dict(self.comments)
        comments[category] = tuple(values)
        return replace(self, comments=comments)

    def with_fields(self, **changes) -> "EvaluationDraft":
        return replace(self, **changes)

    # ── reads ────────────────────────────────────────────
    def score(self, category, index: int) -> Optional[int]:
        return self.scores[Category(category)][index - 1]

    def category_averages(self, *, is_head_office: bool = False) -> Dict[str, object]:
        averages = scoring.category_averages(self.scores)
        if is_head_office:
            averages.pop(Category.CUSTOMER_SERVICE, None)
        return averages

    def overall_score(self, *, is_head_office: bool = False):
        return scoring.overall_score(self.category_averages(is_head_office=is_head_office))

    # ── persistence ──────────────────────────────────────
    def to_dict(self) -> dict:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, date):
                value = value.isoformat()
            elif f.name in ("scores", "comments"):
                value = {str(category.value): list(v) for category, v in value.items()}
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EvaluationDraft":
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        for name in ("hire_date", "coverage_from", "coverage_to"):
            if isinstance(kwargs.get(name), str):
                kwargs[name] = date.fromisoformat(kwargs[name]) if kwargs[name] else None
        return cls(**kwargs)


# ── completeness ─────────────────────────────────────────

def _check_step_number(step: int) -> None:
    if step not in STEP_TITLES:
        raise ValueError(f"Unknown evaluation step: {step!r}")


def required_criteria(step: int, context: StepContext) -> List[int]:
    """1-based criterion slots that must be rated on `step`."""
    _check_step_number(step)
    category = STEP_CATEGORIES.get(step)
    if category is None:
        return []
    if step == CUSTOMER_SERVICE_STEP and context.is_head_office:
        return []
    slots = list(range(1, CATEGORY_SLOTS[category] + 1))
    if category == Category.QUALITY_OF_WORK and context.is_head_office:
        slots.remove(5)   # job targets are not tracked for head office staff
    return slots


def _has_review_type(draft: EvaluationDraft) -> bool:
    return bool(
        draft.review_type_probationary
        or draft.review_type_regular
        or draft.review_type_others_improvement
        or (draft.review_type_others_custom or "").strip()
    )


def _administrative_message(draft: EvaluationDraft) -> str:
    if not _has_review_type(draft):
        return "Please select at least one review type"

    for name, message in REQUIRED_TEXT_FIELDS:
        if not (getattr(draft, name) or "").strip():
            return message

    if not draft.coverage_from:
        return "Please select Performance Coverage 'From' date"
    if not draft.coverage_to:
        return "Please select Performance Coverage 'To' date"
    if draft.coverage_from >= draft.coverage_to:
        return "Performance Coverage 'From' date must be earlier than 'To' date"
    if draft.hire_date and draft.coverage_from < draft.hire_date:
        return "Performance Coverage cannot start before Date Hired"
    return ""


def check_step(step: int, draft: EvaluationDraft, context: StepContext) -> Optional[IncompleteStep]:
    """First unmet requirement of `step`, or None when the step is complete."""
    _check_step_number(step)

    if step == FIRST_STEP:
        message = _administrative_message(draft)
        if message:
            return IncompleteStep(step, message)

    category = STEP_CATEGORIES.get(step)
    for index in required_criteria(step, context):
        if draft.score(category, index) is None:
            return IncompleteStep(
                step,
                f"Please rate {category.label} criterion {index} ({criterion_title(category, index)})",
            )
    return None


def is_step_complete(step: int, draft: EvaluationDraft, context: StepContext) -> bool:
    return check_step(step, draft, context) is None


def validation_message(step: int, draft: EvaluationDraft, context: StepContext) -> str:
    incomplete = check_step(step, draft, context)
    return incomplete.message if incomplete else ""


def first_incomplete_step(draft: EvaluationDraft, context: StepContext) -> Optional[IncompleteStep]:
    for step in step_path(context.is_head_office):
        incomplete = check_step(step, draft, context)
        if incomplete:
            return incomplete
    return None


# ── navigation ───────────────────────────────────────────

def step_path(is_head_office: bool) -> List[int]:
    return [
        step for step in range(FIRST_STEP, LAST_STEP + 1)
        if not (is_head_office and step == CUSTOMER_SERVICE_STEP)
    ]


def next_step(current: int, direction: str, is_head_office: bool) -> int:
    """
    Step reached from `current` when moving `direction` ("next" / "previous").

    Head office evaluations never land on Customer Service: 6 -> 8 forward,
    8 -> 6 backward. The result is clamped to the first / last step.
    """
    _check_step_number(current)
    if direction == FORWARD:
        target = current + 1
        if is_head_office and target == CUSTOMER_SERVICE_STEP:
            target += 1
    elif direction == BACKWARD:
        target = current - 1
        if is_head_office and target == CUSTOMER_SERVICE_STEP:
            target -= 1
    else:
        raise ValueError(f"Unknown direction: {direction!r}")
    return max(FIRST_STEP, min(LAST_STEP, target))
