from typing import Dict, Iterable, Optional, Tuple

from performance_app.models import Category
from performance_app.exceptions import InvalidScoreValue

MIN_SCORE = 1
MAX_SCORE = 5
UNSET = 0

# Behavioral indicators rated on each step, in display order.
CRITERIA: Dict[str, Tuple[str, ...]] = {
    Category.JOB_KNOWLEDGE: (
        "Mastery in Core Competencies",
        "Keeps Documentation Updated",
        "Problem Solving",
    ),
    Category.QUALITY_OF_WORK: (
        "Meets Standards and Requirements",
        "Timeliness",
        "Work Output Volume",
        "Consistency in Performance",
        "Job Targets",
    ),
    Category.ADAPTABILITY: (
        "Openness to Change",
        "Flexibility in Job Role",
        "Resilience in the Face of Challenges",
    ),
    Category.TEAMWORK: (
        "Active Participation in Team Activities",
        "Promotion of a Positive Team Culture",
        "Effective Communication",
    ),
    Category.RELIABILITY: (
        "Consistent Attendance",
        "Punctuality",
        "Follows Through on Commitments",
        "Reliable Handling of Routine Tasks",
    ),
    Category.ETHICAL_BEHAVIOR: (
        "Follows Company Policies",
        "Professionalism",
        "Accountability for Mistakes",
        "Respect for Others",
    ),
    Category.CUSTOMER_SERVICE: (
        "Listening & Understanding",
        "Problem-Solving for Customers",
        "Product Knowledge for Customer Support",
        "Positive and Professional Attitude",
        "Timely Resolution of Customer Issues",
    ),
    Category.MANAGERIAL_SKILLS: (
        "Leadership",
        "Motivation",
        "Delegation",
        "Planning and Organization",
        "Performance Feedback",
        "Conflict Resolution",
    ),
}

CATEGORY_SLOTS: Dict[str, int] = {category: len(titles) for category, titles in CRITERIA.items()}


def criterion_title(category, index: int) -> str:
    """Title of the 1-based criterion slot `index` within `category`."""
    return CRITERIA[Category(category)][index - 1]


def validate_score(value, *, field=None) -> Optional[int]:
    """
    Return the score as a plain int (0 collapsed to None) or raise InvalidScoreValue.

    Only ints in [0, 5] and None are accepted. Strings are rejected on purpose:
    "3" must be converted by the input layer before it gets here.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidScoreValue(value, field=field)
    if value < UNSET or value > MAX_SCORE:
        raise InvalidScoreValue(value, field=field)
    return value or None


def is_rated(value) -> bool:
    return validate_score(value) is not None


def empty_scores() -> Dict[str, Tuple[Optional[int], ...]]:
    return {category: (None,) * slots for category, slots in CATEGORY_SLOTS.items()}


def normalize_category_scores(category, scores: Iterable) -> Tuple[Optional[int], ...]:
    """Validate one category's slot values and pad / check them against the slot count."""
    category = Category(category)
    slots = CATEGORY_SLOTS[category]
    values = tuple(scores)
    if len(values) > slots:
        raise InvalidScoreValue(values, field=f"{category.label} ({slots} criteria)")
    values = values + (None,) * (slots - len(values))
    return tuple(
        validate_score(v, field=f"{category.label} criterion {i}")
        for i, v in enumerate(values, start=1)
    )
