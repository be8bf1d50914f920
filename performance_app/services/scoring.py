from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Mapping, Optional

from performance_app.models import Category
from performance_app.services.ratings import validate_score

def _d(x) -> Decimal:
    """Convert to Decimal safely."""
    return Decimal(str(x))

TENTH = Decimal('0.1')
PASSING_SCORE = Decimal('3.0')

# Review-results weights. MANAGERIAL_SKILLS is scored and shown but is not part of the overall.
CATEGORY_WEIGHTS: Dict[str, Decimal] = {
    Category.JOB_KNOWLEDGE:    Decimal('0.20'),
    Category.QUALITY_OF_WORK:  Decimal('0.20'),
    Category.ADAPTABILITY:     Decimal('0.10'),
    Category.TEAMWORK:         Decimal('0.10'),
    Category.RELIABILITY:      Decimal('0.05'),
    Category.ETHICAL_BEHAVIOR: Decimal('0.05'),
    Category.CUSTOMER_SERVICE: Decimal('0.30'),
}

# Only CUSTOMER_SERVICE may be left out (head office evaluations).
OPTIONAL_CATEGORIES = {Category.CUSTOMER_SERVICE}

RATING_LABELS = (
    (Decimal('4.5'), "Outstanding"),
    (Decimal('4.0'), "Exceeds Expectations"),
    (Decimal('3.5'), "Meets Expectations"),
    (Decimal('2.5'), "Needs Improvement"),
)
LOWEST_LABEL = "Unsatisfactory"

CRITERION_LABELS = {
    5: "Outstanding",
    4: "Exceeds Expectations",
    3: "Meets Expectations",
    2: "Needs Improvement",
    1: "Unsatisfactory",
}


def round_score(x) -> Decimal:
    """One decimal, half-up (4.25 -> 4.3)."""
    return _d(x).quantize(TENTH, rounding=ROUND_HALF_UP)


def average(scores: Iterable[Optional[int]]) -> Decimal:
    """
    Mean of the rated scores of one category.

    None and 0 both mean "not rated" and are ignored. Nothing rated -> 0.
    The result is not rounded; rounding only happens on the overall score.
    """
    rated = [s for s in (validate_score(v) for v in scores) if s is not None]
    if not rated:
        return Decimal('0')
    return _d(sum(rated)) / _d(len(rated))


def category_averages(scores_by_category: Mapping[str, Iterable[Optional[int]]]) -> Dict[str, Decimal]:
    return {Category(category): average(scores) for category, scores in scores_by_category.items()}


def _weighted_categories(categories: Iterable[str]) -> list:
    given = {Category(c) for c in categories}
    # CATEGORY_WEIGHTS order, not the caller's
    present = [c for c in CATEGORY_WEIGHTS if c in given]
    missing = set(CATEGORY_WEIGHTS) - set(present) - OPTIONAL_CATEGORIES
    if missing:
        names = ", ".join(sorted(Category(c).label for c in missing))
        raise ValueError(f"Missing category averages: {names}")
    return present


def weights_for(categories: Iterable[str]) -> Dict[str, Decimal]:
    """
    Weights for the weighted categories present in `categories`, rescaled to sum to 1.

    Raises ValueError when a mandatory weighted category is missing.
    """
    present = _weighted_categories(categories)
    total = sum((CATEGORY_WEIGHTS[c] for c in present), Decimal('0'))
    return {c: CATEGORY_WEIGHTS[c] / total for c in present}


def overall_score(category_averages: Mapping[str, Decimal]) -> Decimal:
    """
    Weighted overall score, 0..5 rounded to one decimal.

    Formula (review results):
        JK×0.20 + QW×0.20 + AD×0.10 + TW×0.10 + RL×0.05 + EB×0.05 + CS×0.30

    Leaving CUSTOMER_SERVICE out of the mapping (head office) spreads its
    share proportionally over the six remaining categories. Entries for
    MANAGERIAL_SKILLS are ignored. Nothing rated -> 0.0.
    """
    present = _weighted_categories(category_averages.keys())
    averages = {Category(c): _d(v) for c, v in category_averages.items()}

    weighted_sum = sum((averages[c] * CATEGORY_WEIGHTS[c] for c in present), Decimal('0'))
    weight_total = sum((CATEGORY_WEIGHTS[c] for c in present), Decimal('0'))
    return round_score(weighted_sum / weight_total)


def rating_label(score) -> str:
    score = _d(score)
    for threshold, label in RATING_LABELS:
        if score >= threshold:
            return label
    return LOWEST_LABEL


def criterion_label(score: Optional[int]) -> str:
    value = validate_score(score)
    if value is None:
        return "Not Rated"
    return CRITERION_LABELS[value]


def passes(score) -> bool:
    return _d(score) >= PASSING_SCORE


def verdict(score) -> str:
    return "PASS" if passes(score) else "FAIL"


def score_breakdown(category_averages: Mapping[str, Decimal]) -> dict:
    """
    Review-results table: one row per category plus the overall line.

    Rows keep the display order of Category; MANAGERIAL_SKILLS (when present)
    is listed with weight 0.
    """
    weights = weights_for(category_averages.keys())
    averages = {Category(c): _d(v) for c, v in category_averages.items()}

    rows = []
    for category in Category:
        if category not in averages:
            continue
        avg = averages[category]
        weight = weights.get(category, Decimal('0'))
        rows.append({
            'category': category.value,
            'label': category.label,
            'average': float(avg.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)),
            'weight': float(weight.quantize(Decimal('0.0001'), rounding=ROUND_HALF_UP)),
            'weighted': float((avg * weight).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)),
            'rating': rating_label(avg),
        })

    overall = overall_score(category_averages)
    return {
        'categories': rows,
        'overall_score': float(overall),
        'rating': rating_label(overall),
        'verdict': verdict(overall),
    }
