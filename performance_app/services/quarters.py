from collections import OrderedDict
from decimal import Decimal, ROUND_HALF_UP

from performance_app.services.scoring import rating_label

CENT = Decimal('0.01')


def quarter_from_date(value) -> str:
    if value is None:
        return "Unknown"
    return f"Q{(value.month - 1) // 3 + 1} {value.year}"


def quarter_for(evaluation) -> str:
    """
    Reporting quarter of an evaluation.

    The regular review type picked on step 1 wins (year taken from the
    coverage start); otherwise the submission date decides.
    """
    submitted = getattr(evaluation, "submitted_at", None)
    if evaluation.review_type_regular:
        source = evaluation.coverage_from or submitted
        if source is not None:
            return f"{evaluation.review_type_regular} {source.year}"
    return quarter_from_date(submitted)


def _mean(total: Decimal, count: int) -> float:
    if not count:
        return 0.0
    return float((total / Decimal(count)).quantize(CENT, rounding=ROUND_HALF_UP))


def summarize(evaluations) -> dict:
    """Count / average of overall scores, overall and per quarter (oldest quarter first)."""
    total = Decimal('0')
    count = 0
    per_quarter = {}
    for evaluation in evaluations:
        score = Decimal(evaluation.overall_score or 0)
        total += score
        count += 1
        bucket = per_quarter.setdefault(quarter_for(evaluation), [Decimal('0'), 0])
        bucket[0] += score
        bucket[1] += 1

    def _sort_key(label):
        if label == "Unknown":
            return (1, 0, 0)
        quarter, year = label.split()
        return (0, int(year), int(quarter[1:]))

    quarters = OrderedDict()
    for label in sorted(per_quarter, key=_sort_key):
        q_total, q_count = per_quarter[label]
        average = _mean(q_total, q_count)
        quarters[label] = {"count": q_count, "average": average, "rating": rating_label(average)}

    average = _mean(total, count)
    return {
        "count": count,
        "sum": float(total),
        "average": average,
        "rating": rating_label(average) if count else None,
        "quarters": quarters,
    }
