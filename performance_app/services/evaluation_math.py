from performance_app.models import Evaluation, Category
from performance_app.services.scoring import category_averages, overall_score
from decimal import Decimal


def stored_category_averages(evaluation: Evaluation) -> dict:
    """
    Category averages rebuilt from the evaluation's CriterionScore rows.

    Customer Service is dropped for head office evaluations, matching what
    was used when the evaluation was submitted.
    """
    grouped = {category: [] for category in Category}
    for row in evaluation.criterion_scores.all():
        grouped[Category(row.category)].append(row.score)

    averages = category_averages(grouped)
    if evaluation.is_head_office:
        averages.pop(Category.CUSTOMER_SERVICE, None)
    return averages


def calculate_evaluation_score(
    evaluation: Evaluation,
    *,
    persist: bool = False
) -> Decimal:
    """
    Calculate the weighted overall score of a stored evaluation.

    Formula:
    Overall = Σ category average × category weight  (one decimal, half-up)

    Note: the category averages themselves are never rounded, so recomputing
    a stored evaluation reproduces the submitted value exactly.
    """
    score = overall_score(stored_category_averages(evaluation))

    if persist and score != evaluation.overall_score:
        Evaluation.objects.filter(pk=evaluation.pk).update(overall_score=score)
        evaluation.overall_score = score

    return score
