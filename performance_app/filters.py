import django_filters as filters
from performance_app.models import Evaluation, EvalStatus


class EvaluationFilter(filters.FilterSet):
    # expose nice query params…
    employee_id  = filters.UUIDFilter(field_name="employee__user_id", lookup_expr="exact")
    evaluator_id = filters.UUIDFilter(field_name="evaluator__user_id", lookup_expr="exact")
    status       = filters.ChoiceFilter(field_name="status", choices=EvalStatus.choices)  # use keys e.g. APPROVED
    year         = filters.NumberFilter(field_name="coverage_from", lookup_expr="year")
    branch       = filters.CharFilter(field_name="branch", lookup_expr="iexact")
    min_score    = filters.NumberFilter(field_name="overall_score", lookup_expr="gte")
    max_score    = filters.NumberFilter(field_name="overall_score", lookup_expr="lte")

    class Meta:
        model = Evaluation
        fields = ["employee_id", "evaluator_id", "status", "year", "branch", "min_score", "max_score"]
