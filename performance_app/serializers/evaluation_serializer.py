from rest_framework import serializers

from performance_app.models import Evaluation, EvalStatus, Category
from performance_app.utils import LabelChoiceField
from performance_app.services.evaluation_math import stored_category_averages
from performance_app.services.quarters import quarter_for
from performance_app.services.ratings import criterion_title
from performance_app.services.scoring import criterion_label, rating_label, score_breakdown, verdict


class ApprovalSummarySerializer(serializers.Serializer):
    """Approval as shown on the evaluation; the signature stays on /approval/."""
    evaluation_id      = serializers.UUIDField(read_only=True)
    employee_id        = serializers.UUIDField(read_only=True)
    approved_at        = serializers.DateTimeField(read_only=True)
    employee_name      = serializers.CharField(read_only=True)
    comments           = serializers.CharField(read_only=True)


class ApprovalRecordSerializer(ApprovalSummarySerializer):
    """Works for both EvaluationApproval rows and ApprovalRecord values."""
    employee_signature = serializers.CharField(read_only=True)


class ApprovalRequestSerializer(serializers.Serializer):
    # blank is accepted here; the approval service answers it with a MissingSignature message
    employee_signature = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    employee_name      = serializers.CharField(required=False, allow_blank=True, max_length=120)
    comments           = serializers.CharField(required=False, allow_blank=True, default="")


class EvaluationSerializer(serializers.ModelSerializer):
    """
    • Read-only view of a submitted evaluation.
    • Criteria are grouped per category with titles and labels.
    • Approval (without the signature) is included once the employee has signed.
    """
    employee_id  = serializers.UUIDField(source="employee.user_id", read_only=True)
    evaluator_id = serializers.UUIDField(source="evaluator.user_id", read_only=True, default=None)
    evaluator    = serializers.CharField(source="evaluator.display_name", read_only=True, default=None)
    status       = LabelChoiceField(choices=EvalStatus.choices, read_only=True)
    overall_score = serializers.DecimalField(max_digits=3, decimal_places=1, read_only=True)

    rating     = serializers.SerializerMethodField()
    verdict    = serializers.SerializerMethodField()
    quarter    = serializers.SerializerMethodField()
    criteria   = serializers.SerializerMethodField()
    breakdown  = serializers.SerializerMethodField()
    approval   = serializers.SerializerMethodField()

    class Meta:
        model = Evaluation
        fields = [
            "evaluation_id",
            "employee_id", "employee_name", "employee_code",
            "position", "department", "branch", "supervisor",
            "evaluator_id", "evaluator",
            "hire_date", "coverage_from", "coverage_to",
            "review_type_probationary", "review_type_regular",
            "review_type_others_improvement", "review_type_others_custom",
            "priority_area_1", "priority_area_2", "priority_area_3",
            "remarks", "overall_comments",
            "is_head_office",
            "status", "overall_score", "rating", "verdict", "quarter",
            "criteria", "breakdown", "approval",
            "submitted_at", "updated_at",
        ]
        read_only_fields = fields

    def get_rating(self, obj):
        return rating_label(obj.overall_score)

    def get_verdict(self, obj):
        return verdict(obj.overall_score)

    def get_quarter(self, obj):
        return quarter_for(obj)

    def get_criteria(self, obj):
        grouped = {}
        for row in obj.criterion_scores.all():
            category = Category(row.category)
            grouped.setdefault(category.value, []).append({
                "index": row.index,
                "title": criterion_title(category, row.index),
                "score": row.score,
                "rating": criterion_label(row.score),
                "comment": row.comment,
            })
        return grouped

    def get_breakdown(self, obj):
        return score_breakdown(stored_category_averages(obj))

    def get_approval(self, obj):
        approval = getattr(obj, "approval", None)
        if approval is None:
            return None
        return ApprovalSummarySerializer(approval).data
