from rest_framework import serializers

from performance_app.models import Category, ProbationaryReview, RegularReview
from performance_app.services.ratings import CATEGORY_SLOTS
from performance_app.services.scoring import rating_label
from performance_app.services.validation import EvaluationDraft, LAST_STEP, FIRST_STEP
from performance_app.utils import LabelChoiceField, ScoreField


class EvaluationDraftSerializer(serializers.Serializer):
    """
    Wizard form <-> EvaluationDraft.

    Input accepts partial forms (every field optional); `scores` / `comments`
    are keyed by category value or label, one list entry per criterion.
    """
    review_type_probationary       = LabelChoiceField(choices=ProbationaryReview.choices, required=False, allow_blank=True)
    review_type_regular            = LabelChoiceField(choices=RegularReview.choices, required=False, allow_blank=True)
    review_type_others_improvement = serializers.BooleanField(required=False)
    review_type_others_custom      = serializers.CharField(required=False, allow_blank=True, max_length=200)

    employee_name = serializers.CharField(required=False, allow_blank=True, max_length=120)
    employee_code = serializers.CharField(required=False, allow_blank=True, max_length=60)
    position      = serializers.CharField(required=False, allow_blank=True, max_length=120)
    department    = serializers.CharField(required=False, allow_blank=True, max_length=120)
    branch        = serializers.CharField(required=False, allow_blank=True, max_length=120)
    supervisor    = serializers.CharField(required=False, allow_blank=True, max_length=120)
    hire_date     = serializers.DateField(required=False, allow_null=True)
    coverage_from = serializers.DateField(required=False, allow_null=True)
    coverage_to   = serializers.DateField(required=False, allow_null=True)

    priority_area_1  = serializers.CharField(required=False, allow_blank=True)
    priority_area_2  = serializers.CharField(required=False, allow_blank=True)
    priority_area_3  = serializers.CharField(required=False, allow_blank=True)
    remarks          = serializers.CharField(required=False, allow_blank=True)
    overall_comments = serializers.CharField(required=False, allow_blank=True)

    scores   = serializers.DictField(child=serializers.ListField(child=ScoreField()), required=False)
    comments = serializers.DictField(
        child=serializers.ListField(child=serializers.CharField(allow_blank=True)), required=False
    )

    def _category_keys(self, value, name):
        category_field = LabelChoiceField(choices=Category.choices)
        result = {}
        for key, entries in value.items():
            try:
                category = Category(category_field.to_internal_value(key))
            except serializers.ValidationError:
                raise serializers.ValidationError(f"Unknown category: {key}")
            if len(entries) > CATEGORY_SLOTS[category]:
                raise serializers.ValidationError(
                    f"{category.label} has {CATEGORY_SLOTS[category]} criteria, got {len(entries)} {name}"
                )
            result[category] = entries
        return result

    def validate_scores(self, value):
        return self._category_keys(value, "scores")

    def validate_comments(self, value):
        return self._category_keys(value, "comments")

    def to_draft(self, base: EvaluationDraft = None) -> EvaluationDraft:
        """Apply the validated fields on top of `base` (a blank draft by default)."""
        data = dict(self.validated_data)
        base = base or EvaluationDraft()
        if "scores" in data:
            merged = dict(base.scores)
            merged.update(data["scores"])
            data["scores"] = merged
        if "comments" in data:
            merged = dict(base.comments)
            merged.update(data["comments"])
            data["comments"] = merged
        return base.with_fields(**data)

    def to_representation(self, draft: EvaluationDraft):
        data = draft.to_dict()
        is_head_office = self.context.get("is_head_office", False)
        averages = draft.category_averages(is_head_office=is_head_office)
        data["category_averages"] = {
            category.value: float(avg) for category, avg in averages.items()
        }
        overall = draft.overall_score(is_head_office=is_head_office)
        data["overall_score"] = float(overall)
        data["rating"] = rating_label(overall)
        return data


class StepCheckSerializer(serializers.Serializer):
    step = serializers.IntegerField(min_value=FIRST_STEP, max_value=LAST_STEP)
