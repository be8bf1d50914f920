from django.contrib import admin
from .import models as m


# ───────────────────────────────
#  Evaluation
# ───────────────────────────────
class CriterionScoreInline(admin.TabularInline):
    model = m.CriterionScore
    extra = 0
    fields = ("category", "index", "score", "comment")
    ordering = ("category", "index")

    def has_add_permission(self, request, obj=None):
        return obj is not None and obj.status == m.EvalStatus.DRAFT

    def has_change_permission(self, request, obj=None):
        return obj is not None and obj.status == m.EvalStatus.DRAFT

    def has_delete_permission(self, request, obj=None):
        return False


class EvaluationApprovalInline(admin.StackedInline):
    model = m.EvaluationApproval
    fk_name = "evaluation"
    extra = 0
    can_delete = False
    readonly_fields = ("employee", "employee_name", "approved_at", "comments")
    exclude = ("employee_signature",)

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(m.Evaluation)
class EvaluationAdmin(admin.ModelAdmin):
    list_display = ("employee_name", "branch", "evaluator", "status", "overall_score", "is_head_office", "submitted_at")
    list_filter  = ("status", "is_head_office", "review_type_regular", "branch")
    search_fields = ("employee_name", "employee_code", "employee__email", "evaluator__name")
    readonly_fields = ("overall_score", "submitted_at", "created_at", "updated_at")
    autocomplete_fields = ["employee", "evaluator"]
    inlines = [CriterionScoreInline, EvaluationApprovalInline]
    actions = ["recompute_score"]

    @admin.action(description="Recompute overall score from criterion scores")
    def recompute_score(self, request, queryset):
        from performance_app.services.evaluation_math import calculate_evaluation_score
        for evaluation in queryset.prefetch_related("criterion_scores"):
            calculate_evaluation_score(evaluation, persist=True)
        self.message_user(request, f"Recomputed {queryset.count()} evaluations.")


# ───────────────────────────────
#  Approvals (read-only)
# ───────────────────────────────
@admin.register(m.EvaluationApproval)
class EvaluationApprovalAdmin(admin.ModelAdmin):
    list_display = ("evaluation", "employee_name", "approved_at")
    search_fields = ("employee_name", "employee__email")
    readonly_fields = ("evaluation", "employee", "employee_name", "employee_signature", "approved_at", "comments")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


# ───────────────────────────────
#  Drafts
# ───────────────────────────────
@admin.register(m.EvaluationDraftRecord)
class EvaluationDraftRecordAdmin(admin.ModelAdmin):
    list_display = ("employee", "evaluator", "updated_at")
    search_fields = ("employee__name", "evaluator__name")
    autocomplete_fields = ["employee", "evaluator"]
