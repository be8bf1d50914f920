import uuid
from django.db import models
from django.utils import timezone
from django.conf import settings

# ── Lookup / Enum helpers ────────────────────────────────────────────────

class Category(models.TextChoices):
    JOB_KNOWLEDGE     = "JOB_KNOWLEDGE",     "Job Knowledge"
    QUALITY_OF_WORK   = "QUALITY_OF_WORK",   "Quality of Work"
    ADAPTABILITY      = "ADAPTABILITY",      "Adaptability"
    TEAMWORK          = "TEAMWORK",          "Teamwork"
    RELIABILITY       = "RELIABILITY",       "Reliability"
    ETHICAL_BEHAVIOR  = "ETHICAL_BEHAVIOR",  "Ethical & Professional Behavior"
    CUSTOMER_SERVICE  = "CUSTOMER_SERVICE",  "Customer Service"
    MANAGERIAL_SKILLS = "MANAGERIAL_SKILLS", "Managerial Skills"

class EvalStatus(models.TextChoices):
    DRAFT     = "DRAFT",     "Draft"
    SUBMITTED = "SUBMITTED", "Submitted"
    APPROVED  = "APPROVED",  "Approved"

class ProbationaryReview(models.TextChoices):
    NONE     = "",  "None"
    MONTH_3  = "3", "3 months"
    MONTH_5  = "5", "5 months"

class RegularReview(models.TextChoices):
    NONE = "",   "None"
    Q1   = "Q1", "Q1"
    Q2   = "Q2", "Q2"
    Q3   = "Q3", "Q3"
    Q4   = "Q4", "Q4"


# ── Evaluations & related ---------------------------------------------------
class Evaluation(models.Model):
    evaluation_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee      = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="evaluations")
    evaluator     = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="authored_evaluations")
    status        = models.CharField(max_length=10, choices=EvalStatus.choices, default=EvalStatus.SUBMITTED)
    overall_score = models.DecimalField(max_digits=3, decimal_places=1, default=0)
    is_head_office = models.BooleanField(default=False)   # employee's unit at submission time

    # Step 1 administrative fields (snapshot of the draft)
    employee_name  = models.CharField(max_length=120)
    employee_code  = models.CharField(max_length=60)
    position       = models.CharField(max_length=120)
    department     = models.CharField(max_length=120)
    branch         = models.CharField(max_length=120)
    supervisor     = models.CharField(max_length=120)
    hire_date      = models.DateField(null=True, blank=True)
    coverage_from  = models.DateField()
    coverage_to    = models.DateField()
    review_type_probationary     = models.CharField(max_length=1, choices=ProbationaryReview.choices, blank=True, default="")
    review_type_regular          = models.CharField(max_length=2, choices=RegularReview.choices, blank=True, default="")
    review_type_others_improvement = models.BooleanField(default=False)
    review_type_others_custom    = models.CharField(max_length=200, blank=True, default="")

    # Overall assessment (step 9)
    priority_area_1  = models.TextField(blank=True)
    priority_area_2  = models.TextField(blank=True)
    priority_area_3  = models.TextField(blank=True)
    remarks          = models.TextField(blank=True)
    overall_comments = models.TextField(blank=True)

    submitted_at  = models.DateTimeField(default=timezone.now)
    created_at    = models.DateTimeField(default=timezone.now)
    updated_at    = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-submitted_at",)

    def __str__(self):
        return f"{self.employee_name} ({self.coverage_from} – {self.coverage_to})"


class CriterionScore(models.Model):
    evaluation  = models.ForeignKey(Evaluation, on_delete=models.CASCADE, related_name="criterion_scores")
    category    = models.CharField(max_length=20, choices=Category.choices)
    index       = models.PositiveSmallIntegerField()           # 1-based slot within the category
    score       = models.PositiveSmallIntegerField(null=True, blank=True)  # 1..5, null = not rated
    comment     = models.TextField(blank=True)

    class Meta:
        ordering = ("category", "index")
        constraints = [
            models.UniqueConstraint(fields=["evaluation", "category", "index"], name="uniq_criterion_per_evaluation")
        ]


class EvaluationApproval(models.Model):
    approval_id  = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    evaluation   = models.OneToOneField(Evaluation, on_delete=models.CASCADE, related_name="approval")
    employee     = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="approvals")
    approved_at  = models.DateTimeField(default=timezone.now)
    employee_signature = models.TextField()        # opaque base64 image
    employee_name      = models.CharField(max_length=120)
    comments     = models.TextField(blank=True)


class EvaluationDraftRecord(models.Model):
    draft_id   = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    evaluator  = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="evaluation_drafts")
    employee   = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="pending_drafts")
    payload    = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["evaluator", "employee"], name="uniq_draft_per_evaluator_employee")
        ]
