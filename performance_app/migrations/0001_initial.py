import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Evaluation",
            fields=[
                ("evaluation_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("status", models.CharField(choices=[("DRAFT", "Draft"), ("SUBMITTED", "Submitted"), ("APPROVED", "Approved")], default="SUBMITTED", max_length=10)),
                ("overall_score", models.DecimalField(decimal_places=1, default=0, max_digits=3)),
                ("is_head_office", models.BooleanField(default=False)),
                ("employee_name", models.CharField(max_length=120)),
                ("employee_code", models.CharField(max_length=60)),
                ("position", models.CharField(max_length=120)),
                ("department", models.CharField(max_length=120)),
                ("branch", models.CharField(max_length=120)),
                ("supervisor", models.CharField(max_length=120)),
                ("hire_date", models.DateField(blank=True, null=True)),
                ("coverage_from", models.DateField()),
                ("coverage_to", models.DateField()),
                ("review_type_probationary", models.CharField(blank=True, choices=[("", "None"), ("3", "3 months"), ("5", "5 months")], default="", max_length=1)),
                ("review_type_regular", models.CharField(blank=True, choices=[("", "None"), ("Q1", "Q1"), ("Q2", "Q2"), ("Q3", "Q3"), ("Q4", "Q4")], default="", max_length=2)),
                ("review_type_others_improvement", models.BooleanField(default=False)),
                ("review_type_others_custom", models.CharField(blank=True, default="", max_length=200)),
                ("priority_area_1", models.TextField(blank=True)),
                ("priority_area_2", models.TextField(blank=True)),
                ("priority_area_3", models.TextField(blank=True)),
                ("remarks", models.TextField(blank=True)),
                ("overall_comments", models.TextField(blank=True)),
                ("submitted_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="evaluations", to=settings.AUTH_USER_MODEL)),
                ("evaluator", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="authored_evaluations", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ("-submitted_at",),
            },
        ),
        migrations.CreateModel(
            name="CriterionScore",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("category", models.CharField(choices=[("JOB_KNOWLEDGE", "Job Knowledge"), ("QUALITY_OF_WORK", "Quality of Work"), ("ADAPTABILITY", "Adaptability"), ("TEAMWORK", "Teamwork"), ("RELIABILITY", "Reliability"), ("ETHICAL_BEHAVIOR", "Ethical & Professional Behavior"), ("CUSTOMER_SERVICE", "Customer Service"), ("MANAGERIAL_SKILLS", "Managerial Skills")], max_length=20)),
                ("index", models.PositiveSmallIntegerField()),
                ("score", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("comment", models.TextField(blank=True)),
                ("evaluation", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="criterion_scores", to="performance_app.evaluation")),
            ],
            options={
                "ordering": ("category", "index"),
            },
        ),
        migrations.CreateModel(
            name="EvaluationApproval",
            fields=[
                ("approval_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("approved_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("employee_signature", models.TextField()),
                ("employee_name", models.CharField(max_length=120)),
                ("comments", models.TextField(blank=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="approvals", to=settings.AUTH_USER_MODEL)),
                ("evaluation", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="approval", to="performance_app.evaluation")),
            ],
        ),
        migrations.CreateModel(
            name="EvaluationDraftRecord",
            fields=[
                ("draft_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("payload", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="pending_drafts", to=settings.AUTH_USER_MODEL)),
                ("evaluator", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="evaluation_drafts", to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.AddConstraint(
            model_name="criterionscore",
            constraint=models.UniqueConstraint(fields=("evaluation", "category", "index"), name="uniq_criterion_per_evaluation"),
        ),
        migrations.AddConstraint(
            model_name="evaluationdraftrecord",
            constraint=models.UniqueConstraint(fields=("evaluator", "employee"), name="uniq_draft_per_evaluator_employee"),
        ),
    ]
