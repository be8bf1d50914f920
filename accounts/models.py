from django.db import models
import uuid
from django.utils import timezone
from django.contrib.auth.models import AbstractUser

from accounts.branches import is_head_office_unit


class Role(models.TextChoices):
    ADMIN     = "ADMIN",     "Admin"
    HR        = "HR",        "HR"
    EVALUATOR = "EVALUATOR", "Evaluator"
    EMP       = "EMP",       "Employee"


class User(AbstractUser):
    user_id    = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name       = models.CharField(max_length=120)
    email      = models.EmailField(unique=True)
    role       = models.CharField(max_length=10, choices=Role.choices, default=Role.EMP)
    position   = models.CharField(max_length=120, blank=True)
    department = models.CharField(max_length=120, blank=True)
    branch     = models.CharField(max_length=120, blank=True)   # e.g. "HO", "Branch 12"
    employee_code = models.CharField(max_length=60, blank=True)
    hire_date  = models.DateField(null=True, blank=True)
    signature  = models.TextField(blank=True)                   # base64 image, managed by the profile UI
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name or self.get_full_name() or self.username

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.username

    @property
    def is_head_office(self):
        return is_head_office_unit(self.branch)
