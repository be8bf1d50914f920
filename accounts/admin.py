from django.contrib import admin
from .models import User
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

# ───────────────────────────────
#  User
# ───────────────────────────────
@admin.register(User)
class UserAdmin(BaseUserAdmin):
     list_display = ("username", "email", "name", "role", "branch", "is_staff", "date_joined")
     list_filter  = ("role", "branch", "is_staff", "is_superuser", "is_active")
     search_fields = ("username", "email", "name", "employee_code", "branch")
     ordering = ("-date_joined",)
     fieldsets = (
            (None, {"fields": ("username", "email", "password")}),
            ("Personal info", {"fields": ("first_name", "last_name", "name", "employee_code", "hire_date")}),
            ("Organization",  {"fields": ("position", "department", "branch")}),
            ("Permissions",   {"fields": ("is_active", "is_staff", "is_superuser", "role", "groups", "user_permissions")}),
            ("Dates",         {"fields": ("last_login", "date_joined")}),
        )
     add_fieldsets = (
            (None, {"classes": ("wide",), "fields": ("username", "email", "name", "role", "branch", "password1", "password2")}),
        )
