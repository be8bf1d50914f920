from rest_framework.permissions import BasePermission, SAFE_METHODS
from accounts.models import Role


class IsHR(BasePermission):
    def has_permission(self, request, view):
        return request.user.role == Role.HR

class IsAdmin(BasePermission):
    def has_permission(self, request, view):
        return request.user.role == Role.ADMIN

class IsEvaluator(BasePermission):
    def has_permission(self, request, view):
        return request.user.role == Role.EVALUATOR


class IsEvaluatedEmployee(BasePermission):
    """
    Only the employee an evaluation is about may acknowledge it.
    - SAFE methods → handled by the queryset scoping of the view.
    - Mutations    → owner only.
    """
    message = "Only the evaluated employee can approve this evaluation."

    def has_permission(self, request, view):
        return request.user and request.user.is_authenticated

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        return obj.employee_id == request.user.user_id
