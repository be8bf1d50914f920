import logging
from datetime import date

from django.db.models import Q
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, mixins, status, filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.models import Role
from performance_app.exceptions import AlreadyApproved, MissingSignature
from performance_app.filters import EvaluationFilter
from performance_app.models import Evaluation, EvalStatus
from performance_app.permissions import IsAdmin, IsHR, IsEvaluatedEmployee
from performance_app.serializers.evaluation_serializer import (
    ApprovalRecordSerializer, ApprovalRequestSerializer, EvaluationSerializer,
)
from performance_app.services.approval import ApprovalStateMachine
from performance_app.services.quarters import summarize
from performance_app.services.storage import EvaluationStorage
from performance_app.utils import LabelChoiceField

logger = logging.getLogger(__name__)


class EvaluationViewSet(mixins.DestroyModelMixin, viewsets.ReadOnlyModelViewSet):
    """
    Submitted evaluations. Creation goes through the draft wizard
    (/api/drafts/{employee_id}/submit/), never through this endpoint.

    Permissions
    -----------
    • ADMIN / HR  → read everything, may delete.
    • EVALUATOR   → evaluations they authored, plus their own.
    • Employee    → own evaluations.
    • Whoever an evaluation is about may approve it once, whatever their role.
    """
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    permission_classes = [IsAuthenticated]  #default fallback
    serializer_class = EvaluationSerializer
    filterset_class = EvaluationFilter
    search_fields = ["employee_name", "employee_code", "department", "branch", "position"]
    ordering_fields = ["submitted_at", "overall_score", "employee_name", "coverage_from"]

    #----dynamic permissions----
    def get_permissions(self):
        action = self.action

        # ─── DESTROY ────────────────────────────────────────────
        if action == "destroy":
            return [IsAuthenticated(), (IsAdmin | IsHR)()]

        # ─── APPROVE ────────────────────────────────────────────
        if action == "approve":
            return [IsAuthenticated(), IsEvaluatedEmployee()]

        return [IsAuthenticated()]

    # ---- queryset filtered by role ---------------------------
    def get_queryset(self):
        qs = (Evaluation.objects
              .select_related("employee", "evaluator", "approval")
              .prefetch_related("criterion_scores"))
        user = self.request.user
        if user.role in (Role.ADMIN, Role.HR):
            return qs
        if user.role == Role.EVALUATOR:
            return qs.filter(Q(evaluator=user) | Q(employee=user))
        return qs.filter(employee=user)

    def _approvals(self):
        user = self.request.user
        return ApprovalStateMachine(EvaluationStorage(user), user.user_id)

    # ---- destroy ---------------------------------------------
    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        logger.info("Evaluation %s deleted by %s", instance.pk, request.user.pk)
        self.perform_destroy(instance)
        return Response({
            "message": "Evaluation deleted successfully."
        }, status=status.HTTP_204_NO_CONTENT)

    # ---- approval --------------------------------------------
    @action(detail=True, methods=["post"], url_path="approve")
    def approve(self, request, pk=None):
        evaluation = self.get_object()
        serializer = ApprovalRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        # the stored profile signature is used unless the request brings one
        signature = data.get("employee_signature", request.user.signature)
        name = data.get("employee_name") or request.user.display_name

        result = self._approvals().approve(
            evaluation.pk, signature, name, comments=data.get("comments", ""),
        )
        if isinstance(result, MissingSignature):
            return Response({"error": result.message}, status=status.HTTP_400_BAD_REQUEST)
        if isinstance(result, AlreadyApproved):
            return Response({"error": result.message}, status=status.HTTP_409_CONFLICT)
        return Response(ApprovalRecordSerializer(result).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"], url_path="approval")
    def approval(self, request, pk=None):
        evaluation = self.get_object()
        record = self._approvals().get_approval_data(evaluation.pk)
        if record is None:
            return Response({
                "message": "This evaluation has not been approved yet."
            }, status=status.HTTP_404_NOT_FOUND)
        return Response(ApprovalRecordSerializer(record).data, status=status.HTTP_200_OK)

    # ---- summary ---------------------------------------------
    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        params = request.query_params
        emp_id = params.get("employee_id")
        status_filter = params.get("status")
        year = params.get("year")
        from_date = params.get("from")
        to_date = params.get("to")

        qs = self.get_queryset()
        if emp_id:
            qs = qs.filter(employee__user_id=emp_id)

        # Normalize and validate status using LabelChoiceField supporting labels and values
        if status_filter:
            status_field = LabelChoiceField(choices=EvalStatus.choices, required=False)
            try:
                status_value = status_field.to_internal_value(status_filter)
            except Exception:
                return Response({
                    "error": "Invalid status.",
                    "allowed_values": [choice[0] for choice in EvalStatus.choices],
                    "allowed_labels": [choice[1] for choice in EvalStatus.choices],
                }, status=status.HTTP_400_BAD_REQUEST)
            qs = qs.filter(status=status_value)

        if year:
            try:
                qs = qs.filter(coverage_from__year=int(year))
            except ValueError:
                return Response({
                    "error": "Invalid year format. Please provide a valid year (e.g., 2025)."
                }, status=status.HTTP_400_BAD_REQUEST)

        if from_date:
            try:
                start = date.fromisoformat(from_date)
            except ValueError:
                return Response({
                    "error": "Invalid 'from' date format. Use ISO format (YYYY-MM-DD)."
                }, status=status.HTTP_400_BAD_REQUEST)
            qs = qs.filter(submitted_at__date__gte=start)

        if to_date:
            try:
                end = date.fromisoformat(to_date)
            except ValueError:
                return Response({
                    "error": "Invalid 'to' date format. Use ISO format (YYYY-MM-DD)."
                }, status=status.HTTP_400_BAD_REQUEST)
            qs = qs.filter(submitted_at__date__lte=end)

        return Response(summarize(qs.order_by("submitted_at")), status=status.HTTP_200_OK)
