import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from performance_app.exceptions import IncompleteStep
from performance_app.models import Evaluation, EvaluationDraftRecord
from performance_app.permissions import IsAdmin, IsHR, IsEvaluator
from performance_app.serializers.draft_serializer import EvaluationDraftSerializer, StepCheckSerializer
from performance_app.serializers.evaluation_serializer import EvaluationSerializer
from performance_app.services.validation import (
    BACKWARD, FORWARD, STEP_TITLES, EvaluationDraft, check_step, next_step, step_path,
)
from performance_app.services.wizard import EvaluationWizard

logger = logging.getLogger(__name__)
User = get_user_model()


class EvaluationDraftViewSet(viewsets.ViewSet):
    """
    Wizard state of the evaluations the current user is filling in.

    Permissions
    -----------
    • EVALUATOR / HR / ADMIN → own drafts only (keyed by the evaluated employee).
    • Employee               → no access.
    """
    lookup_field = "employee_id"
    lookup_value_regex = "[0-9a-fA-F-]{32,36}"

    def get_permissions(self):
        return [IsAuthenticated(), (IsEvaluator | IsHR | IsAdmin)()]

    # ---- helpers ---------------------------------------------
    def _employee(self, employee_id):
        employee = get_object_or_404(User, user_id=employee_id, is_active=True)
        if employee.pk == self.request.user.pk:
            self.permission_denied(self.request, message="You cannot evaluate yourself.")
        return employee

    def _wizard(self, employee_id):
        employee = self._employee(employee_id)
        return EvaluationWizard(self.request.user, employee, is_head_office=employee.is_head_office)

    def _draft_response(self, wizard, status_code=status.HTTP_200_OK):
        serializer = EvaluationDraftSerializer(
            wizard.draft, context={"is_head_office": wizard.context.is_head_office}
        )
        data = dict(serializer.data)
        data["employee_id"] = str(wizard.employee.pk)
        data["is_head_office"] = wizard.context.is_head_office
        data["steps"] = [
            {"step": step, "title": STEP_TITLES[step]} for step in step_path(wizard.context.is_head_office)
        ]
        return Response(data, status=status_code)

    def _apply(self, request, base: EvaluationDraft):
        serializer = EvaluationDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.to_draft(base=base)

    # ---- CRUD ------------------------------------------------
    def list(self, request):
        drafts = (EvaluationDraftRecord.objects
                  .filter(evaluator=request.user)
                  .select_related("employee")
                  .order_by("-updated_at"))
        return Response([
            {
                "employee_id": str(d.employee.user_id),
                "employee_name": d.employee.display_name,
                "updated_at": d.updated_at,
            }
            for d in drafts
        ])

    def retrieve(self, request, employee_id=None):
        return self._draft_response(self._wizard(employee_id))

    def update(self, request, employee_id=None):
        wizard = self._wizard(employee_id)
        try:
            wizard.replace_draft(self._apply(request, base=EvaluationDraft()))
        except DjangoValidationError as e:
            return Response({"error": e.messages}, status=status.HTTP_400_BAD_REQUEST)
        return self._draft_response(wizard)

    def partial_update(self, request, employee_id=None):
        wizard = self._wizard(employee_id)
        try:
            wizard.replace_draft(self._apply(request, base=wizard.draft))
        except DjangoValidationError as e:
            return Response({"error": e.messages}, status=status.HTTP_400_BAD_REQUEST)
        return self._draft_response(wizard)

    def destroy(self, request, employee_id=None):
        wizard = self._wizard(employee_id)
        wizard.storage.discard_draft(wizard.employee.pk)
        return Response({"message": "Draft discarded successfully."}, status=status.HTTP_204_NO_CONTENT)

    # ---- wizard actions --------------------------------------
    @action(detail=True, methods=["post"], url_path="validate")
    def validate_step(self, request, employee_id=None):
        """
        Re-validate one step. The body may carry unsaved form values under
        "draft"; they are checked on top of the stored draft but not saved.
        """
        check = StepCheckSerializer(data=request.data)
        check.is_valid(raise_exception=True)
        step = check.validated_data["step"]

        wizard = self._wizard(employee_id)
        draft = wizard.draft
        pending = request.data.get("draft")
        if pending:
            serializer = EvaluationDraftSerializer(data=pending)
            serializer.is_valid(raise_exception=True)
            draft = serializer.to_draft(base=draft)

        is_head_office = wizard.context.is_head_office
        issue = check_step(step, draft, wizard.context)
        return Response({
            "step": step,
            "title": STEP_TITLES[step],
            "complete": issue is None,
            "message": issue.message if issue else "",
            "next_step": next_step(step, FORWARD, is_head_office),
            "previous_step": next_step(step, BACKWARD, is_head_office),
        }, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="submit")
    def submit(self, request, employee_id=None):
        wizard = self._wizard(employee_id)
        result = wizard.submit()
        if isinstance(result, IncompleteStep):
            return Response({
                "error": result.message,
                "step": result.step,
                "title": STEP_TITLES[result.step],
            }, status=status.HTTP_400_BAD_REQUEST)

        evaluation = (Evaluation.objects
                      .select_related("employee", "evaluator")
                      .prefetch_related("criterion_scores")
                      .get(pk=result))
        logger.info("Evaluation %s submitted by %s", evaluation.pk, request.user.pk)
        return Response(EvaluationSerializer(evaluation).data, status=status.HTTP_201_CREATED)
