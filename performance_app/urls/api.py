# performance_app/urls/api.py
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import (
           TokenObtainPairView,   # POST /api/auth/token/
           TokenRefreshView,      # POST /api/auth/refresh/
)

from performance_app.views.draftViewSet import EvaluationDraftViewSet
from performance_app.views.evaluationViewSet import EvaluationViewSet

router = DefaultRouter()

# GET /api/drafts/{employee_id}/  PUT/PATCH/DELETE same; POST .../validate/ .../submit/
router.register("drafts", EvaluationDraftViewSet, basename="draft")
# GET /api/evaluations/  GET /api/evaluations/{id}/  POST .../approve/  GET .../approval/
router.register("evaluations", EvaluationViewSet, basename="evaluation")

urlpatterns = [
    # JWT
    path("auth/token/",   TokenObtainPairView.as_view(), name="jwt-token"),
    path("auth/refresh/", TokenRefreshView.as_view(),    name="jwt-refresh"),
    # REST resources
    *router.urls
]
