"""URL routing for membership plans."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import MembershipPlanViewSet

router = DefaultRouter()
router.register(r"", MembershipPlanViewSet, basename="membership-plan")

urlpatterns = [
    path("", include(router.urls)),
]
