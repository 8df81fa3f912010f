"""URL routing for check-ins."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import CheckInViewSet

router = DefaultRouter()
router.register(r"", CheckInViewSet, basename="checkin")

urlpatterns = [
    path("", include(router.urls)),
]
