"""Check-in API views."""

from __future__ import annotations

import logging

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsOwnerOrStaff, is_space_staff

from .models import CheckIn
from .serializers import CheckInSerializer

logger = logging.getLogger(__name__)


class CheckInViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Presence in the space. Members see their own visits, staff see everyone's."""

    queryset = CheckIn.objects.select_related("user").all()
    serializer_class = CheckInSerializer
    permission_classes = [permissions.IsAuthenticated, IsOwnerOrStaff]
    filterset_fields = ["status", "user", "location"]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if not user.is_authenticated:
            return qs.none()
        if is_space_staff(user):
            return qs
        return qs.filter(user=user)

    def perform_create(self, serializer):  # type: ignore
        checkin = serializer.save()
        logger.info(f"User {checkin.user_id} checked in at {checkin.location}")

    @action(detail=True, methods=["post"])
    def checkout(self, request, pk=None):  # type: ignore
        checkin: CheckIn = self.get_object()  # type: ignore
        if not checkin.is_active:
            return Response(
                {"detail": "This check-in is already completed."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        checkin.check_out()
        logger.info(f"User {checkin.user_id} checked out after {checkin.duration_minutes} min")
        return Response(self.get_serializer(checkin).data)
