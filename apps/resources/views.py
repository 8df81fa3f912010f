"""Resource API views."""

from __future__ import annotations

from datetime import datetime, time, timedelta

from django.db.models import ProtectedError  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter, SearchFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.repository import DjangoBookingRepository
from apps.users.permissions import IsAdminOrReadOnly, is_space_staff
from shared.domain.value_objects import TimeSlot

from .filters import ResourceFilterSet
from .models import Resource
from .serializers import ResourceSerializer


class ScheduleQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


class ResourceViewSet(viewsets.ModelViewSet):
    """Desks, rooms, offices and booths of the space.

    Members only see resources open for booking; administrators manage the
    catalogue.
    """

    queryset = Resource.objects.all()
    serializer_class = ResourceSerializer
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = ResourceFilterSet
    search_fields = ["name", "description", "location"]
    ordering_fields = ["name", "hourly_rate", "capacity", "created_at"]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if is_space_staff(self.request.user):
            return qs
        return qs.filter(is_active=True)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        resource: Resource = self.get_object()  # type: ignore
        try:
            resource.delete()
        except ProtectedError:
            return Response(
                {"detail": "Resource has bookings and cannot be deleted. Deactivate it instead."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["get"])
    def schedule(self, request, pk=None):  # type: ignore
        """Active bookings of the resource intersecting one day (default: today)."""
        resource: Resource = self.get_object()  # type: ignore
        query = ScheduleQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        day = query.validated_data.get("date") or timezone.localdate()

        # local midnights; a day can be 23 or 25 hours long and start inside a DST gap
        tz = timezone.get_current_timezone()
        window = TimeSlot(
            datetime.combine(day, time.min, tzinfo=tz),
            datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz),
        )
        slots = DjangoBookingRepository().active_slots(resource.pk, within=window)

        return Response({
            "resource_id": resource.pk,
            "date": day.isoformat(),
            "bookings": [
                {
                    "booking_id": reserved.booking_id,
                    "start_time": reserved.start.isoformat(),
                    "end_time": reserved.end.isoformat(),
                }
                for reserved in slots
            ],
        })
