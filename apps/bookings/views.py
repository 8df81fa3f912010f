"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import PermissionDenied  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsOwnerOrStaff, IsSpaceStaff, is_space_staff

from .application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    CompleteBookingCommand,
    CompleteBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    MarkBookingPaidCommand,
    MarkBookingPaidHandler,
    QuoteBookingHandler,
    QuoteBookingQuery,
)
from .domain.exceptions import BookingConflict, BookingError, InvalidInterval
from .filters import BookingFilterSet
from .models import Booking
from .repository import DjangoBookingRepository
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingQuoteSerializer,
    BookingSerializer,
    QuoteSerializer,
)


def booking_error_response(exc: BookingError) -> Response:
    """Translate a domain error into an API response."""

    if isinstance(exc, BookingConflict):
        return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
    if isinstance(exc, InvalidInterval):
        return Response({exc.field: [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Reservations of coworking resources.

    Members see and cancel their own bookings; staff see all of them and can
    complete bookings or record payment. Bookings are never deleted.
    """

    queryset = Booking.objects.select_related("resource", "user").all()
    filterset_class = BookingFilterSet

    def get_permissions(self):  # type: ignore
        if self.action in {"complete", "mark_paid"}:
            return [IsSpaceStaff()]
        return [permissions.IsAuthenticated(), IsOwnerOrStaff()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "quote":
            return BookingQuoteSerializer
        if self.action == "cancel":
            return BookingCancelSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if not user.is_authenticated:
            return qs.none()
        if is_space_staff(user):
            return qs
        return qs.filter(user=user)

    def get_repository(self) -> DjangoBookingRepository:
        return DjangoBookingRepository()

    def _read(self, booking: Booking) -> Response:
        data = BookingSerializer(booking, context=self.get_serializer_context()).data
        return Response(data)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        owner = data.get("user") or request.user
        if owner.pk != request.user.pk and not is_space_staff(request.user):
            raise PermissionDenied("Only staff can book on behalf of another user.")

        command = CreateBookingCommand(
            resource_id=data["resource"].pk,
            user_id=owner.pk,
            start_time=data["start_time"],
            end_time=data["end_time"],
            notes=data.get("notes", ""),
        )
        try:
            booking = CreateBookingHandler(self.get_repository()).handle(command)
        except BookingError as exc:
            return booking_error_response(exc)

        booking = self.get_queryset().get(pk=booking.pk)
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(detail=False, methods=["get", "post"])
    def quote(self, request):  # type: ignore
        """Price of a window and whether it is currently free. Nothing is saved."""
        payload = request.query_params if request.method == "GET" else request.data
        serializer = self.get_serializer(data=payload)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        query = QuoteBookingQuery(
            resource_id=data["resource"].pk,
            start_time=data["start_time"],
            end_time=data["end_time"],
        )
        try:
            quote = QuoteBookingHandler(self.get_repository()).handle(query)
        except BookingError as exc:
            return booking_error_response(exc)

        result = QuoteSerializer({
            "resource_id": query.resource_id,
            "start_time": query.start_time,
            "end_time": query.end_time,
            "duration_minutes": round((query.end_time - query.start_time).total_seconds() / 60),
            "price": quote.price.amount,
            "currency": quote.price.currency,
            "available": quote.available,
            "conflicting_booking_id": quote.conflicting.booking_id if quote.conflicting else None,
        })
        return Response(result.data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        command = CancelBookingCommand(booking_id=booking.pk, reason=serializer.validated_data["reason"])
        try:
            booking = CancelBookingHandler(self.get_repository()).handle(command)
        except BookingError as exc:
            return booking_error_response(exc)
        return self._read(booking)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        try:
            booking = CompleteBookingHandler(self.get_repository()).handle(
                CompleteBookingCommand(booking_id=booking.pk)
            )
        except BookingError as exc:
            return booking_error_response(exc)
        return self._read(booking)

    @action(detail=True, methods=["post"], url_path="mark-paid")
    def mark_paid(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        try:
            booking = MarkBookingPaidHandler(self.get_repository()).handle(
                MarkBookingPaidCommand(booking_id=booking.pk)
            )
        except BookingError as exc:
            return booking_error_response(exc)
        return self._read(booking)
