"""Serializers for the booking domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.resources.models import Resource
from apps.users.models import User

from .models import Booking


class BookingWindowSerializer(serializers.Serializer):
    """Resource and window shared by booking creation and quotes.

    The order of the bounds is checked by the domain layer, which reports the
    offending field.
    """

    resource = serializers.PrimaryKeyRelatedField(queryset=Resource.objects.all())
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()


class BookingCreateSerializer(BookingWindowSerializer):
    """Booking request. Staff may book on behalf of a member through `user`."""

    user = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False)
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")


class BookingQuoteSerializer(BookingWindowSerializer):
    pass


class BookingCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class BookingSerializer(serializers.ModelSerializer):
    """Detailed read representation of a booking."""

    resource_id = serializers.ReadOnlyField(source="resource.id")
    resource_name = serializers.ReadOnlyField(source="resource.name")
    resource_type = serializers.ReadOnlyField(source="resource.type")
    user_id = serializers.ReadOnlyField(source="user.id")
    user_email = serializers.ReadOnlyField(source="user.email")
    duration_minutes = serializers.ReadOnlyField()
    currency = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "resource_id",
            "resource_name",
            "resource_type",
            "user_id",
            "user_email",
            "start_time",
            "end_time",
            "duration_minutes",
            "status",
            "price",
            "currency",
            "paid",
            "notes",
            "cancelled_at",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_currency(self, obj: Booking) -> str:
        return getattr(settings, "BOOKING_CURRENCY", "USD")


class QuoteSerializer(serializers.Serializer):
    """Read-only representation of a price preview."""

    resource_id = serializers.IntegerField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField()
    price = serializers.DecimalField(max_digits=14, decimal_places=2)
    currency = serializers.CharField()
    available = serializers.BooleanField()
    conflicting_booking_id = serializers.IntegerField(allow_null=True)
