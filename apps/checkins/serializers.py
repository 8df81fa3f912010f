"""Serializers for check-ins."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from rest_framework import exceptions, serializers  # type: ignore

from apps.users.permissions import is_space_staff

from .models import DEFAULT_LOCATION, CheckIn

User = get_user_model()

ALREADY_CHECKED_IN = "User already has an active check-in."


class CheckInSerializer(serializers.ModelSerializer):
    """Check-in with the user it belongs to.

    Members check themselves in; staff may pass ``user`` to check in someone
    else.
    """

    user = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False)
    user_email = serializers.ReadOnlyField(source="user.email")
    location = serializers.CharField(max_length=100, required=False, default=DEFAULT_LOCATION)
    duration_minutes = serializers.ReadOnlyField()

    class Meta:
        model = CheckIn
        fields = [
            "id",
            "user",
            "user_email",
            "check_in_time",
            "check_out_time",
            "status",
            "location",
            "notes",
            "duration_minutes",
            "created_at",
        ]
        read_only_fields = ["id", "check_in_time", "check_out_time", "status", "created_at"]
        # one active check-in per user: checked in validate(), backed by the DB constraint
        validators: list = []
        extra_kwargs = {
            "notes": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):  # type: ignore
        request = self.context["request"]
        target = attrs.get("user") or request.user
        if target.pk != request.user.pk and not is_space_staff(request.user):
            raise exceptions.PermissionDenied("Only staff can check in other users.")
        if CheckIn.objects.filter(user=target, status=CheckIn.Status.ACTIVE).exists():
            raise serializers.ValidationError({"non_field_errors": [ALREADY_CHECKED_IN]})
        attrs["user"] = target
        return attrs

    def create(self, validated_data):  # type: ignore
        try:
            with transaction.atomic():
                return CheckIn.objects.create(**validated_data)
        except IntegrityError:
            # Lost a race against a concurrent check-in of the same user
            raise serializers.ValidationError({"non_field_errors": [ALREADY_CHECKED_IN]})
