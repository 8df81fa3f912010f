"""Serializers for authentication flows (register, login)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import authenticate, get_user_model  # type: ignore
from django.contrib.auth.password_validation import validate_password  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    password_confirm = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(required=False, allow_blank=True)
    last_name = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs.get("password") != attrs.get("password_confirm"):
            raise serializers.ValidationError({"password_confirm": "Passwords do not match."})
        if User.objects.filter(email__iexact=attrs.get("email")).exists():
            raise serializers.ValidationError({"email": "A user with this email already exists."})
        validate_password(attrs["password"])
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        validated_data.pop("password_confirm", None)
        # self-registration always yields a member account
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = authenticate(
            request=self.context.get("request"),
            email=attrs.get("email", ""),
            password=attrs.get("password", ""),
        )
        if user is None:
            raise serializers.ValidationError({"non_field_errors": ["Invalid email or password."]})
        attrs["user"] = user
        return attrs
