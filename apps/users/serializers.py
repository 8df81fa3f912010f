"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer."""

    membership_plan_name = serializers.ReadOnlyField(source="membership_plan.name")

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "phone",
            "role",
            "is_active",
            "membership_plan",
            "membership_plan_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "role",
            "is_active",
            "membership_plan",
            "membership_plan_name",
            "created_at",
            "updated_at",
        ]


class AdminUserSerializer(UserSerializer):
    """Administrators may change roles, plans and deactivate accounts."""

    class Meta(UserSerializer.Meta):
        read_only_fields = [
            "id",
            "membership_plan_name",
            "created_at",
            "updated_at",
        ]


class StaffMemberCreateSerializer(serializers.ModelSerializer):
    """Front desk registration of a member.

    The account is created without a usable password and cannot log in
    until one is set.
    """

    email = serializers.EmailField()

    class Meta:
        model = User
        fields = ["email", "first_name", "last_name", "phone", "membership_plan"]
        extra_kwargs = {
            "first_name": {"required": True, "allow_blank": False},
        }

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def create(self, validated_data):  # type: ignore
        email = validated_data.pop("email")
        return User.objects.create_user(
            email=email,
            role=User.RoleChoices.MEMBER,
            **validated_data,
        )

    def to_representation(self, instance):  # type: ignore
        return UserSerializer(instance, context=self.context).data
