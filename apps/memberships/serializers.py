"""Serializers for membership plans."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import MembershipPlan


class MembershipPlanSerializer(serializers.ModelSerializer):
    members = serializers.SerializerMethodField()
    features = serializers.ListField(
        child=serializers.CharField(max_length=200, allow_blank=True),
        required=False,
    )

    class Meta:
        model = MembershipPlan
        fields = [
            "id",
            "name",
            "type",
            "price",
            "features",
            "active",
            "members",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "members", "created_at", "updated_at"]

    def get_members(self, obj: MembershipPlan) -> int:
        count = getattr(obj, "members_count", None)
        if count is None:
            count = obj.members.count()
        return count

    def validate_features(self, value):  # type: ignore
        # drop blanks and duplicates, keep order
        seen: list[str] = []
        for feature in value:
            feature = feature.strip()
            if feature and feature not in seen:
                seen.append(feature)
        return seen
