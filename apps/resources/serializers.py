"""Serializers for resources."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Resource


class ResourceSerializer(serializers.ModelSerializer):
    amenities = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = Resource
        fields = [
            "id",
            "name",
            "type",
            "description",
            "capacity",
            "hourly_rate",
            "location",
            "floor",
            "amenities",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
