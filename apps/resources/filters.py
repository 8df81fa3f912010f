"""FilterSet definitions for resource listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Resource


class ResourceFilterSet(django_filters.FilterSet):
    min_capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")
    max_rate = django_filters.NumberFilter(field_name="hourly_rate", lookup_expr="lte")
    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")

    class Meta:
        model = Resource
        fields = ["type", "is_active", "floor"]
