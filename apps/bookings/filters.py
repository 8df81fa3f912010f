"""FilterSet definitions for booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Filters used by the booking list: resource, status, date range and ``mine``."""

    start_date = django_filters.DateFilter(field_name="start_time", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="end_time", lookup_expr="date__lte")
    mine = django_filters.BooleanFilter(method="filter_mine")

    class Meta:
        model = Booking
        fields = ["resource", "status", "paid"]

    def filter_mine(self, queryset, name, value):  # type: ignore
        user = getattr(self.request, "user", None)
        if not value or user is None or not user.is_authenticated:
            return queryset
        return queryset.filter(user=user)
