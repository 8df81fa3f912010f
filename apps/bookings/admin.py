"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "resource",
        "user",
        "status",
        "start_time",
        "end_time",
        "price",
        "paid",
        "created_at",
    )
    list_filter = ("status", "paid", "resource__type", "start_time")
    search_fields = ("resource__name", "user__email", "notes")
    list_select_related = ("resource", "user")
    readonly_fields = (
        "price",
        "cancelled_at",
        "created_at",
        "updated_at",
    )
