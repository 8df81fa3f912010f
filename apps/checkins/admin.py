"""Admin registration for check-ins."""

from __future__ import annotations

from django.contrib import admin

from .models import CheckIn


@admin.register(CheckIn)
class CheckInAdmin(admin.ModelAdmin):
    list_display = ("user", "location", "status", "check_in_time", "check_out_time")
    list_filter = ("status", "location")
    search_fields = ("user__email", "location")
    list_select_related = ("user",)
