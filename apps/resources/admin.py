"""Admin registration for resources."""

from __future__ import annotations

from django.contrib import admin

from .models import Resource


@admin.register(Resource)
class ResourceAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "capacity", "hourly_rate", "location", "is_active")
    list_filter = ("type", "is_active", "floor")
    search_fields = ("name", "location")
    readonly_fields = ("created_at", "updated_at")
