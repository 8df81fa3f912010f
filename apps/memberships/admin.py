"""Admin registration for membership plans."""

from __future__ import annotations

from django.contrib import admin

from .models import MembershipPlan


@admin.register(MembershipPlan)
class MembershipPlanAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "price", "active", "created_at")
    list_filter = ("type", "active")
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")
