"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (_("Personal info"), {"fields": ("username", "first_name", "last_name", "phone")}),
        (_("Role and membership"), {"fields": ("role", "membership_plan")}),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2", "first_name", "last_name", "role"),
            },
        ),
    )
    list_display = ("email", "role", "membership_plan", "is_active", "is_staff")
    list_filter = ("role", "is_active", "is_staff", "membership_plan")
    search_fields = ("email", "phone", "first_name", "last_name")
    ordering = ("email",)
    readonly_fields = ("created_at", "updated_at", "date_joined")
