"""Check-in models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


DEFAULT_LOCATION = "Main Desk"


class CheckIn(models.Model):
    """A visit to the space, open until the user checks out."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        COMPLETED = "completed", _("Completed")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="checkins",
    )
    check_in_time = models.DateTimeField(default=timezone.now)
    check_out_time = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    location = models.CharField(max_length=100, default=DEFAULT_LOCATION)
    notes = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Check-in")
        verbose_name_plural = _("Check-ins")
        ordering = ["-check_in_time"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(status="active"),
                name="checkin_one_active_per_user",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "check_in_time"], name="checkins_ch_status_9b3c71_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} @ {self.location} ({self.get_status_display()})"

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    @property
    def duration_minutes(self) -> int | None:
        if self.check_out_time is None:
            return None
        return round((self.check_out_time - self.check_in_time).total_seconds() / 60)

    def check_out(self, when=None) -> None:
        self.check_out_time = when or timezone.now()
        self.status = self.Status.COMPLETED
        self.save(update_fields=["check_out_time", "status", "updated_at"])
