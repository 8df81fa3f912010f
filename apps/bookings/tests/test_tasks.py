"""Tests for periodic booking tasks."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from apps.bookings.models import Booking
from apps.bookings.tasks import complete_finished_bookings
from apps.resources.models import Resource
from apps.users.models import User


class CompleteFinishedBookingsTests(TestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="member@example.com", password="MemberPass123")
        self.resource = Resource.objects.create(name="Desk 1", type=Resource.ResourceType.DESK)

    def _booking(self, start, end, status=Booking.Status.CONFIRMED) -> Booking:
        return Booking.objects.create(
            resource=self.resource,
            user=self.user,
            start_time=start,
            end_time=end,
            status=status,
            price=Decimal("0.00"),
        )

    def test_completes_only_finished_confirmed_bookings(self) -> None:
        now = timezone.now()
        finished = self._booking(now - timedelta(hours=3), now - timedelta(hours=2))
        running = self._booking(now - timedelta(hours=1), now + timedelta(hours=1))
        cancelled = self._booking(
            now - timedelta(hours=6),
            now - timedelta(hours=5),
            status=Booking.Status.CANCELLED,
        )

        result = complete_finished_bookings.delay().get()

        self.assertEqual(result, {"completed": 1})
        finished.refresh_from_db()
        running.refresh_from_db()
        cancelled.refresh_from_db()
        self.assertEqual(finished.status, Booking.Status.COMPLETED)
        self.assertEqual(running.status, Booking.Status.CONFIRMED)
        self.assertEqual(cancelled.status, Booking.Status.CANCELLED)
