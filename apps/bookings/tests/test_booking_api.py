"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.domain.exceptions import CONFLICT_MESSAGE
from apps.bookings.models import Booking
from apps.resources.models import Resource
from apps.users.models import User

DAY = datetime(2030, 6, 3, tzinfo=timezone.utc)


def at(hour: int, minute: int = 0) -> datetime:
    return DAY + timedelta(hours=hour, minutes=minute)


class BookingAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.member = User.objects.create_user(email="member@example.com", password="MemberPass123")
        self.other_member = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.staff = User.objects.create_user(
            email="staff@example.com",
            password="StaffPass123",
            role=User.RoleChoices.STAFF,
        )
        self.room = Resource.objects.create(
            name="Room A",
            type=Resource.ResourceType.MEETING_ROOM,
            capacity=6,
            hourly_rate=Decimal("10.00"),
        )
        self.desk = Resource.objects.create(
            name="Desk 1",
            type=Resource.ResourceType.DESK,
            hourly_rate=Decimal("11.00"),
        )
        self.client.force_authenticate(self.member)
        self.list_url = reverse("booking-list")

    def _payload(self, start: datetime, end: datetime, resource: Resource | None = None) -> dict[str, str]:
        return {
            "resource": str((resource or self.room).pk),
            "start_time": start.isoformat(),
            "end_time": end.isoformat(),
        }

    def _book(self, start: datetime, end: datetime, resource: Resource | None = None):
        return self.client.post(self.list_url, self._payload(start, end, resource), format="json")


class BookingCreateTests(BookingAPITestCase):
    def test_member_can_create_booking(self) -> None:
        response = self._book(at(9), at(11))

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Booking.Status.CONFIRMED)
        self.assertEqual(Decimal(response.data["price"]), Decimal("20.00"))
        self.assertFalse(response.data["paid"])
        self.assertEqual(response.data["duration_minutes"], 120)

        booking = Booking.objects.get()
        self.assertEqual(booking.user, self.member)
        self.assertEqual(booking.resource, self.room)

    def test_booking_scenario_around_an_existing_booking(self) -> None:
        self.assertEqual(self._book(at(9), at(10)).status_code, status.HTTP_201_CREATED)

        response = self._book(at(10), at(11))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        response = self._book(at(9, 30), at(10, 30))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["detail"], CONFLICT_MESSAGE)

        response = self._book(at(8), at(9))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        response = self._book(at(8, 30), at(9, 30))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

        self.assertEqual(Booking.objects.count(), 3)

    def test_conflicts_are_per_resource(self) -> None:
        self._book(at(9), at(10))
        response = self._book(at(9), at(10), resource=self.desk)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_conflict_with_another_members_booking(self) -> None:
        self._book(at(9), at(10))
        self.client.force_authenticate(self.other_member)
        response = self._book(at(9, 15), at(9, 45))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_inverted_window_is_rejected(self) -> None:
        response = self._book(at(11), at(10))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_time", response.data)
        self.assertFalse(Booking.objects.exists())

    def test_empty_window_is_rejected(self) -> None:
        response = self._book(at(10), at(10))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_time", response.data)

    def test_inactive_resource_cannot_be_booked(self) -> None:
        self.room.is_active = False
        self.room.save()
        response = self._book(at(9), at(10))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("detail", response.data)

    def test_price_is_captured_at_creation(self) -> None:
        response = self._book(at(9), at(9, 20), resource=self.desk)
        self.assertEqual(Decimal(response.data["price"]), Decimal("3.67"))

        self.desk.hourly_rate = Decimal("99.00")
        self.desk.save()
        booking = Booking.objects.get(pk=response.data["id"])
        self.assertEqual(booking.price, Decimal("3.67"))

    @override_settings(BOOKING_CURRENCY="CAD")
    def test_any_iso_currency_is_reported(self) -> None:
        response = self._book(at(9), at(10))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["currency"], "CAD")

        response = self.client.get(reverse("booking-quote"), self._payload(at(11), at(12)))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["currency"], "CAD")

    def test_staff_books_on_behalf_of_a_member(self) -> None:
        self.client.force_authenticate(self.staff)
        payload = {**self._payload(at(9), at(10)), "user": self.member.pk}

        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["user_id"], self.member.pk)
        self.assertEqual(Booking.objects.get().user, self.member)

    def test_member_cannot_book_for_someone_else(self) -> None:
        payload = {**self._payload(at(9), at(10)), "user": self.other_member.pk}

        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Booking.objects.exists())

    def test_member_may_name_themselves(self) -> None:
        payload = {**self._payload(at(9), at(10)), "user": self.member.pk}

        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["user_id"], self.member.pk)

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)
        response = self._book(at(9), at(10))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class BookingQuoteTests(BookingAPITestCase):
    def test_quote_prices_without_saving(self) -> None:
        response = self.client.get(reverse("booking-quote"), self._payload(at(9), at(10, 30)))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(Decimal(response.data["price"]), Decimal("15.00"))
        self.assertEqual(response.data["duration_minutes"], 90)
        self.assertTrue(response.data["available"])
        self.assertIsNone(response.data["conflicting_booking_id"])
        self.assertFalse(Booking.objects.exists())

    def test_quote_reports_conflict(self) -> None:
        booking_id = self._book(at(9), at(10)).data["id"]
        response = self.client.post(reverse("booking-quote"), self._payload(at(9, 30), at(11)), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(response.data["available"])
        self.assertEqual(response.data["conflicting_booking_id"], booking_id)

    def test_quote_rejects_inverted_window(self) -> None:
        response = self.client.get(reverse("booking-quote"), self._payload(at(10), at(9)))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class BookingLifecycleTests(BookingAPITestCase):
    def test_cancelled_booking_frees_its_slot(self) -> None:
        booking_id = self._book(at(9), at(10)).data["id"]

        response = self.client.post(
            reverse("booking-cancel", args=[booking_id]),
            {"reason": "Plans changed"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Booking.Status.CANCELLED)
        self.assertIsNotNone(response.data["cancelled_at"])

        booking = Booking.objects.get(pk=booking_id)
        self.assertEqual(booking.cancellation_reason, "Plans changed")

        response = self._book(at(9), at(10))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_cancelling_twice_is_a_no_op(self) -> None:
        booking_id = self._book(at(9), at(10)).data["id"]
        url = reverse("booking-cancel", args=[booking_id])
        first = self.client.post(url, {}, format="json")
        second = self.client.post(url, {}, format="json")

        self.assertEqual(second.status_code, status.HTTP_200_OK, second.data)
        self.assertEqual(second.data["cancelled_at"], first.data["cancelled_at"])

    def test_member_cannot_cancel_someone_elses_booking(self) -> None:
        booking_id = self._book(at(9), at(10)).data["id"]
        self.client.force_authenticate(self.other_member)

        response = self.client.post(reverse("booking-cancel", args=[booking_id]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(Booking.objects.get(pk=booking_id).status, Booking.Status.CONFIRMED)

    def test_staff_can_cancel_any_booking(self) -> None:
        booking_id = self._book(at(9), at(10)).data["id"]
        self.client.force_authenticate(self.staff)

        response = self.client.post(reverse("booking-cancel", args=[booking_id]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_completed_booking_cannot_be_cancelled(self) -> None:
        booking_id = self._book(at(9), at(10)).data["id"]
        self.client.force_authenticate(self.staff)
        response = self.client.post(reverse("booking-complete", args=[booking_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Booking.Status.COMPLETED)

        response = self.client.post(reverse("booking-cancel", args=[booking_id]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_member_cannot_complete_or_mark_paid(self) -> None:
        booking_id = self._book(at(9), at(10)).data["id"]

        response = self.client.post(reverse("booking-complete", args=[booking_id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.post(reverse("booking-mark-paid", args=[booking_id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_marks_booking_paid(self) -> None:
        booking_id = self._book(at(9), at(10)).data["id"]
        self.client.force_authenticate(self.staff)

        response = self.client.post(reverse("booking-mark-paid", args=[booking_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["paid"])

    def test_cancelled_booking_cannot_be_paid(self) -> None:
        booking_id = self._book(at(9), at(10)).data["id"]
        self.client.post(reverse("booking-cancel", args=[booking_id]), {}, format="json")
        self.client.force_authenticate(self.staff)

        response = self.client.post(reverse("booking-mark-paid", args=[booking_id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Booking.objects.get(pk=booking_id).paid)


class BookingListTests(BookingAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self._book(at(9), at(10))
        self.client.force_authenticate(self.other_member)
        self._book(at(11), at(12))
        self._book(at(9), at(10), resource=self.desk)
        self.client.force_authenticate(self.member)

    def test_members_only_see_their_own_bookings(self) -> None:
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["user_id"], self.member.pk)

    def test_staff_see_all_bookings(self) -> None:
        self.client.force_authenticate(self.staff)
        response = self.client.get(self.list_url)
        self.assertEqual(len(response.data), 3)

    def test_filters(self) -> None:
        self.client.force_authenticate(self.staff)

        response = self.client.get(self.list_url, {"resource": self.desk.pk})
        self.assertEqual(len(response.data), 1)

        response = self.client.get(self.list_url, {"mine": "true"})
        self.assertEqual(len(response.data), 0)

        response = self.client.get(self.list_url, {"status": "confirmed", "start_date": DAY.date().isoformat()})
        self.assertEqual(len(response.data), 3)

        response = self.client.get(self.list_url, {"end_date": (DAY.date() - timedelta(days=1)).isoformat()})
        self.assertEqual(len(response.data), 0)


class ResourceScheduleTests(BookingAPITestCase):
    def test_schedule_lists_active_bookings_of_the_day(self) -> None:
        kept = self._book(at(9), at(10)).data["id"]
        cancelled = self._book(at(13), at(14)).data["id"]
        self.client.post(reverse("booking-cancel", args=[cancelled]), {}, format="json")
        self._book(at(9), at(10), resource=self.desk)

        response = self.client.get(
            reverse("resource-schedule", args=[self.room.pk]),
            {"date": DAY.date().isoformat()},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([b["booking_id"] for b in response.data["bookings"]], [kept])

    @override_settings(TIME_ZONE="America/Santiago")
    def test_schedule_of_a_day_starting_in_a_dst_gap(self) -> None:
        # Clocks in Santiago jumped from 00:00 to 01:00 on 2024-09-08
        def utc(day: int, hour: int, minute: int = 0) -> datetime:
            return datetime(2024, 9, day, hour, minute, tzinfo=timezone.utc)

        early = Booking.objects.create(
            resource=self.room, user=self.member, start_time=utc(8, 4, 30), end_time=utc(8, 5, 30)
        )
        noon = Booking.objects.create(
            resource=self.room, user=self.member, start_time=utc(8, 12), end_time=utc(8, 13)
        )
        # 00:30 local on the following day
        Booking.objects.create(
            resource=self.room, user=self.member, start_time=utc(9, 3, 30), end_time=utc(9, 4, 30)
        )

        response = self.client.get(
            reverse("resource-schedule", args=[self.room.pk]),
            {"date": "2024-09-08"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            sorted(b["booking_id"] for b in response.data["bookings"]),
            [early.pk, noon.pk],
        )


class BookingPriceRangeTests(BookingAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.suite = Resource.objects.create(
            name="Executive Suite",
            type=Resource.ResourceType.PRIVATE_OFFICE,
            hourly_rate=Decimal("99999999.99"),
        )

    def test_large_rate_is_stored_in_full(self) -> None:
        response = self._book(at(9), at(11), resource=self.suite)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Decimal(response.data["price"]), Decimal("199999999.98"))
        self.assertEqual(Booking.objects.get().price, Decimal("199999999.98"))

    def test_charge_above_the_ceiling_is_rejected(self) -> None:
        end = at(9) + timedelta(hours=20000)

        response = self._book(at(9), end, resource=self.suite)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("detail", response.data)
        self.assertFalse(Booking.objects.exists())

        response = self.client.get(reverse("booking-quote"), self._payload(at(9), end, self.suite))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("detail", response.data)
