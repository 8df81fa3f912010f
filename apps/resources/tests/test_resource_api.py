"""API tests for resources."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.resources.models import Resource
from apps.users.models import User


class ResourceAPITests(APITestCase):
    def setUp(self) -> None:
        self.member = User.objects.create_user(email="member@example.com", password="MemberPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.room = Resource.objects.create(
            name="Board Room",
            type=Resource.ResourceType.MEETING_ROOM,
            capacity=12,
            hourly_rate=Decimal("40.00"),
            amenities=["Projector", "Whiteboard"],
        )
        self.desk = Resource.objects.create(
            name="Desk 7",
            type=Resource.ResourceType.DESK,
            hourly_rate=Decimal("5.00"),
        )
        self.closed = Resource.objects.create(
            name="Old Booth",
            type=Resource.ResourceType.PHONE_BOOTH,
            is_active=False,
        )
        self.list_url = reverse("resource-list")

    def test_members_only_see_active_resources(self) -> None:
        self.client.force_authenticate(self.member)
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({r["name"] for r in response.data}, {"Board Room", "Desk 7"})

    def test_admin_sees_inactive_resources(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.get(self.list_url)
        self.assertEqual(len(response.data), 3)

    def test_filters(self) -> None:
        self.client.force_authenticate(self.member)

        response = self.client.get(self.list_url, {"type": "desk"})
        self.assertEqual([r["name"] for r in response.data], ["Desk 7"])

        response = self.client.get(self.list_url, {"min_capacity": 10})
        self.assertEqual([r["name"] for r in response.data], ["Board Room"])

    def test_member_cannot_create_resource(self) -> None:
        self.client.force_authenticate(self.member)
        response = self.client.post(self.list_url, {"name": "Desk 8", "type": "desk"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_creates_resource(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            self.list_url,
            {"name": "Focus Booth", "type": "phone_booth", "hourly_rate": "3.50", "capacity": 1},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["is_active"])

    def test_capacity_and_rate_are_validated(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            self.list_url,
            {"name": "Bad", "type": "desk", "capacity": 0, "hourly_rate": "-1.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("capacity", response.data)
        self.assertIn("hourly_rate", response.data)

    def test_booked_resource_cannot_be_deleted(self) -> None:
        Booking.objects.create(
            resource=self.room,
            user=self.member,
            start_time=datetime(2030, 1, 1, 9, tzinfo=timezone.utc),
            end_time=datetime(2030, 1, 1, 10, tzinfo=timezone.utc),
            price=Decimal("40.00"),
        )
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("resource-detail", args=[self.room.pk]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Resource.objects.filter(pk=self.room.pk).exists())

        response = self.client.delete(reverse("resource-detail", args=[self.desk.pk]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
