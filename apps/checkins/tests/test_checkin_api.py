"""API tests for check-ins."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.checkins.models import CheckIn
from apps.users.models import User


class CheckInAPITests(APITestCase):
    def setUp(self) -> None:
        self.member = User.objects.create_user(email="member@example.com", password="MemberPass123")
        self.other_member = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.staff = User.objects.create_user(
            email="staff@example.com",
            password="StaffPass123",
            role=User.RoleChoices.STAFF,
        )
        self.list_url = reverse("checkin-list")

    def test_member_checks_in_with_default_location(self) -> None:
        self.client.force_authenticate(self.member)
        response = self.client.post(self.list_url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["user"], self.member.pk)
        self.assertEqual(response.data["location"], "Main Desk")
        self.assertEqual(response.data["status"], CheckIn.Status.ACTIVE)

    def test_only_one_active_checkin_per_user(self) -> None:
        self.client.force_authenticate(self.member)
        self.client.post(self.list_url, {}, format="json")

        response = self.client.post(self.list_url, {"location": "Lounge"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(CheckIn.objects.filter(user=self.member).count(), 1)

    def test_checkout_allows_a_new_checkin(self) -> None:
        self.client.force_authenticate(self.member)
        checkin_id = self.client.post(self.list_url, {}, format="json").data["id"]

        response = self.client.post(reverse("checkin-checkout", args=[checkin_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], CheckIn.Status.COMPLETED)
        self.assertIsNotNone(response.data["check_out_time"])

        response = self.client.post(reverse("checkin-checkout", args=[checkin_id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(self.list_url, {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_member_cannot_check_in_someone_else(self) -> None:
        self.client.force_authenticate(self.member)
        response = self.client.post(self.list_url, {"user": self.other_member.pk}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_checks_in_a_member(self) -> None:
        self.client.force_authenticate(self.staff)
        response = self.client.post(self.list_url, {"user": self.member.pk}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["user"], self.member.pk)

    def test_member_cannot_check_out_someone_else(self) -> None:
        checkin = CheckIn.objects.create(user=self.other_member)
        self.client.force_authenticate(self.member)

        response = self.client.post(reverse("checkin-checkout", args=[checkin.pk]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_is_scoped_and_filterable(self) -> None:
        CheckIn.objects.create(user=self.member)
        CheckIn.objects.create(user=self.other_member, status=CheckIn.Status.COMPLETED)

        self.client.force_authenticate(self.member)
        response = self.client.get(self.list_url)
        self.assertEqual(len(response.data), 1)

        self.client.force_authenticate(self.staff)
        response = self.client.get(self.list_url)
        self.assertEqual(len(response.data), 2)
        response = self.client.get(self.list_url, {"status": "active"})
        self.assertEqual([c["user"] for c in response.data], [self.member.pk])
