"""Membership plan API views."""

from __future__ import annotations

from django.db.models import Count  # type: ignore
from rest_framework import viewsets  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore

from apps.users.permissions import IsAdminOrReadOnly, is_space_staff

from .models import MembershipPlan
from .serializers import MembershipPlanSerializer


class MembershipPlanViewSet(viewsets.ModelViewSet):
    """Plans are readable by every member and managed by administrators."""

    serializer_class = MembershipPlanSerializer
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = ["type", "active"]
    ordering_fields = ["price", "name", "created_at"]

    def get_queryset(self):  # type: ignore
        qs = MembershipPlan.objects.annotate(members_count=Count("members"))
        if not is_space_staff(self.request.user):
            qs = qs.filter(active=True)
        return qs
