"""User API views."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import mixins, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import SearchFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.response import Response  # type: ignore

from .permissions import IsSpaceAdmin, IsSpaceStaff
from .serializers import AdminUserSerializer, StaffMemberCreateSerializer, UserSerializer

User = get_user_model()


class UserViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """Member directory.

    - `me` returns and updates the current user's profile
    - staff can browse and register members, administrators can change roles and plans
    """

    queryset = User.objects.select_related("membership_plan").all()
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_fields = ["role", "is_active", "membership_plan"]
    search_fields = ["email", "first_name", "last_name"]

    def get_permissions(self):  # type: ignore
        if self.action == "me":
            return [permissions.IsAuthenticated()]
        if self.action in {"update", "partial_update"}:
            return [IsSpaceAdmin()]
        return [IsSpaceStaff()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return StaffMemberCreateSerializer
        if self.action in {"update", "partial_update"}:
            return AdminUserSerializer
        return UserSerializer

    @action(detail=False, methods=["get", "patch"])
    def me(self, request):
        """Current user's profile."""
        if request.method == "PATCH":
            serializer = UserSerializer(request.user, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
            return Response(serializer.data)
        return Response(UserSerializer(request.user).data)
