"""Role-based permission classes shared by the domain apps."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_space_staff(user) -> bool:
    """Front desk staff, administrators and Django superusers."""
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_space_staff") and user.is_space_staff()


def is_space_admin(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_space_admin") and user.is_space_admin()


class IsSpaceAdmin(permissions.BasePermission):
    """Only administrators of the space."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_space_admin(request.user)


class IsSpaceStaff(permissions.BasePermission):
    """Staff members and administrators."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_space_staff(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Any authenticated user can read, administrators can write.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_space_admin(user)


class IsOwnerOrStaff(permissions.BasePermission):
    """
    Object-level permission: the object's user or front desk staff.
    """

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if is_space_staff(user):
            return True
        return getattr(obj, "user_id", None) == user.id
