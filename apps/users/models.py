"""User domain models for the coworking platform.

Every account has one of three roles: members book resources and check
themselves in, staff run the front desk, administrators manage resources,
plans and other users. Authentication itself is delegated to SimpleJWT; the
model only carries the identity and the role claim.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Invalid phone number. Use the international format without spaces."),
)


class CustomUserManager(BaseUserManager):
    """Manager that uses the email address as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Email is required to create a user.")
        email = self.normalize_email(email)

        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.MEMBER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        return phone.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Platform account with a role claim and an optional membership plan."""

    class RoleChoices(models.TextChoices):
        MEMBER = "member", _("Member")
        STAFF = "staff", _("Staff")
        ADMIN = "admin", _("Administrator")

    username = models.CharField(
        _("Display name"),
        max_length=150,
        blank=True,
    )
    email = models.EmailField(_("Email"), unique=True)
    phone = models.CharField(
        _("Phone"),
        max_length=20,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.MEMBER,
    )
    membership_plan = models.ForeignKey(
        "memberships.MembershipPlan",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="members",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    @property
    def display_name(self) -> str:
        return self.get_full_name() or self.username or self.email

    # --- Role helpers --------------------------------------------------------
    def is_member(self) -> bool:
        return self.role == self.RoleChoices.MEMBER

    def is_space_admin(self) -> bool:
        return self.role == self.RoleChoices.ADMIN or self.is_superuser

    def is_space_staff(self) -> bool:
        """Staff or administrator: anyone working the front desk."""
        return self.role == self.RoleChoices.STAFF or self.is_space_admin()


# Short alias used across apps and tests
User = CustomUser
