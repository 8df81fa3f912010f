"""URL routing for authentication endpoints (namespace: auth)."""

from __future__ import annotations

from django.urls import path  # type: ignore
from rest_framework_simplejwt.views import TokenRefreshView  # type: ignore

from .auth_views import LoginView, RegisterView

app_name = "auth"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("token/", LoginView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
]
