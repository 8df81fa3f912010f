"""Views for authentication flows (register, login, token refresh)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import LoginSerializer, RegisterSerializer
from .serializers import UserSerializer


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    # role claim consumed by the dashboards
    refresh["role"] = user.role
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_200_OK)
