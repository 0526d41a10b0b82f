"""Auth API views.

Implements token-based signup and login, password change and the
authenticated user's own profile.
"""

from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.roles import get_role
from profiles.api.serializers import UserDetailSerializer
from .serializers import ChangePasswordSerializer, LoginSerializer, SignupSerializer


def _token_payload(user, token):
    return {
        "token": token.key,
        "user_id": user.id,
        "email": user.email,
        "name": getattr(getattr(user, "profile", None), "name", ""),
        "role": get_role(user),
    }


class SignupView(APIView):
    """POST /api/auth/signup/ -> create a normal user, return auth token."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = SignupSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = serializer.save()
        token, _ = Token.objects.get_or_create(user=user)
        return Response(_token_payload(user, token), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/auth/login/ -> validate credentials and return auth token."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = serializer.validated_data["user"]
        token, _ = Token.objects.get_or_create(user=user)
        return Response(_token_payload(user, token), status=status.HTTP_200_OK)


class ChangePasswordView(APIView):
    """POST /api/auth/change-password/ -> set a new password for the requester."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = ChangePasswordSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"detail": "Password changed successfully."}, status=status.HTTP_200_OK)


class ProfileView(APIView):
    """GET /api/auth/profile/ -> the authenticated user with role, store and ratings."""

    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        return Response(UserDetailSerializer(request.user).data, status=status.HTTP_200_OK)
