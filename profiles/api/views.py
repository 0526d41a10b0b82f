"""Profiles API views.

Admin-only user management: list users with filters/ordering, create users
of any role (store owners get their store right away), retrieve/patch a
single user and deactivate users. Users are never hard-deleted.
"""

import logging

from django.contrib.auth import get_user_model
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.roles import ROLES
from ..services import create_account
from .permissions import IsAdminRole
from .serializers import (
    UserCreateSerializer,
    UserDetailSerializer,
    UserListSerializer,
    UserPatchSerializer,
)

logger = logging.getLogger(__name__)
User = get_user_model()

ORDERING_FIELDS = {
    "name": "profile__name",
    "email": "email",
    "role": "profile__role",
    "created_at": "date_joined",
}


# ----------------------------- helpers (module-level) -----------------------------

def _apply_filters_and_ordering(qs, params):
    """Substring filters on name/email/address, exact role filter, ordering."""
    name = params.get("name")
    if name:
        qs = qs.filter(profile__name__icontains=name)

    email = params.get("email")
    if email:
        qs = qs.filter(email__icontains=email)

    address = params.get("address")
    if address:
        qs = qs.filter(profile__address__icontains=address)

    role = params.get("role")
    if role:
        if role not in ROLES:
            raise ValidationError({"role": f"Allowed values: {', '.join(sorted(ROLES))}."})
        qs = qs.filter(profile__role=role)

    ordering = params.get("ordering")
    if not ordering:
        return qs.order_by("-date_joined", "-id")
    desc = ordering.startswith("-")
    field = ORDERING_FIELDS.get(ordering.lstrip("-"))
    if field is None:
        raise ValidationError(
            {"ordering": f"Allowed values: {', '.join(sorted(ORDERING_FIELDS))} (prefix '-' for descending)."}
        )
    return qs.order_by(f"-{field}" if desc else field, "-id")


# --------------------------------------- views ---------------------------------------

class UserListCreateAPIView(generics.ListCreateAPIView):
    """GET: list users (filter/order). POST: create a user of any role."""

    queryset = User.objects.all().select_related("profile")
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_serializer_class(self):
        return UserListSerializer if self.request.method == "GET" else UserCreateSerializer

    def get_queryset(self):
        return _apply_filters_and_ordering(super().get_queryset(), self.request.query_params)

    def create(self, request, *args, **kwargs):
        """Validate and create the account; return the user representation."""
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = create_account(**ser.validated_data)
        logger.info("User %s created by admin=%s", user.id, request.user.id)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_201_CREATED)


class UserDetailUpdateDeleteAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: user details. PATCH: update fields. DELETE: deactivate (soft delete)."""

    queryset = User.objects.all().select_related("profile")
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_serializer_class(self):
        return UserPatchSerializer if self.request.method in ("PATCH", "PUT") else UserDetailSerializer

    def partial_update(self, request, *args, **kwargs):
        instance = self.get_object()
        ser = self.get_serializer(instance, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        ser.save()
        return Response(UserDetailSerializer(instance).data, status=status.HTTP_200_OK)

    def update(self, request, *args, **kwargs):
        """Force partial updates via PATCH semantics."""
        kwargs["partial"] = True
        return self.partial_update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        """Deactivate the user and return 204 No Content."""
        instance = self.get_object()
        instance.is_active = False
        instance.save(update_fields=["is_active"])
        logger.info("User %s deactivated by admin=%s", instance.id, request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)
