"""Stores API views.

List active stores with filters, ordering and pagination, and create stores
on the same endpoint. Store owners fetch their own store with rating
statistics. Retrieve/patch a single store (admin or owner) and deactivate it
(admin only, soft delete).
"""

import logging
from decimal import Decimal, InvalidOperation

from django.contrib.auth import get_user_model
from django.db.models import Count, Prefetch
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common import roles
from common.exceptions import Forbidden, NotFound
from ratings.models import MAX_RATING, MIN_RATING, Rating
from stores.models import Store
from stores.services import create_store
from .permissions import CanCreateStore, IsStoreOwnerRole, StoreObjectPermission
from .serializers import (
    StoreCreateSerializer,
    StoreDetailSerializer,
    StoreListSerializer,
    StorePatchSerializer,
)

logger = logging.getLogger(__name__)
User = get_user_model()

RECENT_RATINGS_LIMIT = 10


# ----------------------------- helpers (module-level) -----------------------------

def _decimal_param(params, name):
    v = params.get(name)
    if v in (None, ""):
        return None
    try:
        return Decimal(v)
    except (InvalidOperation, TypeError):
        raise ValidationError({name: "Must be a number."})


def _apply_filters(qs, params):
    """Substring filters on name/address and an average-rating window."""
    name = params.get("name")
    if name:
        qs = qs.filter(name__icontains=name)

    address = params.get("address")
    if address:
        qs = qs.filter(address__icontains=address)

    min_rating = _decimal_param(params, "min_rating")
    if min_rating is not None:
        qs = qs.filter(average_rating__gte=min_rating)

    max_rating = _decimal_param(params, "max_rating")
    if max_rating is not None:
        qs = qs.filter(average_rating__lte=max_rating)
    return qs


def _apply_ordering(qs, ordering):
    if not ordering:
        return qs.order_by("-created_at", "-id")
    allowed = {"name", "address", "average_rating", "total_ratings", "created_at"}
    if ordering.lstrip("-") not in allowed:
        raise ValidationError(
            {"ordering": f"Allowed values: {', '.join(sorted(allowed))} (prefix '-' for descending)."}
        )
    return qs.order_by(ordering, "-id")


def _resolve_owner(request, owner_id):
    """Admins name the owner explicitly; store owners always create their own store."""
    if roles.get_role(request.user) == roles.ROLE_STORE_OWNER:
        return request.user
    if owner_id is None:
        raise ValidationError({"owner": "This field is required."})
    owner = User.objects.select_related("profile").filter(pk=owner_id).first()
    if owner is None:
        raise NotFound("Owner not found.")
    return owner


def _rating_distribution(store):
    distribution = {str(v): 0 for v in range(MIN_RATING, MAX_RATING + 1)}
    for row in store.ratings.values("rating").annotate(n=Count("id")):
        distribution[str(row["rating"])] = row["n"]
    return distribution


def _recent_ratings(store):
    recent = (
        store.ratings.select_related("user", "user__profile")
        .order_by("-created_at", "-id")[:RECENT_RATINGS_LIMIT]
    )
    return [
        {
            "id": r.id,
            "rating": r.rating,
            "comment": r.comment,
            "created_at": r.created_at,
            "user": {
                "id": r.user_id,
                "name": getattr(getattr(r.user, "profile", None), "name", ""),
                "email": r.user.email,
            },
        }
        for r in recent
    ]


# --------------------------------------- views ---------------------------------------

class StoreListCreateAPIView(generics.ListCreateAPIView):
    """GET: paginated list of active stores. POST: create store (admin or store owner)."""

    queryset = Store.objects.filter(is_active=True).select_related("owner", "owner__profile")

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), CanCreateStore()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        return StoreListSerializer if self.request.method == "GET" else StoreCreateSerializer

    # --- GET ---
    def get_queryset(self):
        qs = super().get_queryset().prefetch_related(
            Prefetch(
                "ratings",
                queryset=Rating.objects.filter(user=self.request.user),
                to_attr="own_ratings",
            )
        )
        qs = _apply_filters(qs, self.request.query_params)
        return _apply_ordering(qs, self.request.query_params.get("ordering"))

    # --- POST ---
    def create(self, request, *args, **kwargs):
        """Validate and create a store; return the full store payload."""
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        owner = _resolve_owner(request, ser.validated_data.get("owner"))
        store = create_store(
            owner=owner,
            name=ser.validated_data["name"],
            email=ser.validated_data["email"],
            address=ser.validated_data["address"],
        )
        return Response(StoreDetailSerializer(store).data, status=status.HTTP_201_CREATED)


class MyStoreAPIView(APIView):
    """GET /api/stores/my/ -> the owner's store with rating distribution and recent ratings."""

    permission_classes = [IsAuthenticated, IsStoreOwnerRole]

    def get(self, request):
        store = Store.objects.select_related("owner", "owner__profile").filter(owner=request.user).first()
        if store is None:
            raise NotFound("Store not found.")
        data = StoreDetailSerializer(store).data
        data["rating_distribution"] = _rating_distribution(store)
        data["recent_ratings"] = _recent_ratings(store)
        return Response(data, status=status.HTTP_200_OK)


class StoreDetailUpdateDeleteAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: store detail. PATCH: admin or owner. DELETE: admin (deactivates)."""

    queryset = Store.objects.all().select_related("owner", "owner__profile")
    permission_classes = [IsAuthenticated, StoreObjectPermission]

    def get_serializer_class(self):
        return StorePatchSerializer if self.request.method in ("PATCH", "PUT") else StoreDetailSerializer

    def partial_update(self, request, *args, **kwargs):
        """Update editable fields; ``is_active`` may only be changed by admins."""
        instance = self.get_object()
        if "is_active" in request.data and not roles.is_admin(request.user):
            raise Forbidden("Only administrators may change the active state of a store.")
        ser = self.get_serializer(instance, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        self.perform_update(ser)
        logger.info("Store %s updated by user=%s", instance.id, request.user.id)
        return Response(StoreDetailSerializer(instance).data, status=status.HTTP_200_OK)

    def update(self, request, *args, **kwargs):
        """Force partial updates via PATCH semantics."""
        kwargs["partial"] = True
        return self.partial_update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        """Soft delete: flag the store inactive and return 204 No Content."""
        instance = self.get_object()
        instance.is_active = False
        instance.save(update_fields=["is_active", "updated_at"])
        logger.info("Store %s deactivated by user=%s", instance.id, request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)
