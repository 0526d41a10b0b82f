"""Ratings API views.

Submit a rating (create or overwrite) and, for admins, list all ratings on the
same endpoint. Users list their own ratings; admins and store owners list a
store's ratings with statistics. Retrieve/patch/delete a single rating.

Every write goes through ``ratings.services.lifecycle`` so the store's
aggregate fields are already fresh when the response is rendered.
"""

from django.db.models import Count
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common import roles
from ratings.models import MAX_RATING, MIN_RATING, Rating
from ratings.services.lifecycle import remove_rating, submit_rating, update_rating
from stores.models import Store
from .permissions import CanAccessRating, CanViewStoreRatings, IsAdminRole
from .serializers import (
    RatingOutputSerializer,
    RatingPatchSerializer,
    RatingStoreSerializer,
    RatingSubmitSerializer,
)


# ----------------------------- helpers (module-level) -----------------------------

ALLOWED_ORDERING = {"rating", "-rating", "created_at", "-created_at", "updated_at", "-updated_at"}


def _int_param(params, name):
    """Return query param ``name`` as int or None; raises ValidationError on bad input."""
    v = params.get(name)
    if not v:
        return None
    if not (v.isascii() and v.isdigit()):
        raise ValidationError({name: "Must be an integer."})
    return int(v)


def _apply_filters_and_ordering(qs, params, filters=("rating",)):
    """Filter by the given integer params and apply ordering."""
    lookups = {"rating": "rating", "user_id": "user_id", "store_id": "store_id"}
    for name in filters:
        value = _int_param(params, name)
        if value is not None:
            qs = qs.filter(**{lookups[name]: value})

    ordering = params.get("ordering")
    if ordering:
        if ordering not in ALLOWED_ORDERING:
            raise ValidationError(
                {"ordering": f"Allowed values: {', '.join(sorted(ALLOWED_ORDERING))}."}
            )
        return qs.order_by(ordering, "-id")
    return qs.order_by("-created_at", "-id")


def _rating_statistics(store):
    """Total, cached average and a 1..5 distribution of the store's ratings."""
    distribution = {str(v): 0 for v in range(MIN_RATING, MAX_RATING + 1)}
    rows = Rating.objects.filter(store=store).values("rating").annotate(n=Count("id"))
    for row in rows:
        distribution[str(row["rating"])] = row["n"]
    return {
        "total": sum(distribution.values()),
        "average": str(store.average_rating),
        "distribution": distribution,
    }


def _with_relations(qs):
    return qs.select_related("user", "user__profile", "store")


# --------------------------------------- views ---------------------------------------

class RatingListCreateAPIView(generics.ListCreateAPIView):
    """GET: list all ratings (admin). POST: submit or update own rating."""

    queryset = _with_relations(Rating.objects.all())

    def get_permissions(self):
        """Admin-only for GET; any authenticated user may submit."""
        if self.request.method == "GET":
            return [IsAuthenticated(), IsAdminRole()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        """Use output serializer for GET and submit serializer for POST."""
        return RatingOutputSerializer if self.request.method == "GET" else RatingSubmitSerializer

    # --- GET ---
    def get_queryset(self):
        """Apply optional filters and ordering from query parameters."""
        return _apply_filters_and_ordering(
            super().get_queryset(),
            self.request.query_params,
            filters=("rating", "user_id", "store_id"),
        )

    # --- POST ---
    def create(self, request, *args, **kwargs):
        """Validate and submit a rating; 201 when created, 200 when overwritten."""
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = submit_rating(
            user=request.user,
            store_id=ser.validated_data["store_id"],
            value=ser.validated_data["rating"],
            comment=ser.validated_data.get("comment"),
        )
        rating = _with_relations(Rating.objects).get(pk=result.rating.pk)
        return Response(
            RatingOutputSerializer(rating).data,
            status=status.HTTP_201_CREATED if result.was_created else status.HTTP_200_OK,
        )


class MyRatingsListAPIView(generics.ListAPIView):
    """GET: the authenticated user's ratings on active stores."""

    serializer_class = RatingOutputSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        qs = _with_relations(
            Rating.objects.filter(user=self.request.user, store__is_active=True)
        )
        return _apply_filters_and_ordering(qs, self.request.query_params)


class StoreRatingsListAPIView(generics.ListAPIView):
    """GET: a store's ratings with aggregate statistics (admin or owning store owner)."""

    serializer_class = RatingOutputSerializer
    permission_classes = [IsAuthenticated, CanViewStoreRatings]

    def get_store(self):
        store = get_object_or_404(Store, pk=self.kwargs["store_id"])
        self.check_object_permissions(self.request, store)
        return store

    def get_queryset(self):
        qs = _with_relations(Rating.objects.filter(store_id=self.kwargs["store_id"]))
        return _apply_filters_and_ordering(qs, self.request.query_params)

    def list(self, request, *args, **kwargs):
        """Paginated ratings plus the store summary and rating statistics."""
        store = self.get_store()
        response = super().list(request, *args, **kwargs)
        response.data["store"] = RatingStoreSerializer(store).data
        response.data["rating_statistics"] = _rating_statistics(store)
        return response


class UserStoreRatingAPIView(APIView):
    """GET: the authenticated user's rating for one active store plus ``can_rate``."""

    permission_classes = [IsAuthenticated]

    def get(self, request, store_id: int):
        store = get_object_or_404(Store, pk=store_id, is_active=True)
        rating = _with_relations(Rating.objects).filter(user=request.user, store=store).first()
        data = {
            "rating": RatingOutputSerializer(rating).data if rating else None,
            "can_rate": roles.is_allowed(request.user, roles.STORE_RATE, store),
        }
        return Response(data, status=status.HTTP_200_OK)


class RatingDetailUpdateDeleteAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: author/owner/admin. PATCH: author only. DELETE: author or admin."""

    queryset = _with_relations(Rating.objects.all())
    permission_classes = [IsAuthenticated, CanAccessRating]

    def get_serializer_class(self):
        """Use patch serializer for PATCH; output serializer otherwise."""
        return RatingPatchSerializer if self.request.method == "PATCH" else RatingOutputSerializer

    def partial_update(self, request, *args, **kwargs):
        """Allow updating only 'rating' and 'comment'; return full rating."""
        extra = set(request.data.keys()) - {"rating", "comment"}
        if extra:
            return Response(
                {
                    "detail": (
                        "Only 'rating' and 'comment' may be updated. "
                        f"Invalid: {', '.join(sorted(extra))}."
                    )
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        instance = self.get_object()
        ser = self.get_serializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        changes = {}
        if "rating" in ser.validated_data:
            changes["value"] = ser.validated_data["rating"]
        if "comment" in ser.validated_data:
            changes["comment"] = ser.validated_data["comment"]
        update_rating(rating_id=instance.pk, user=request.user, **changes)
        rating = self.get_queryset().get(pk=instance.pk)
        return Response(RatingOutputSerializer(rating).data, status=status.HTTP_200_OK)

    def update(self, request, *args, **kwargs):
        """Force partial updates via PATCH semantics."""
        kwargs["partial"] = True
        return self.partial_update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        """Delete the rating (author or admin) and return 204 No Content."""
        instance = self.get_object()
        remove_rating(rating_id=instance.pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
