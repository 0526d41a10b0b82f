"""Ratings API serializers.

Provide serializers for submitting a rating, returning rating data with the
store's fresh aggregates, and partially updating rating/comment. Persistence
goes through ``ratings.services.lifecycle``; these classes only shape input
and output.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from ratings.models import MAX_RATING, MIN_RATING, Rating
from stores.models import Store

User = get_user_model()


class RatingUserSerializer(serializers.ModelSerializer):
    """Minimal author representation (id, name, email)."""

    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "name", "email"]

    def get_name(self, obj):
        profile = getattr(obj, "profile", None)
        return getattr(profile, "name", "") or ""


class RatingStoreSerializer(serializers.ModelSerializer):
    """Store summary with its aggregate fields."""

    class Meta:
        model = Store
        fields = ["id", "name", "address", "average_rating", "total_ratings"]
        read_only_fields = fields


class RatingSubmitSerializer(serializers.Serializer):
    """Input serializer for submitting (creating or overwriting) a rating."""

    store_id = serializers.IntegerField(required=True)
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING, required=True)
    comment = serializers.CharField(allow_blank=True, allow_null=True, required=False, default=None)


class RatingPatchSerializer(serializers.Serializer):
    """Patch serializer for updating rating/comment only."""

    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING, required=False)
    comment = serializers.CharField(allow_blank=True, allow_null=True, required=False)


class RatingOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a rating with its author and store."""

    user = RatingUserSerializer(read_only=True)
    store = RatingStoreSerializer(read_only=True)

    class Meta:
        model = Rating
        fields = [
            "id",
            "user",
            "store",
            "rating",
            "comment",
            "created_at",
            "updated_at",
        ]
