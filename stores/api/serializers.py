"""Stores API serializers.

Input serializers for creating and patching stores, and output serializers
for list/detail/my-store payloads. ``average_rating`` and ``total_ratings``
are always read-only here; the ratings aggregation service owns them.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from stores.models import Store

User = get_user_model()


class StoreOwnerSerializer(serializers.ModelSerializer):
    """Minimal owner representation (id, name, email)."""

    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "name", "email"]

    def get_name(self, obj):
        profile = getattr(obj, "profile", None)
        return getattr(profile, "name", "") or ""


class StoreCreateSerializer(serializers.Serializer):
    """Input serializer for creating a store.

    ``owner`` is required for administrators and ignored for store owners,
    who always create their own store.
    """

    name = serializers.CharField(min_length=5, max_length=60)
    email = serializers.EmailField(max_length=255)
    address = serializers.CharField(max_length=400)
    owner = serializers.IntegerField(required=False)

    def validate_email(self, value):
        if Store.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Store with this email already exists.")
        return value


class StorePatchSerializer(serializers.ModelSerializer):
    """Patch serializer for the editable store fields."""

    name = serializers.CharField(min_length=5, max_length=60, required=False)
    address = serializers.CharField(max_length=400, required=False)

    class Meta:
        model = Store
        fields = ["name", "email", "address", "is_active"]

    def validate_email(self, value):
        qs = Store.objects.filter(email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Email already exists.")
        return value

    def update(self, instance, validated_data):
        """Save only the patched columns so aggregate fields are never written back."""
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save(update_fields=[*validated_data.keys(), "updated_at"])
        return instance


class StoreDetailSerializer(serializers.ModelSerializer):
    """Full store representation."""

    owner = StoreOwnerSerializer(read_only=True)

    class Meta:
        model = Store
        fields = [
            "id",
            "name",
            "email",
            "address",
            "owner",
            "is_active",
            "average_rating",
            "total_ratings",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class StoreListSerializer(serializers.ModelSerializer):
    """List representation including the requester's own rating (or null)."""

    owner = StoreOwnerSerializer(read_only=True)
    user_rating = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = [
            "id",
            "name",
            "email",
            "address",
            "average_rating",
            "total_ratings",
            "created_at",
            "owner",
            "user_rating",
        ]

    def get_user_rating(self, obj):
        own = getattr(obj, "own_ratings", None)
        if not own:
            return None
        rating = own[0]
        return {
            "id": rating.id,
            "rating": rating.rating,
            "comment": rating.comment,
            "rated_at": rating.created_at,
        }
