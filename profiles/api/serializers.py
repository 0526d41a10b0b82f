"""Profiles API serializers.

Contains serializers for:
- creating a user of any role (admin only),
- listing users and reading a single user with owned store and ratings,
- partially updating a user (admin only).

The role lives on Profile; name/address are flattened into the user payload.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from common.roles import ROLE_CHOICES
from ratings.models import Rating
from stores.models import Store
from ..models import Profile
from ..services import normalize_email
from ..validators import validate_account_password

User = get_user_model()


# ------------------------------ helpers ------------------------------

def _profile_attr(user, attr):
    profile = getattr(user, "profile", None)
    return getattr(profile, attr, "") or ""


def _owned_store(user):
    return Store.objects.filter(owner=user).first()


# ------------------------------ serializers ------------------------------

class UserCreateSerializer(serializers.Serializer):
    """Admin input for creating a user of any role."""

    name = serializers.CharField(min_length=20, max_length=60)
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(write_only=True)
    address = serializers.CharField(max_length=400)
    role = serializers.ChoiceField(choices=ROLE_CHOICES)

    def validate_email(self, value):
        value = normalize_email(value)
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User with this email already exists.")
        return value

    def validate_password(self, value):
        return validate_account_password(value)


class UserPatchSerializer(serializers.Serializer):
    """Admin patch for name, email, address and the active flag."""

    name = serializers.CharField(min_length=20, max_length=60, required=False)
    email = serializers.EmailField(max_length=255, required=False)
    address = serializers.CharField(max_length=400, required=False)
    is_active = serializers.BooleanField(required=False)

    def validate_email(self, value):
        value = normalize_email(value)
        qs = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Email already exists.")
        return value

    def update(self, instance, validated_data):
        user_fields = []
        if "email" in validated_data:
            instance.email = validated_data["email"]
            instance.username = validated_data["email"]
            user_fields += ["email", "username"]
        if "is_active" in validated_data:
            instance.is_active = validated_data["is_active"]
            user_fields.append("is_active")
        if user_fields:
            instance.save(update_fields=user_fields)

        profile_fields = [f for f in ("name", "address") if f in validated_data]
        profile = getattr(instance, "profile", None)
        if profile is None:
            profile = Profile.objects.create(user=instance)
        for f in profile_fields:
            setattr(profile, f, validated_data[f])
        if profile_fields:
            profile.save(update_fields=[*profile_fields, "updated_at"])
        return instance


class OwnedStoreSerializer(serializers.ModelSerializer):
    class Meta:
        model = Store
        fields = ["id", "name", "email", "address", "average_rating", "total_ratings", "is_active"]
        read_only_fields = fields


class UserRatingSerializer(serializers.ModelSerializer):
    store = serializers.SerializerMethodField()

    class Meta:
        model = Rating
        fields = ["id", "rating", "comment", "created_at", "store"]

    def get_store(self, obj):
        return {"id": obj.store_id, "name": obj.store.name}


class UserListSerializer(serializers.ModelSerializer):
    """User row with flattened profile fields and a store summary for owners."""

    name = serializers.SerializerMethodField()
    address = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(source="date_joined", read_only=True)
    store = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "name", "email", "address", "role", "is_active", "created_at", "store"]

    def get_name(self, obj):
        return _profile_attr(obj, "name")

    def get_address(self, obj):
        return _profile_attr(obj, "address")

    def get_role(self, obj):
        return _profile_attr(obj, "role")

    def get_store(self, obj):
        store = _owned_store(obj)
        return OwnedStoreSerializer(store).data if store else None


class UserDetailSerializer(UserListSerializer):
    """Single user including the ratings they submitted."""

    ratings = serializers.SerializerMethodField()

    class Meta(UserListSerializer.Meta):
        fields = UserListSerializer.Meta.fields + ["ratings"]

    def get_ratings(self, obj):
        qs = Rating.objects.filter(user=obj).select_related("store").order_by("-created_at", "-id")
        return UserRatingSerializer(qs, many=True).data
