"""Auth API serializers.

Provides serializers for signup, login and password change. Signup creates a
``normal_user`` account; the email is the login identifier and must be unique
(case-insensitive).
"""

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from common.roles import ROLE_NORMAL_USER
from profiles.services import create_account, normalize_email
from profiles.validators import validate_account_password

User = get_user_model()


class SignupSerializer(serializers.Serializer):
    """Validate and create a new normal user."""

    name = serializers.CharField(min_length=20, max_length=60)
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(write_only=True)
    address = serializers.CharField(max_length=400)

    def validate_email(self, value):
        value = normalize_email(value)
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError(_("Email already in use."))
        return value

    def validate_password(self, value):
        validate_account_password(value)
        validate_password(value)
        return value

    def create(self, validated_data):
        return create_account(role=ROLE_NORMAL_USER, **validated_data)


class LoginSerializer(serializers.Serializer):
    """Authenticate email/password and attach the user to validated data."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = authenticate(
            username=normalize_email(attrs.get("email")),
            password=attrs.get("password"),
        )
        if not user:
            raise serializers.ValidationError({"detail": "Invalid Credentials"})
        attrs["user"] = user
        return attrs


class ChangePasswordSerializer(serializers.Serializer):
    """Check the current password and validate the new one."""

    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True)

    def validate_current_password(self, value):
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError(_("Current password is incorrect."))
        return value

    def validate_new_password(self, value):
        validate_account_password(value)
        validate_password(value, user=self.context["request"].user)
        return value

    def save(self, **kwargs):
        user = self.context["request"].user
        user.set_password(self.validated_data["new_password"])
        user.save(update_fields=["password"])
        return user
