"""Field rules for account data."""

import re

from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

PASSWORD_RE = re.compile(r"^(?=.*[A-Z])(?=.*[!@#$%^&*(),.?\":{}|<>]).{8,16}$")


def validate_account_password(value: str) -> str:
    """8-16 characters with at least one uppercase letter and one special character."""
    if not PASSWORD_RE.match(value or ""):
        raise serializers.ValidationError(
            _("Password must be 8-16 characters and include an uppercase letter and a special character.")
        )
    return value
