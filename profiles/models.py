"""Profiles app models.

Defines the Profile model that extends the base user with the account role
(admin/normal_user/store_owner) and the contact data every role shares.
String fields default to empty strings to avoid nulls in API responses.
"""

from django.conf import settings
from django.core.validators import MaxLengthValidator, MinLengthValidator
from django.db import models

from common.roles import ROLE_CHOICES, ROLE_NORMAL_USER


class Profile(models.Model):
    """
    Profile for a single user.

    Users are never hard-deleted; deactivation goes through ``user.is_active``.
    A profile is created at most once per user (OneToOne relationship).
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    name = models.CharField(
        max_length=60,
        validators=[MinLengthValidator(20)],
    )
    address = models.TextField(
        blank=True,
        default="",
        validators=[MaxLengthValidator(400)],
    )
    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_NORMAL_USER,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.user_id}:{self.user.email} {self.role}>"
