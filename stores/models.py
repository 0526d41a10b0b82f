"""Stores app models.

Defines the Store model. Each store belongs to exactly one owner account
(one store per owner, enforced by the OneToOne relation). ``average_rating``
and ``total_ratings`` mirror the store's Rating rows and are written only by
``ratings.services.aggregation``; they are not editable through forms or
serializers.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import (
    MaxLengthValidator,
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
)
from django.db import models


class Store(models.Model):
    """A rated business owned by a store_owner account."""

    name = models.CharField(
        max_length=60,
        validators=[MinLengthValidator(5)],
        db_index=True,
    )
    email = models.EmailField(max_length=255, unique=True)
    address = models.TextField(validators=[MaxLengthValidator(400)])
    owner = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="store",
    )
    is_active = models.BooleanField(default=True)

    average_rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
        db_index=True,
    )
    total_ratings = models.PositiveIntegerField(default=0, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Store<{self.id} {self.name} {self.average_rating}/{self.total_ratings}>"
