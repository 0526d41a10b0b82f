"""Ratings app models.

Defines the Rating model. A user can hold at most one rating per store; the
pair is protected by a database unique constraint so concurrent submissions
cannot race past it. Ratings are constrained between 1 and 5.

Rating rows are written through ``ratings.services.lifecycle`` only, which
keeps the parent store's aggregate fields in step.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from stores.models import Store

MIN_RATING = 1
MAX_RATING = 5


class Rating(models.Model):
    """One user's score (and optional comment) for one store."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="ratings",
    )
    store = models.ForeignKey(
        Store,
        on_delete=models.PROTECT,
        related_name="ratings",
    )

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)],
        db_index=True,
    )
    comment = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "store"],
                name="unique_rating_per_user_and_store",
            ),
        ]
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Rating<{self.id} {self.user_id}->{self.store_id} {self.rating}>"
