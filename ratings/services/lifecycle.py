"""Rating lifecycle service.

Single entry point for creating, updating and deleting Rating rows. Every
mutation is committed first and then followed by an explicit, synchronous
``recompute_store_rating`` call, so callers observe fresh store aggregates as
soon as these functions return.

A failing recompute after a committed mutation is logged and not re-raised:
the rating write stands and the next mutation for that store repairs the
aggregate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from common import roles
from common.exceptions import Conflict, Forbidden, InvalidInput, NotFound
from ratings.models import MAX_RATING, MIN_RATING, Rating
from stores.models import Store

from .aggregation import recompute_store_rating

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class SubmitResult:
    rating: Rating
    was_created: bool


def validate_rating_value(value) -> int:
    """Return ``value`` if it is an integer in [1, 5]; raise ``InvalidInput`` otherwise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput({"rating": "Rating must be an integer between 1 and 5."})
    if not MIN_RATING <= value <= MAX_RATING:
        raise InvalidInput({"rating": "Rating must be an integer between 1 and 5."})
    return value


def _normalize_comment(comment):
    if comment is None:
        return None
    comment = str(comment).strip()
    return comment or None


def _active_store_or_404(store_id) -> Store:
    try:
        return Store.objects.get(pk=store_id, is_active=True)
    except (Store.DoesNotExist, ValueError, TypeError):
        raise NotFound("Store not found or inactive.")


def _find_existing(user, store):
    return Rating.objects.select_for_update().filter(user=user, store=store).first()


def _write_rating(user, store, value, comment):
    """Insert or update the (user, store) rating inside one transaction."""
    with transaction.atomic():
        existing = _find_existing(user, store)
        if existing is not None:
            existing.rating = value
            existing.comment = comment
            existing.save(update_fields=["rating", "comment", "updated_at"])
            return existing, False
        return Rating.objects.create(user=user, store=store, rating=value, comment=comment), True


def _refresh_aggregate(store_id):
    try:
        recompute_store_rating(store_id)
    except DatabaseError:
        logger.exception("Aggregate recompute failed for store %s; left for next mutation", store_id)


def submit_rating(*, user, store_id, value, comment=None) -> SubmitResult:
    """Create the user's rating for a store, or overwrite it if one exists.

    Raises:
        InvalidInput: ``value`` is not an integer in [1, 5].
        NotFound: the store does not exist or is inactive.
        Forbidden: the user owns the store.
        Conflict: the unique constraint kept rejecting the write after all retries.
    """
    value = validate_rating_value(value)
    store = _active_store_or_404(store_id)
    if not roles.is_allowed(user, roles.STORE_RATE, store):
        if store.owner_id == user.id:
            raise Forbidden("You cannot rate your own store.")
        raise Forbidden("You are not allowed to rate stores.")

    comment = _normalize_comment(comment)
    attempts = max(1, settings.RATINGS_SUBMIT_MAX_ATTEMPTS)

    for attempt in range(1, attempts + 1):
        try:
            rating, created = _write_rating(user, store, value, comment)
            break
        except IntegrityError:
            # A concurrent submit inserted the row first; retry as an update.
            logger.warning(
                "Rating insert conflict user=%s store=%s (attempt %s/%s)",
                user.id, store.id, attempt, attempts,
            )
    else:
        raise Conflict("Could not store the rating due to concurrent updates. Try again.")

    _refresh_aggregate(store.id)
    logger.info(
        "Rating %s user=%s store=%s value=%s",
        "created" if created else "updated", user.id, store.id, value,
    )
    return SubmitResult(rating=rating, was_created=created)


def _rating_or_404(rating_id) -> Rating:
    try:
        return Rating.objects.select_related("store").get(pk=rating_id)
    except (Rating.DoesNotExist, ValueError, TypeError):
        raise NotFound("Rating not found.")


def update_rating(*, rating_id, user, value=None, comment=_UNSET) -> Rating:
    """Partially update a rating by id (author only, active stores only)."""
    if value is not None:
        value = validate_rating_value(value)
    rating = _rating_or_404(rating_id)
    if not rating.store.is_active:
        raise NotFound("Store not found or inactive.")
    if rating.user_id != user.id:
        raise Forbidden("You can only modify your own ratings.")

    with transaction.atomic():
        rating = Rating.objects.select_for_update().filter(pk=rating.pk).first()
        if rating is None:
            raise NotFound("Rating not found.")
        fields = ["updated_at"]
        if value is not None:
            rating.rating = value
            fields.append("rating")
        if comment is not _UNSET:
            rating.comment = _normalize_comment(comment)
            fields.append("comment")
        rating.save(update_fields=fields)

    _refresh_aggregate(rating.store_id)
    logger.info("Rating %s updated by user=%s", rating.id, user.id)
    return rating


def remove_rating(*, rating_id, user) -> None:
    """Delete a rating (author or admin) and refresh its store's aggregate.

    Raises:
        NotFound: no rating with ``rating_id``.
        Forbidden: requester is neither the author nor an admin.
    """
    rating = _rating_or_404(rating_id)
    if not roles.is_allowed(user, roles.RATING_DELETE, rating):
        raise Forbidden("You can only delete your own ratings.")

    store_id = rating.store_id
    with transaction.atomic():
        deleted, _ = Rating.objects.filter(pk=rating.pk).delete()
    if not deleted:
        raise NotFound("Rating not found.")

    _refresh_aggregate(store_id)
    logger.info("Rating %s removed by user=%s store=%s", rating_id, user.id, store_id)
