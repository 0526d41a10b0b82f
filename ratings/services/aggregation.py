"""Store rating aggregation.

``recompute_store_rating`` rebuilds a store's ``average_rating`` and
``total_ratings`` from the full current set of its Rating rows. It always
recomputes from source rows (never adjusts incrementally), so calling it again
is harmless and repairs any stale aggregate.

Guarantees:
- the store row is locked for the duration of the read-aggregate-write
  sequence, so concurrent recomputes for one store serialize
- count and sum come from one aggregate query, so both derived fields
  describe the same snapshot of the Rating table
- both fields are written by a single UPDATE
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.db.models import Count, Sum

from common.exceptions import NotFound
from ratings.models import Rating
from stores.models import Store

TWO_PLACES = Decimal("0.01")
ZERO_AVERAGE = Decimal("0.00")


@dataclass(frozen=True)
class RatingAggregate:
    average: Decimal
    count: int


def average_from_totals(total: int, count: int) -> Decimal:
    """Mean of ``count`` ratings summing to ``total``, rounded half-up to 2 places."""
    if not count:
        return ZERO_AVERAGE
    return (Decimal(total) / Decimal(count)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


@transaction.atomic
def recompute_store_rating(store_id: int) -> RatingAggregate:
    """Recompute and persist the aggregate rating fields of one store.

    Inactive stores are recomputed like any other; the store's own id is all
    that matters. Raises ``NotFound`` if no store with ``store_id`` exists.
    """
    locked = Store.objects.select_for_update().filter(pk=store_id).values_list("pk", flat=True)
    if not locked:
        raise NotFound("Store not found.")

    totals = Rating.objects.filter(store_id=store_id).aggregate(
        total=Sum("rating"),
        count=Count("id"),
    )
    count = totals["count"] or 0
    aggregate = RatingAggregate(
        average=average_from_totals(totals["total"] or 0, count),
        count=count,
    )

    Store.objects.filter(pk=store_id).update(
        average_rating=aggregate.average,
        total_ratings=aggregate.count,
    )
    return aggregate
