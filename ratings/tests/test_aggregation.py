from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase

from common.exceptions import NotFound
from profiles.models import Profile
from ratings.models import Rating
from ratings.services.aggregation import (
    RatingAggregate,
    average_from_totals,
    recompute_store_rating,
)
from stores.models import Store

User = get_user_model()


def make_user(email, role):
    u = User.objects.create_user(email, email, "Secret@123")
    Profile.objects.create(user=u, name="Test Account Holder Name", role=role)
    return u


class AverageFromTotalsTests(SimpleTestCase):
    def test_no_ratings_is_zero(self):
        self.assertEqual(average_from_totals(0, 0), Decimal("0.00"))

    def test_mean_is_rounded_to_two_places(self):
        # 5 + 5 + 4
        self.assertEqual(average_from_totals(14, 3), Decimal("4.67"))

    def test_rounding_is_half_up(self):
        # 17 / 8 = 2.125 -> 2.13 (banker's rounding would give 2.12)
        self.assertEqual(average_from_totals(17, 8), Decimal("2.13"))

    def test_average_always_has_two_decimal_places(self):
        self.assertEqual(str(average_from_totals(9, 2)), "4.50")
        self.assertEqual(str(average_from_totals(4, 1)), "4.00")


class RecomputeStoreRatingTests(TestCase):
    def setUp(self):
        self.owner = make_user("owner@ex.com", "store_owner")
        self.store = Store.objects.create(
            owner=self.owner, name="Corner Shop", email="shop@ex.com", address="1 Road"
        )
        self.customers = [make_user(f"c{i}@ex.com", "normal_user") for i in range(3)]

    def _rate(self, values):
        for user, value in zip(self.customers, values):
            Rating.objects.create(user=user, store=self.store, rating=value)

    def test_recompute_writes_mean_and_count(self):
        self._rate([5, 5, 4])
        agg = recompute_store_rating(self.store.id)
        self.store.refresh_from_db()
        self.assertEqual(agg, RatingAggregate(Decimal("4.67"), 3))
        self.assertEqual(self.store.average_rating, Decimal("4.67"))
        self.assertEqual(self.store.total_ratings, 3)

    def test_recompute_without_ratings_resets_to_zero(self):
        Store.objects.filter(pk=self.store.pk).update(average_rating=Decimal("3.00"), total_ratings=7)
        recompute_store_rating(self.store.id)
        self.store.refresh_from_db()
        self.assertEqual(self.store.average_rating, Decimal("0.00"))
        self.assertEqual(self.store.total_ratings, 0)

    def test_recompute_is_idempotent(self):
        self._rate([3, 4])
        first = recompute_store_rating(self.store.id)
        second = recompute_store_rating(self.store.id)
        self.assertEqual(first, second)

    def test_ratings_of_deactivated_users_still_count(self):
        self._rate([1, 5])
        self.customers[0].is_active = False
        self.customers[0].save(update_fields=["is_active"])
        agg = recompute_store_rating(self.store.id)
        self.assertEqual(agg.count, 2)
        self.assertEqual(agg.average, Decimal("3.00"))

    def test_inactive_store_is_recomputed_too(self):
        self._rate([2])
        Store.objects.filter(pk=self.store.pk).update(is_active=False)
        agg = recompute_store_rating(self.store.id)
        self.assertEqual(agg.count, 1)

    def test_only_this_stores_ratings_are_counted(self):
        other_owner = make_user("owner2@ex.com", "store_owner")
        other = Store.objects.create(
            owner=other_owner, name="Other Shop", email="other@ex.com", address="2 Road"
        )
        Rating.objects.create(user=self.customers[0], store=other, rating=1)
        self._rate([5])
        agg = recompute_store_rating(self.store.id)
        self.assertEqual(agg, RatingAggregate(Decimal("5.00"), 1))

    def test_unknown_store_raises_not_found(self):
        with self.assertRaises(NotFound):
            recompute_store_rating(999999)
