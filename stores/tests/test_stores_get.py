from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from profiles.models import Profile
from ratings.services.lifecycle import submit_rating
from stores.models import Store

User = get_user_model()


def make_user(email, role):
    u = User.objects.create_user(email, email, "Secret@123")
    Profile.objects.create(user=u, name="Test Account Holder Name", role=role)
    tok = Token.objects.create(user=u)
    return u, tok


class StoreGetTests(APITestCase):
    def setUp(self):
        self.url = reverse("store-list")
        self.owner_a, self.owner_a_tok = make_user("a@ex.com", "store_owner")
        self.owner_b, self.owner_b_tok = make_user("b@ex.com", "store_owner")
        self.owner_c, _ = make_user("c@ex.com", "store_owner")
        self.cust, self.cust_tok = make_user("cust@ex.com", "normal_user")
        self.cust2, _ = make_user("cust2@ex.com", "normal_user")

        self.alpha = Store.objects.create(
            owner=self.owner_a, name="Alpha Bakery", email="alpha@ex.com", address="Main Street 1"
        )
        self.beta = Store.objects.create(
            owner=self.owner_b, name="Beta Books", email="beta@ex.com", address="Side Road 9"
        )
        self.gone = Store.objects.create(
            owner=self.owner_c, name="Closed Corner", email="gone@ex.com", address="Main Street 5",
            is_active=False,
        )
        submit_rating(user=self.cust, store_id=self.alpha.id, value=5)
        submit_rating(user=self.cust2, store_id=self.alpha.id, value=4)
        submit_rating(user=self.cust2, store_id=self.beta.id, value=2)

    def auth(self, tok):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {tok.key}")

    def ids(self, res):
        return [row["id"] for row in res.data["results"]]

    def test_requires_auth_401(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_lists_only_active_stores_paginated(self):
        self.auth(self.cust_tok)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)
        self.assertNotIn(self.gone.id, self.ids(res))
        for key in ("count", "next", "previous", "results"):
            self.assertIn(key, res.data)

    def test_page_size_param(self):
        self.auth(self.cust_tok)
        res = self.client.get(self.url, {"page_size": 1})
        self.assertEqual(len(res.data["results"]), 1)
        self.assertIsNotNone(res.data["next"])

    def test_user_rating_is_requesters_own(self):
        self.auth(self.cust_tok)
        res = self.client.get(self.url, {"ordering": "name"})
        alpha, beta = res.data["results"]
        self.assertEqual(alpha["user_rating"]["rating"], 5)
        self.assertIsNone(beta["user_rating"])

    def test_filters_name_and_address(self):
        self.auth(self.cust_tok)
        self.assertEqual(self.ids(self.client.get(self.url, {"name": "bakery"})), [self.alpha.id])
        self.assertEqual(self.ids(self.client.get(self.url, {"address": "side"})), [self.beta.id])

    def test_filter_rating_window(self):
        self.auth(self.cust_tok)
        res = self.client.get(self.url, {"min_rating": "4"})
        self.assertEqual(self.ids(res), [self.alpha.id])
        res = self.client.get(self.url, {"max_rating": "3"})
        self.assertEqual(self.ids(res), [self.beta.id])
        res = self.client.get(self.url, {"min_rating": "abc"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_ordering(self):
        self.auth(self.cust_tok)
        res = self.client.get(self.url, {"ordering": "-average_rating"})
        self.assertEqual(self.ids(res), [self.alpha.id, self.beta.id])
        self.assertEqual(res.data["results"][0]["average_rating"], "4.50")
        res = self.client.get(self.url, {"ordering": "total_ratings"})
        self.assertEqual(self.ids(res), [self.beta.id, self.alpha.id])

    def test_invalid_ordering_400(self):
        self.auth(self.cust_tok)
        res = self.client.get(self.url, {"ordering": "owner"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_detail_get(self):
        self.auth(self.cust_tok)
        res = self.client.get(reverse("store-detail", args=[self.alpha.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["total_ratings"], 2)
        self.assertEqual(res.data["owner"]["email"], "a@ex.com")

    def test_detail_not_found_404(self):
        self.auth(self.cust_tok)
        res = self.client.get(reverse("store-detail", args=[999999]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)


class MyStoreTests(APITestCase):
    def setUp(self):
        self.url = reverse("store-my")
        self.owner, self.owner_tok = make_user("owner@ex.com", "store_owner")
        self.store = Store.objects.create(
            owner=self.owner, name="Corner Shop", email="shop@ex.com", address="1 Road"
        )
        self.cust, self.cust_tok = make_user("cust@ex.com", "normal_user")
        self.cust2, _ = make_user("cust2@ex.com", "normal_user")
        submit_rating(user=self.cust, store_id=self.store.id, value=5, comment="lovely")
        submit_rating(user=self.cust2, store_id=self.store.id, value=3)

    def auth(self, tok):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {tok.key}")

    def test_owner_gets_store_with_distribution(self):
        self.auth(self.owner_tok)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["id"], self.store.id)
        self.assertEqual(res.data["average_rating"], "4.00")
        self.assertEqual(res.data["rating_distribution"], {"1": 0, "2": 0, "3": 1, "4": 0, "5": 1})
        self.assertEqual(len(res.data["recent_ratings"]), 2)
        self.assertEqual(res.data["recent_ratings"][0]["user"]["email"], "cust2@ex.com")

    def test_owner_without_store_404(self):
        _, tok = make_user("owner2@ex.com", "store_owner")
        self.auth(tok)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_normal_user_403(self):
        self.auth(self.cust_tok)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
