from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from profiles.models import Profile
from ratings.models import Rating
from stores.models import Store

User = get_user_model()


def make_user(email, role):
    u = User.objects.create_user(email, email, "Secret@123")
    Profile.objects.create(user=u, name="Test Account Holder Name", role=role)
    tok = Token.objects.create(user=u)
    return u, tok


class RatingSubmitTests(APITestCase):
    def setUp(self):
        self.url = reverse("rating-list")
        self.owner, self.owner_tok = make_user("owner@ex.com", "store_owner")
        self.store = Store.objects.create(
            owner=self.owner, name="Corner Shop", email="shop@ex.com", address="1 Road"
        )
        self.cust, self.cust_tok = make_user("cust@ex.com", "normal_user")
        self.cust2, self.cust2_tok = make_user("cust2@ex.com", "normal_user")

    def auth(self, tok):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {tok.key}")

    def test_submit_creates_rating_201_with_fresh_aggregate(self):
        self.auth(self.cust_tok)
        payload = {"store_id": self.store.id, "rating": 4, "comment": "great"}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["rating"], 4)
        self.assertEqual(res.data["comment"], "great")
        self.assertEqual(res.data["user"]["id"], self.cust.id)
        self.assertEqual(res.data["store"]["id"], self.store.id)
        self.assertEqual(res.data["store"]["average_rating"], "4.00")
        self.assertEqual(res.data["store"]["total_ratings"], 1)

    def test_resubmit_updates_200_same_row(self):
        self.auth(self.cust_tok)
        res1 = self.client.post(self.url, {"store_id": self.store.id, "rating": 3}, format="json")
        res2 = self.client.post(self.url, {"store_id": self.store.id, "rating": 5}, format="json")
        self.assertEqual(res1.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res2.status_code, status.HTTP_200_OK)
        self.assertEqual(res1.data["id"], res2.data["id"])
        self.assertEqual(Rating.objects.filter(store=self.store).count(), 1)
        self.assertEqual(res2.data["store"]["average_rating"], "5.00")

    def test_store_listing_reflects_submit_immediately(self):
        self.auth(self.cust_tok)
        self.client.post(self.url, {"store_id": self.store.id, "rating": 5}, format="json")
        self.auth(self.cust2_tok)
        self.client.post(self.url, {"store_id": self.store.id, "rating": 4}, format="json")
        res = self.client.get(reverse("store-list"))
        row = res.data["results"][0]
        self.assertEqual(row["average_rating"], "4.50")
        self.assertEqual(row["total_ratings"], 2)
        self.assertEqual(row["user_rating"]["rating"], 4)

    def test_unauthenticated_401(self):
        res = self.client.post(self.url, {"store_id": self.store.id, "rating": 4}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_owner_rating_own_store_403(self):
        self.auth(self.owner_tok)
        res = self.client.post(self.url, {"store_id": self.store.id, "rating": 5}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Rating.objects.exists())

    def test_invalid_rating_400(self):
        self.auth(self.cust_tok)
        for bad in (0, 6):
            res = self.client.post(self.url, {"store_id": self.store.id, "rating": bad}, format="json")
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Rating.objects.exists())

    def test_missing_fields_400(self):
        self.auth(self.cust_tok)
        res = self.client.post(self.url, {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("store_id", res.data)
        self.assertIn("rating", res.data)

    def test_inactive_store_404(self):
        Store.objects.filter(pk=self.store.pk).update(is_active=False)
        self.auth(self.cust_tok)
        res = self.client.post(self.url, {"store_id": self.store.id, "rating": 4}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_payload_user_ignored_server_sets_author(self):
        self.auth(self.cust_tok)
        payload = {"store_id": self.store.id, "rating": 2, "user": self.cust2.id}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["user"]["id"], self.cust.id)
