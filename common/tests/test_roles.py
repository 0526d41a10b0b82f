from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from common import roles
from profiles.models import Profile
from ratings.models import Rating
from stores.models import Store


User = get_user_model()


class RoleRuleTableTests(TestCase):
    """Access decisions answered by ``common.roles.is_allowed``."""

    def setUp(self):
        self.admin = self._user("admin@ex.com", roles.ROLE_ADMIN)
        self.owner = self._user("owner@ex.com", roles.ROLE_STORE_OWNER)
        self.other_owner = self._user("other@ex.com", roles.ROLE_STORE_OWNER)
        self.cust = self._user("cust@ex.com", roles.ROLE_NORMAL_USER)
        self.no_profile = User.objects.create_user("bare@ex.com", "bare@ex.com", "Secret@123")

        self.store = Store.objects.create(owner=self.owner, name="Corner Shop", email="s@ex.com", address="A")
        self.rating = Rating.objects.create(user=self.cust, store=self.store, rating=4)

    def _user(self, email, role):
        u = User.objects.create_user(email, email, "Secret@123")
        Profile.objects.create(user=u, name="Test Account Holder Name", role=role)
        return u

    def test_get_role(self):
        self.assertEqual(roles.get_role(self.owner), roles.ROLE_STORE_OWNER)
        self.assertEqual(roles.get_role(AnonymousUser()), "")
        self.assertEqual(roles.get_role(self.no_profile), "")
        root = User.objects.create_superuser("root@ex.com", "root@ex.com", "Secret@123")
        self.assertEqual(roles.get_role(root), roles.ROLE_ADMIN)

    def test_anonymous_and_inactive_are_denied(self):
        self.assertFalse(roles.is_allowed(AnonymousUser(), roles.STORE_RATE, self.store))
        self.admin.is_active = False
        self.assertFalse(roles.is_allowed(self.admin, roles.USERS_MANAGE))

    def test_unknown_action_raises(self):
        with self.assertRaises(KeyError):
            roles.is_allowed(self.admin, "store.explode")

    def test_store_create(self):
        self.assertTrue(roles.is_allowed(self.admin, roles.STORE_CREATE))
        self.assertTrue(roles.is_allowed(self.owner, roles.STORE_CREATE))
        self.assertFalse(roles.is_allowed(self.cust, roles.STORE_CREATE))

    def test_store_update_and_view_ratings(self):
        for action in (roles.STORE_UPDATE, roles.STORE_VIEW_RATINGS):
            with self.subTest(action=action):
                self.assertTrue(roles.is_allowed(self.admin, action, self.store))
                self.assertTrue(roles.is_allowed(self.owner, action, self.store))
                self.assertFalse(roles.is_allowed(self.other_owner, action, self.store))
                self.assertFalse(roles.is_allowed(self.cust, action, self.store))

    def test_store_deactivate_admin_only(self):
        self.assertTrue(roles.is_allowed(self.admin, roles.STORE_DEACTIVATE, self.store))
        self.assertFalse(roles.is_allowed(self.owner, roles.STORE_DEACTIVATE, self.store))

    def test_store_rate(self):
        self.assertTrue(roles.is_allowed(self.cust, roles.STORE_RATE, self.store))
        self.assertTrue(roles.is_allowed(self.admin, roles.STORE_RATE, self.store))
        self.assertTrue(roles.is_allowed(self.other_owner, roles.STORE_RATE, self.store))
        self.assertFalse(roles.is_allowed(self.owner, roles.STORE_RATE, self.store))
        self.assertFalse(roles.is_allowed(self.no_profile, roles.STORE_RATE, self.store))

    def test_rating_delete(self):
        self.assertTrue(roles.is_allowed(self.admin, roles.RATING_DELETE, self.rating))
        self.assertTrue(roles.is_allowed(self.cust, roles.RATING_DELETE, self.rating))
        self.assertFalse(roles.is_allowed(self.owner, roles.RATING_DELETE, self.rating))

    def test_rating_view(self):
        self.assertTrue(roles.is_allowed(self.owner, roles.RATING_VIEW, self.rating))
        self.assertTrue(roles.is_allowed(self.cust, roles.RATING_VIEW, self.rating))
        self.assertFalse(roles.is_allowed(self.other_owner, roles.RATING_VIEW, self.rating))

    def test_users_manage_admin_only(self):
        self.assertTrue(roles.is_allowed(self.admin, roles.USERS_MANAGE))
        self.assertFalse(roles.is_allowed(self.owner, roles.USERS_MANAGE))
        self.assertFalse(roles.is_allowed(self.cust, roles.USERS_MANAGE))
