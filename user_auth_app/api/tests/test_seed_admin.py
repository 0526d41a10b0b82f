from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from rest_framework.authtoken.models import Token

from stores.models import Store

User = get_user_model()


class SeedAdminCommandTests(TestCase):
    def test_creates_admin_from_environment(self):
        env = {"ADMIN_EMAIL": "boss@ex.com", "ADMIN_PASSWORD": "Boss@1234"}
        with mock.patch.dict("os.environ", env):
            call_command("seed_admin", stdout=StringIO())
        admin = User.objects.get(email="boss@ex.com")
        self.assertTrue(admin.is_staff)
        self.assertEqual(admin.profile.role, "admin")
        self.assertTrue(admin.check_password("Boss@1234"))
        self.assertTrue(Token.objects.filter(user=admin).exists())

    def test_rerun_resets_password_and_reactivates(self):
        call_command("seed_admin", stdout=StringIO())
        admin = User.objects.get(email="admin@example.com")
        admin.is_active = False
        admin.set_password("Other@123")
        admin.save()

        call_command("seed_admin", stdout=StringIO())
        admin.refresh_from_db()
        self.assertTrue(admin.is_active)
        self.assertTrue(admin.check_password("Admin@1234"))
        self.assertEqual(User.objects.filter(email="admin@example.com").count(), 1)

    def test_with_demo_creates_owner_store_and_customer(self):
        call_command("seed_admin", "--with-demo", stdout=StringIO())
        owner = User.objects.get(email="owner@example.com")
        self.assertEqual(owner.profile.role, "store_owner")
        self.assertTrue(Store.objects.filter(owner=owner).exists())
        self.assertEqual(User.objects.get(email="customer@example.com").profile.role, "normal_user")
