import environ
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from rest_framework.authtoken.models import Token

from common import roles
from profiles.models import Profile
from profiles.services import create_account

env = environ.Env()

DEMO_ACCOUNTS = {
    roles.ROLE_STORE_OWNER: {
        "name": "Demo Store Owner Account",
        "email": "owner@example.com",
        "password": "Owner@1234",
        "address": "12 Market Street",
    },
    roles.ROLE_NORMAL_USER: {
        "name": "Demo Customer Account User",
        "email": "customer@example.com",
        "password": "Customer@1234",
        "address": "34 Main Road",
    },
}


class Command(BaseCommand):
    help = "Create or update the initial admin account (and optional demo accounts)."

    def add_arguments(self, parser):
        parser.add_argument("--with-demo", action="store_true", help="Also create a demo store owner and customer.")

    def handle(self, *args, **options):
        admin_cfg = {
            "name": env.str("ADMIN_NAME", default="System Administrator Account"),
            "email": env.str("ADMIN_EMAIL", default="admin@example.com"),
            "password": env.str("ADMIN_PASSWORD", default="Admin@1234"),
            "address": env.str("ADMIN_ADDRESS", default="Head Office"),
        }
        self._ensure(roles.ROLE_ADMIN, admin_cfg)
        if options["with_demo"]:
            for role, cfg in DEMO_ACCOUNTS.items():
                self._ensure(role, cfg)
        self.stdout.write(self.style.SUCCESS("Accounts ready."))

    def _ensure(self, role, cfg):
        User = get_user_model()
        user = User.objects.filter(email__iexact=cfg["email"]).first()
        if user is None:
            user = create_account(role=role, **cfg)
            self.stdout.write(self.style.SUCCESS(f"Created {role} '{user.email}'"))
        else:
            self.stdout.write(f"User '{user.email}' already exists")
            # reset password to the configured one
            user.set_password(cfg["password"])
            user.is_active = True
            user.save(update_fields=["password", "is_active"])
            prof, _ = Profile.objects.get_or_create(
                user=user, defaults={"name": cfg["name"], "address": cfg["address"], "role": role}
            )
            if prof.role != role:
                prof.role = role
                prof.save(update_fields=["role", "updated_at"])

        if role == roles.ROLE_ADMIN and not user.is_staff:
            user.is_staff = True
            user.save(update_fields=["is_staff"])

        token, _ = Token.objects.get_or_create(user=user)
        self.stdout.write(f"  role={role}, token={token.key}")
