"""Account creation shared by signup, admin user management and seeding.

Users log in with their email, so the email (lowercased) doubles as the
Django username. A store_owner account gets its store created in the same
transaction.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from common import roles
from stores.services import create_store
from .models import Profile

logger = logging.getLogger(__name__)
User = get_user_model()


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@transaction.atomic
def create_account(*, name, email, password, address="", role=roles.ROLE_NORMAL_USER):
    """Create user + profile (+ store for store owners) and return the user."""
    email = normalize_email(email)
    user = User(username=email, email=email, is_staff=role == roles.ROLE_ADMIN)
    user.set_password(password)
    user.save()
    Profile.objects.create(user=user, name=name, address=address or "", role=role)

    if role == roles.ROLE_STORE_OWNER:
        create_store(owner=user, name=name, email=email, address=address)

    logger.info("Account %s created with role=%s", user.id, role)
    return user
