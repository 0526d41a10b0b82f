"""Store creation.

Shared by the store endpoint and admin user creation (a new store_owner
account gets its store right away). One store per owner is enforced both by
an explicit check and by the OneToOne constraint on ``Store.owner``.
"""

import logging

from django.db import IntegrityError, transaction

from common import roles
from common.exceptions import Conflict, InvalidInput
from stores.models import Store

logger = logging.getLogger(__name__)


def create_store(*, owner, name, email, address) -> Store:
    """Create a store for ``owner``; raises ``Conflict`` if one already exists."""
    if roles.get_role(owner) != roles.ROLE_STORE_OWNER or not owner.is_active:
        raise InvalidInput({"owner": "Owner must be an active store owner."})
    if Store.objects.filter(owner=owner).exists():
        raise Conflict("Owner already has a store.")
    if Store.objects.filter(email__iexact=email).exists():
        raise Conflict("Store with this email already exists.")
    try:
        with transaction.atomic():
            store = Store.objects.create(owner=owner, name=name, email=email, address=address)
    except IntegrityError:
        raise Conflict("Owner already has a store or the email is taken.")
    logger.info("Store %s created for owner=%s", store.id, owner.id)
    return store
