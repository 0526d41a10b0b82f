"""Role constants and the access rule table.

Views never compare raw role strings; they ask ``is_allowed(user, action, ...)``
which answers from the table below. Object-dependent rules (own store, own
rating) receive the object as an extra argument.
"""

ROLE_ADMIN = "admin"
ROLE_NORMAL_USER = "normal_user"
ROLE_STORE_OWNER = "store_owner"

ROLE_CHOICES = (
    (ROLE_ADMIN, "admin"),
    (ROLE_NORMAL_USER, "normal_user"),
    (ROLE_STORE_OWNER, "store_owner"),
)

ROLES = {value for value, _ in ROLE_CHOICES}

# Actions
STORE_CREATE = "store.create"
STORE_UPDATE = "store.update"
STORE_DEACTIVATE = "store.deactivate"
STORE_RATE = "store.rate"
STORE_VIEW_RATINGS = "store.view_ratings"
RATING_DELETE = "rating.delete"
RATING_VIEW = "rating.view"
USERS_MANAGE = "users.manage"


def get_role(user) -> str:
    """Return the role of ``user`` or an empty string for anonymous users."""
    if not user or not user.is_authenticated:
        return ""
    if user.is_superuser:
        return ROLE_ADMIN
    profile = getattr(user, "profile", None)
    return getattr(profile, "role", "") or ""


def is_admin(user) -> bool:
    return get_role(user) == ROLE_ADMIN


def _owns_store(user, store) -> bool:
    return store is not None and store.owner_id == user.id


def _can_create_store(user, obj=None):
    role = get_role(user)
    if role == ROLE_ADMIN:
        return True
    # A store owner that already owns a store is rejected by
    # stores.services.create_store with Conflict, not here.
    return role == ROLE_STORE_OWNER


def _can_update_store(user, store=None):
    role = get_role(user)
    if role == ROLE_ADMIN:
        return True
    if role == ROLE_STORE_OWNER:
        # Without an object the role check alone decides; ownership is
        # re-checked at object level.
        return store is None or _owns_store(user, store)
    return False


def _can_rate_store(user, store=None):
    if get_role(user) not in ROLES:
        return False
    return store is None or not _owns_store(user, store)


def _can_view_store_ratings(user, store=None):
    return _can_update_store(user, store)


def _can_delete_rating(user, rating=None):
    if is_admin(user):
        return True
    return rating is not None and rating.user_id == user.id


def _can_view_rating(user, rating=None):
    if is_admin(user) or rating is None:
        return True
    if rating.user_id == user.id:
        return True
    return get_role(user) == ROLE_STORE_OWNER and rating.store.owner_id == user.id


RULES = {
    STORE_CREATE: _can_create_store,
    STORE_UPDATE: _can_update_store,
    STORE_DEACTIVATE: lambda user, obj=None: is_admin(user),
    STORE_RATE: _can_rate_store,
    STORE_VIEW_RATINGS: _can_view_store_ratings,
    RATING_DELETE: _can_delete_rating,
    RATING_VIEW: _can_view_rating,
    USERS_MANAGE: lambda user, obj=None: is_admin(user),
}


def is_allowed(user, action: str, obj=None) -> bool:
    """Decide whether ``user`` may perform ``action`` (optionally on ``obj``)."""
    if not user or not user.is_authenticated or not user.is_active:
        return False
    rule = RULES.get(action)
    if rule is None:
        raise KeyError(f"Unknown action: {action}")
    return bool(rule(user, obj))
