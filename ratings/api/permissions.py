"""Ratings API permissions.

Request- and object-level permissions for rating endpoints. All decisions are
delegated to the rule table in ``common.roles``.
"""

from rest_framework.permissions import BasePermission

from common import roles


class IsAdminRole(BasePermission):
    """Allow access only to users with the admin role."""

    message = "Only administrators may access all ratings."

    def has_permission(self, request, view):
        return roles.is_admin(request.user)


class CanViewStoreRatings(BasePermission):
    """Admins see every store's ratings; store owners only their own store's.

    Note:
        - The request-level check rejects normal users with 403.
        - The object (the Store) is checked by the view via ``check_object_permissions``.
    """

    message = "You can only view ratings for your own store."

    def has_permission(self, request, view):
        return roles.is_allowed(request.user, roles.STORE_VIEW_RATINGS)

    def has_object_permission(self, request, view, obj):
        return roles.is_allowed(request.user, roles.STORE_VIEW_RATINGS, obj)


class CanAccessRating(BasePermission):
    """Read for author, owning store owner or admin; write rules live in the service."""

    message = "Access denied."

    def has_object_permission(self, request, view, obj):
        return roles.is_allowed(request.user, roles.RATING_VIEW, obj)
