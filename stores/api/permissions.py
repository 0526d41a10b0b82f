"""Stores API permissions.

Request- and object-level permissions for store endpoints, answered from the
rule table in ``common.roles``.
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission

from common import roles


class CanCreateStore(BasePermission):
    """Admins and store owners; a second store per owner is a Conflict."""

    message = "Only administrators or store owners may create stores."

    def has_permission(self, request, view):
        return roles.is_allowed(request.user, roles.STORE_CREATE)


class IsStoreOwnerRole(BasePermission):
    """Allow access only to users with the store_owner role."""

    message = "Only store owners have a store."

    def has_permission(self, request, view):
        return roles.get_role(request.user) == roles.ROLE_STORE_OWNER


class StoreObjectPermission(BasePermission):
    """Read for everyone authenticated; PATCH for admin or owner; DELETE for admin."""

    message = "You can only modify your own store."

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        if request.method == "DELETE":
            return roles.is_allowed(request.user, roles.STORE_DEACTIVATE, obj)
        return roles.is_allowed(request.user, roles.STORE_UPDATE, obj)
