"""Profiles API permissions.

User management is restricted to the admin role.
"""

from rest_framework.permissions import BasePermission

from common import roles


class IsAdminRole(BasePermission):
    """Allow access only to authenticated users with the admin role."""

    message = "Only administrators may manage users."

    def has_permission(self, request, view):
        return roles.is_allowed(request.user, roles.USERS_MANAGE)
