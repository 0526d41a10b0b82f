"""Error taxonomy shared by the service layer.

Each class derives from the matching DRF exception so the stock exception
handler renders the right status code and payload without extra wiring.
"""

from rest_framework import exceptions, status


class InvalidInput(exceptions.ValidationError):
    """Malformed or out-of-range input (400)."""

    default_detail = "Invalid input."
    default_code = "invalid_input"


class NotFound(exceptions.NotFound):
    """Referenced resource is missing or inactive where activity is required (404)."""


class Forbidden(exceptions.PermissionDenied):
    """Authenticated identity lacks permission for the action (403)."""


class Conflict(exceptions.APIException):
    """A uniqueness constraint rejected the write (409)."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The resource was modified concurrently."
    default_code = "conflict"
