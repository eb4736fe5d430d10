"""Error taxonomy shared by the store, the session layer and the HTTP layer.

Every error carries the HTTP status it maps to; the exception handlers in
``portal.main`` turn them into ``{"message": ..., "errors": [...]}`` bodies.
"""
from typing import Any, List, Optional


class PortalError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


def validation_details(raw_errors) -> List[dict]:
    """Reduce pydantic error dicts to JSON-safe field-level details."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in raw_errors
    ]


class AuthenticationError(PortalError):
    status_code = 401
    default_message = "Unauthorized"


class AuthorizationError(PortalError):
    status_code = 403
    default_message = "Forbidden"


class ValidationError(PortalError):
    status_code = 400
    default_message = "Invalid data"


class NotFoundError(PortalError):
    status_code = 404
    default_message = "Not found"


class InfrastructureError(PortalError):
    status_code = 500
    default_message = "Storage backend unavailable"
