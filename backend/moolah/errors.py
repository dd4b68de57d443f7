"""
Domain errors and their HTTP status codes.
"""

from typing import Any, Dict, List, Optional


class MoolahError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message}


class Unauthenticated(MoolahError):
    status_code = 401
    default_message = "Unauthenticated"


class Forbidden(MoolahError):
    status_code = 403
    default_message = "Forbidden"


class ValidationFailed(MoolahError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: List[str], message: Optional[str] = None):
        super().__init__(message)
        self.errors = list(errors)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "errors": self.errors}


class InvalidParent(ValidationFailed):
    def __init__(self, reason: str):
        super().__init__([f"parent_id: {reason}"], message="Invalid parent_id")


class NotFound(MoolahError):
    status_code = 404
    default_message = "Not found"


class Conflict(MoolahError):
    status_code = 409
    default_message = "Conflict"


class DuplicateName(Conflict):
    default_message = "Category with this name already exists"


class HasChildren(Conflict):
    default_message = "Category has children"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": self.message,
            "hint": "Delete or move the children first, or pass cascade=true",
        }


class CategoryTypeMismatch(Conflict):
    default_message = "Transaction type does not match the category type"


class UpstreamUnavailable(MoolahError):
    status_code = 502
    default_message = "Upstream service unavailable"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
