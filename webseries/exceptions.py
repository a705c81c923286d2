"""
Error taxonomy shared by services and the HTTP layer.

Every error carries an HTTP status code and a client-safe message. Extra
keyword arguments end up next to "error" in the JSON body.
"""
from typing import Any, Dict


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None, **extra: Any):
        self.message = message or self.default_message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class ValidationFailure(ServiceError):
    status_code = 400
    default_message = "Validation failed"


class InvalidReference(ValidationFailure):
    default_message = "Invalid reference"


class Unauthenticated(ServiceError):
    status_code = 401
    default_message = "Authentication required"


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid credentials"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Access denied. Insufficient permissions."


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "Conflict"


class InternalFailure(ServiceError):
    status_code = 500
