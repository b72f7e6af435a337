"""
Error taxonomy for the user service.

Every error is terminal for its request and is rendered as a JSON body
with a single ``error`` field (see ``responses.register_exception_handlers``).
"""

from typing import Dict, Optional


class ServiceError(Exception):
    """Base error carrying the HTTP status and client-facing message."""
    status_code: int = 500
    message: str = "internal error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        if message is not None:
            self.message = message
        self.headers = headers
        super().__init__(self.message)


class AuthError(ServiceError):
    """Missing or wrong API key."""
    status_code = 401
    message = "unauthorized"


class ValidationError(ServiceError):
    """Malformed identifier or missing/blank name."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)


class MethodError(ServiceError):
    """Unsupported HTTP method on a registered path."""
    status_code = 405
    message = "method not allowed"

    def __init__(self, allow: str):
        self.allow = allow
        super().__init__(headers={"Allow": allow})


class SerializationError(ServiceError):
    """Response body could not be encoded."""
    status_code = 500
    message = "internal error"
