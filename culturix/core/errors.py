# culturix/core/errors.py

from typing import Any


class CulturixError(Exception):
    """
    Base class for errors that are turned into a JSON response at the
    request boundary: {"error": message, "details": details}.
    """
    status_code = 500

    def __init__(self, message: str, details: Any = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_content(self) -> dict:
        content = {"error": self.message}
        if self.details is not None:
            content["details"] = self.details
        return content


class ValidationError(CulturixError):
    status_code = 400


class AuthError(CulturixError):
    status_code = 401


class CredentialsError(AuthError):
    # Login failures are reported as a bad request, same shape for every cause.
    status_code = 400


class ConflictError(CulturixError):
    status_code = 400


class InternalError(CulturixError):
    status_code = 500


class UpstreamError(CulturixError):
    """Relays a failure reported by the chat upstream with its own status."""
    status_code = 502
