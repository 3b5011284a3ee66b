"""
Gateway Exceptions

Error kinds raised by the directory, family and chatbot services. Each kind
carries the HTTP status the API layer answers with; the message is returned
to the caller verbatim in a ``{"success": false, "error": ...}`` envelope.
"""

from typing import Any, Dict, Optional


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    status_code: int = 500

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to the API error envelope."""
        return {"success": False, "error": self.message}


class InvalidInput(GatewayError):
    """A required field is missing or empty."""

    status_code = 400


class NotFound(GatewayError):
    """The referenced family request does not exist."""

    status_code = 404


class Conflict(GatewayError):
    """Duplicate pending request, or the target is already family."""

    status_code = 409


class InvalidState(GatewayError):
    """The family request has already left the pending state."""

    status_code = 400


class UpstreamFailure(GatewayError):
    """
    An external service answered with an error.

    Chat endpoints report this as a business-level failure, so the API layer
    answers with 200 and ``success: false``.
    """

    status_code = 200


class UpstreamTimeout(GatewayError):
    """An external service did not answer within the configured timeout."""

    status_code = 504
