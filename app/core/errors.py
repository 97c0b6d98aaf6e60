"""
Application errors for clean API error handling.

Every failure a caller can see is one of these. Each carries a machine-checkable
code, a caller-safe message and the HTTP status the API layer responds with.
Internal details (upstream bodies, tracebacks) never go into the message.
"""

from app.core.config import INTERNAL_ERROR_MESSAGE, MISSING_QUERY_MESSAGE, UNAUTHENTICATED_MESSAGE


class CallableError(Exception):
    """Base for errors surfaced to the caller."""

    code: str = "internal"
    status: str = "INTERNAL"
    http_status: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def details(self) -> dict | None:
        return None


class UnauthenticatedError(CallableError):
    """Raised when the call carries no verified caller identity."""

    code = "unauthenticated"
    status = "UNAUTHENTICATED"
    http_status = 401

    def __init__(self, message: str = UNAUTHENTICATED_MESSAGE) -> None:
        super().__init__(message)


class InvalidArgumentError(CallableError):
    """Raised when the query is missing or empty."""

    code = "invalid-argument"
    status = "INVALID_ARGUMENT"
    http_status = 400

    def __init__(self, message: str = MISSING_QUERY_MESSAGE) -> None:
        super().__init__(message)


class UpstreamError(CallableError):
    """Raised when the Gemini API answers with a non-success HTTP status."""

    code = "upstream-error"
    status = "UNAVAILABLE"
    http_status = 502

    def __init__(self, upstream_status: int) -> None:
        self.upstream_status = upstream_status
        super().__init__(f"API call failed with status: {upstream_status}")

    def details(self) -> dict | None:
        return {"upstream_status": self.upstream_status}


class InternalError(CallableError):
    """Raised for any other failure: network errors, malformed payloads, bugs."""

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)
