# app/exceptions.py
"""Error kinds surfaced by the AriClear API.

Each error carries the HTTP status and the caller-safe message it is
rendered with. Raw generator text and internal details stay in the logs.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class AriClearError(Exception):
    """Base exception for the application."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra or {}
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        body.update(self.extra)
        return body


# ---------- analysis pipeline ----------


class InvalidInputError(AriClearError):
    """URL missing or not http(s). Raised before any network call."""

    status_code = 400
    default_message = "Please provide a valid http(s) URL."


class FetchFailureError(AriClearError):
    """Target page unreachable or answered with a non-2xx status."""

    status_code = 400

    def __init__(self, upstream_status: Optional[int] = None):
        self.upstream_status = upstream_status
        if upstream_status is not None:
            message = f"Failed to fetch URL (status {upstream_status})."
        else:
            message = "Failed to fetch URL."
        super().__init__(message)


class EmptyGenerationError(AriClearError):
    status_code = 500
    default_message = "Empty AI response."


class MalformedGenerationError(AriClearError):
    """Generator text is not JSON."""

    status_code = 500
    default_message = "AI returned invalid JSON."


class UnexpectedShapeError(AriClearError):
    """Generator JSON does not match the report contract.

    ``reason`` names the first failing field and is for logs only.
    """

    status_code = 500
    default_message = "AI returned unexpected response shape."

    def __init__(self, reason: str = "", message: Optional[str] = None):
        self.reason = reason
        super().__init__(message)


class RateLimitedError(AriClearError):
    status_code = 429
    default_message = "Rate limit reached. Please wait a moment and try again."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, extra={"rateLimited": True})


class UpstreamServiceError(AriClearError):
    """Any other failure reported by the generation service."""

    status_code = 502

    def __init__(self, detail: str, upstream_status: Optional[int] = None):
        self.upstream_status = upstream_status
        extra = {"status": upstream_status} if upstream_status is not None else {}
        super().__init__(
            f"OpenAI API error: {detail or 'Unknown error'}",
            status_code=upstream_status or 502,
            extra=extra,
        )


class InternalError(AriClearError):
    status_code = 500
    default_message = "Internal server error"


class ConfigurationError(AriClearError):
    """A collaborator client was not configured (missing key or URL)."""

    status_code = 500
    default_message = "Internal server error"


# ---------- accounts / persistence ----------


class BadRequestError(AriClearError):
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(AriClearError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AriClearError):
    status_code = 404
    default_message = "Not found"


class DuplicateError(AriClearError):
    """Unique-constraint violation in the store."""

    status_code = 409
    default_message = "Already exists"


class StorageError(AriClearError):
    status_code = 500
    default_message = "Database error"
