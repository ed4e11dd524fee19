from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base for failures that map onto a JSON error response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: Any = None,
        meta: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        self.details = details
        self.meta = meta
        super().__init__(self.message)


class BadRequest(AppError):
    status_code = 400
    default_message = "Bad request"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class MissingConfiguration(AppError):
    """A required secret is absent. Server-side, never the caller's fault."""

    default_message = "Server configuration error"


class UpstreamError(AppError):
    default_message = "Upstream service error"


class StorageError(UpstreamError):
    default_message = "Storage service error"


class NoStructuredOutput(AppError):
    default_message = "Could not parse response"


class CorruptReport(AppError):
    default_message = "Stored report is corrupt"
