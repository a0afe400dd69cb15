"""Error types raised while building burn aggregates.

    BurnExplorerError
    └── UpstreamError
        ├── UpstreamFetchError   (HTTP status, transport, body not JSON)
        └── MissingFieldError    (required field absent or unusable)

Anything else that escapes an aggregation pass is reported as an unknown
error; ``describe_error`` collapses every case into the single message shown
to the user.
"""

from __future__ import annotations


class BurnExplorerError(Exception):
    """Base class for all explorer errors."""


class UpstreamError(BurnExplorerError):
    """The Scan API could not deliver usable data."""


class UpstreamFetchError(UpstreamError):
    """An upstream request failed or returned a non-success status."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        if status_code is not None:
            message = f"Upstream request to {url} failed with HTTP {status_code} {reason}"
        else:
            message = f"Upstream request to {url} failed: {reason}"
        super().__init__(message)


class MissingFieldError(UpstreamError):
    """A required field is absent from an otherwise successful response."""

    def __init__(self, field: str, detail: str = "missing"):
        self.field = field
        self.detail = detail
        super().__init__(f"Upstream response field '{field}' is {detail}")


def describe_error(exc: BaseException) -> str:
    """Return the user-facing message for any failure of a load."""
    if isinstance(exc, BurnExplorerError):
        return str(exc)
    text = str(exc).strip()
    return f"Unknown error: {text}" if text else f"Unknown error ({type(exc).__name__})"
