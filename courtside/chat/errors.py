"""Error types and user-facing failure descriptions."""

from __future__ import annotations

TRANSIENT_STATUS_CODES = frozenset({429, 503})

OVERWHELMED_MESSAGE = (
    "AI rate limit reached. The system is temporarily overwhelmed by requests. "
    "Please wait 60 seconds and try again."
)
FAILED_MESSAGE = "Failed to synthesize data. Please check your connection and try again."


class CourtsideError(RuntimeError):
    """Base error for the AI request pipeline."""


class MissingApiKeyError(CourtsideError):
    """Raised when no provider API key is configured."""


class MalformedResponseError(CourtsideError):
    """Raised when the response payload does not match the declared schema."""


class EmptyResponseError(CourtsideError):
    """Raised when an object-shaped query gets no payload at all."""


def _status_of(exc: BaseException) -> int | None:
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    return None


def is_transient(exc: BaseException) -> bool:
    """True for rate-limit (429) and service-unavailable (503) failures."""
    if _status_of(exc) in TRANSIENT_STATUS_CODES:
        return True
    message = str(exc)
    return any(str(code) in message for code in TRANSIENT_STATUS_CODES)


def error_kind(exc: BaseException) -> str:
    """Classify a failure as "overwhelmed" (transient) or "failed"."""
    return "overwhelmed" if is_transient(exc) else "failed"


def describe_failure(exc: BaseException) -> str:
    """User-facing message for a failed request."""
    if is_transient(exc):
        return OVERWHELMED_MESSAGE
    return FAILED_MESSAGE
