"""
Error taxonomy and the translator that turns any failure into the
uniform ``{"error": ...}`` payload the UI displays.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a few moments."
CREDITS_MESSAGE = "AI credits depleted. Please add credits to continue."
UNEXPECTED_MESSAGE = "An unexpected error occurred"


class CareerDocsError(Exception):
    """Base class for every error raised by the request pipeline."""


class MissingCredential(CareerDocsError):
    def __init__(self, name: str = "AI_GATEWAY_API_KEY"):
        super().__init__(f"{name} is not configured")


class UnsupportedRequestKind(CareerDocsError):
    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Unknown request type: {kind}")


class InvalidRequest(CareerDocsError):
    pass


class UpstreamError(CareerDocsError):
    def __init__(self, status_code: int, body: Any = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"AI Gateway error: {status_code}")


class UpstreamRateLimited(UpstreamError):
    pass


class UpstreamBillingBlocked(UpstreamError):
    pass


class UpstreamOtherFailure(UpstreamError):
    pass


class NormalizationError(CareerDocsError):
    pass


class EmptyCompletion(NormalizationError):
    def __init__(self, message: str = "AI response did not contain any content"):
        super().__init__(message)


class MalformedStructuredOutput(NormalizationError):
    """Analysis output that is not a valid result object. Always recovered."""


def upstream_error_for(status_code: int, body: Any = None) -> UpstreamError:
    if status_code == 429:
        return UpstreamRateLimited(status_code, body)
    if status_code == 402:
        return UpstreamBillingBlocked(status_code, body)
    return UpstreamOtherFailure(status_code, body)


@dataclass(frozen=True)
class TranslatedError:
    http_status: int
    payload: Dict[str, str] = field(default_factory=dict)


def translate(status: Optional[int] = None, body: Any = None,
              error: Optional[BaseException] = None) -> TranslatedError:
    """Map an upstream status or a caught exception to an HTTP error reply."""
    if status is None and isinstance(error, UpstreamError):
        status, body = error.status_code, error.body

    if status is not None:
        if status == 429:
            return TranslatedError(429, {"error": RATE_LIMIT_MESSAGE})
        if status == 402:
            return TranslatedError(402, {"error": CREDITS_MESSAGE})
        return TranslatedError(500, {"error": f"AI Gateway error: {status}"})

    message = str(error) if error is not None else ""
    return TranslatedError(500, {"error": message or UNEXPECTED_MESSAGE})
