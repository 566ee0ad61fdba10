"""Relay error taxonomy.

Every upstream failure is translated into one of these exceptions. Each class
has exactly one outward HTTP status and message; the provider's own detail is
kept for logging only.
"""

from fastapi import status

from chatrelay.models.schemas import ErrorKind


class RelayError(Exception):
    """Base class for failures reported to relay callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind: ErrorKind = ErrorKind.UNKNOWN
    message: str = "Failed to get response from AI model"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class InvalidUpstreamRequest(RelayError):
    """Provider rejected the shape of the request."""

    status_code = status.HTTP_400_BAD_REQUEST
    kind = ErrorKind.BAD_REQUEST
    message = "Invalid request to model provider"


class UpstreamAuthError(RelayError):
    """Provider credential is invalid or missing."""

    status_code = status.HTTP_401_UNAUTHORIZED
    kind = ErrorKind.UNAUTHORIZED
    message = "Invalid API key"


class UpstreamRateLimited(RelayError):
    """Provider is throttling requests."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    kind = ErrorKind.RATE_LIMITED
    message = "Rate limit exceeded"


class UpstreamUnavailable(RelayError):
    """Model is warming up or the provider cannot be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    kind = ErrorKind.UNAVAILABLE
    message = "Model is loading or unavailable, please try again shortly"


class UpstreamTimeout(RelayError):
    """Provider did not answer within the configured bound."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    kind = ErrorKind.TIMEOUT
    message = "Model provider timed out"


class UpstreamFailure(RelayError):
    """Any other provider failure."""


_STATUS_ERRORS: dict[int, type[RelayError]] = {
    400: InvalidUpstreamRequest,
    413: InvalidUpstreamRequest,
    422: InvalidUpstreamRequest,
    401: UpstreamAuthError,
    403: UpstreamAuthError,
    429: UpstreamRateLimited,
    503: UpstreamUnavailable,
    408: UpstreamTimeout,
    504: UpstreamTimeout,
}


def error_for_status(status_code: int | None, detail: str | None = None) -> RelayError:
    """Map an upstream HTTP status to a relay error.

    Args:
        status_code: Status returned by the provider.
        detail: Provider's error text, kept for logging.

    Returns:
        The matching RelayError instance (UpstreamFailure when unmapped).
    """
    error_class = _STATUS_ERRORS.get(status_code or 0, UpstreamFailure)
    return error_class(detail)
