"""Error taxonomy for nearby facility lookups."""

from __future__ import annotations

from typing import Optional

import requests

TIMEOUT = "timeout"
RATE_LIMITED = "rate_limited"
CONNECTION = "connection"
BAD_RESPONSE = "bad_response"
ERROR = "error"


class FacilityFinderError(RuntimeError):
    """Base class for failures surfaced to the caller with an HTTP status."""

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.error = error


class ClientError(FacilityFinderError):
    """Raised for missing or malformed location input."""

    status_code = 400


class NotFoundError(FacilityFinderError):
    """Raised when an address cannot be geocoded."""

    status_code = 404


class ServerError(FacilityFinderError):
    """Raised when an upstream service prevents the lookup from completing."""

    status_code = 500


class GeocodeNotFound(RuntimeError):
    """Raised when the geocoder answers with zero matches."""


class UpstreamUnavailable(RuntimeError):
    """Raised when an upstream service could not be reached or answered badly."""

    def __init__(self, message: str, reason: str = ERROR) -> None:
        super().__init__(message)
        self.reason = reason


def classify_failure(exc: BaseException) -> str:
    """Map a transport exception onto one of the upstream failure reasons."""
    if isinstance(exc, UpstreamUnavailable):
        return exc.reason
    if isinstance(exc, requests.Timeout):
        return TIMEOUT
    if isinstance(exc, requests.HTTPError):
        response = exc.response
        if response is not None and response.status_code == 429:
            return RATE_LIMITED
        return ERROR
    if isinstance(exc, requests.ConnectionError):
        return CONNECTION
    if isinstance(exc, ValueError):
        return BAD_RESPONSE
    return ERROR
