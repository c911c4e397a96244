"""Error taxonomy for the proxy.

Every error a request can end with derives from ProxyError and carries
the HTTP status it is rendered with. Translation failures are not part of
this hierarchy: the translator recovers from them itself.
"""

from typing import Optional


class ProxyError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ProxyError):
    """Bad or missing input. Raised before any network call."""
    status_code = 400


class InvalidCategoryError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Invalid category")


class UpstreamError(ProxyError):
    status_code = 502


class UpstreamTransportError(UpstreamError):
    """The marketplace API could not be reached."""


class UpstreamStatusError(UpstreamError):
    """The marketplace API answered with a non-success status, forwarded as is."""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"Failed to fetch from LZT API: {reason}", status_code)
        self.reason = reason


class UpstreamPayloadError(UpstreamError):
    """The marketplace API answered, but the body is not a JSON object."""

    def __init__(self, snippet: str) -> None:
        super().__init__("Bad response from LZT API")
        self.snippet = snippet
