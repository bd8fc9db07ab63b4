"""Proxy error hierarchy.

Every error maps to one HTTP status and a caller-facing message; the API
layer renders them as ``{"error": message}``.
"""


class ProxyError(Exception):
    """Base class for errors returned to the caller before streaming starts."""

    status_code = 500
    message = "Internal error"
    outcome = "error"  # metrics label

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingCredentials(ProxyError):
    """No ``Authorization`` header on the request."""

    status_code = 401
    message = "No authorization header"
    outcome = "unauthorized"


class InvalidCredentials(ProxyError):
    """The credential does not resolve to a caller."""

    status_code = 401
    message = "Unauthorized"
    outcome = "unauthorized"


class GatewayRateLimited(ProxyError):
    status_code = 429
    message = "Rate limit exceeded. Please try again in a moment."
    outcome = "rate_limited"


class GatewayQuotaExceeded(ProxyError):
    status_code = 402
    message = "AI usage limit reached. Please contact support."
    outcome = "quota"


class GatewayServiceError(ProxyError):
    """Any other non-success upstream status."""

    status_code = 500
    message = "AI service error"
    outcome = "upstream_error"


class GatewayNotConfigured(ProxyError):
    status_code = 500
    message = "AI gateway API key is not configured"


class InternalProxyError(ProxyError):
    """Unexpected failure while parsing the request or assembling context."""

    status_code = 500
