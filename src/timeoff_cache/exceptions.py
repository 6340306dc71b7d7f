"""Error taxonomy for remote API calls.

Only transport-level failures are modelled. A cache miss is not an error,
and stale writes are not detected.
"""


class TransportError(Exception):
    """A network or API failure while talking to the remote service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthorizationError(TransportError):
    """The API rejected the session token (HTTP 401/403)."""
