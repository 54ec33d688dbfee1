"""Errors raised while probing a Direkt unit."""

from typing import Optional


class DirektError(Exception):
    """Base class for every recoverable probe error."""


class ValidationError(DirektError):
    """The inbound probe request is missing or carries a bad serial."""


class DeviceOffline(DirektError):
    """The unit answered 503; it is offline or rebooting.

    Gathering stops at the first stage that raises this.
    """

    def __init__(self, message: str = "unit offline"):
        super().__init__(message)


class UpstreamError(DirektError):
    """The unit answered with a status other than 200 or 503."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"non-okay request returned: status {status_code}")


class TransportError(DirektError):
    """The request never produced a response (DNS, connect, timeout)."""


class DecodeError(DirektError):
    """A response body could not be decoded into the expected schema."""
