"""Direkt unit API client with basic auth and bounded request times."""

import asyncio
import logging
import os
from typing import Optional

import httpx

from . import __version__
from .context import ProbeContext
from .errors import DeviceOffline, TransportError, UpstreamError


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://iss.intinor.se/"
UNIT_ENDPOINT = "api/v1/units/"
DEFAULT_TIMEOUT = 15.0


class DirektClient:
    """Async client shared by every probe.

    Holds configuration only; each ``fetch`` is independent so one
    instance is safe to use from concurrent requests.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or os.getenv("DIREKT_BASE_URL", DEFAULT_BASE_URL)
        self.username = (
            username if username is not None else os.getenv("DIREKT_USERNAME", "")
        )
        self.password = (
            password if password is not None else os.getenv("DIREKT_PASSWORD", "")
        )
        self.timeout = (
            timeout
            if timeout is not None
            else float(os.getenv("DIREKT_TIMEOUT", str(DEFAULT_TIMEOUT)))
        )

        if self.auth_enabled:
            auth = httpx.BasicAuth(self.username, self.password)
        else:
            auth = None
            logger.info(
                "Username or password not set, authentication will not be used",
                extra={"extra_fields": {"username": self.username}},
            )

        self.client = httpx.AsyncClient(
            auth=auth,
            timeout=httpx.Timeout(self.timeout),
            headers={
                "Accept": "application/json",
                "User-Agent": f"direkt-exporter/{__version__}",
            },
            transport=transport,
        )

    @property
    def auth_enabled(self) -> bool:
        return bool(self.username and self.password)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    def unit_url(self, serial: str, path: str) -> str:
        base = self.base_url if self.base_url.endswith("/") else self.base_url + "/"
        return f"{base}{UNIT_ENDPOINT}{serial}/{path.lstrip('/')}"

    async def fetch(self, probe: ProbeContext, path: str) -> bytes:
        """GET ``path`` below the probed unit and return the raw body.

        Raises ``DeviceOffline`` on 503, ``UpstreamError`` on any other
        non-200 status and ``TransportError`` when no response arrives
        within the per-call timeout or the probe deadline.
        """
        url = self.unit_url(probe.serial, path)
        timeout = min(self.timeout, probe.remaining())
        if timeout <= 0:
            raise TransportError(f"probe deadline exceeded before requesting {url}")

        probe.log.debug(
            "Sending request",
            extra={"extra_fields": {"url": url, "auth": self.auth_enabled}},
        )
        try:
            response = await asyncio.wait_for(self.client.get(url), timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(f"request to {url} timed out after {timeout:.2f}s") from e
        except httpx.RequestError as e:
            raise TransportError(f"request to {url} failed: {e}") from e

        if response.status_code == 503:
            raise DeviceOffline()

        if response.status_code != 200:
            probe.log.info(
                "Non-OK status code returned",
                extra={
                    "extra_fields": {
                        "status_code": response.status_code,
                        "request": url,
                    }
                },
            )
            raise UpstreamError(response.status_code, url)

        probe.log.debug(
            "Finished request, returning body", extra={"extra_fields": {"url": url}}
        )
        return response.content
