import asyncio
import base64
from unittest.mock import patch

import httpx
import pytest

from direkt_exporter.client import DirektClient
from direkt_exporter.context import ProbeContext
from direkt_exporter.errors import DeviceOffline, TransportError, UpstreamError

from conftest import SERIAL, FakeUnit


@pytest.mark.asyncio
async def test_fetch_returns_raw_body(probe):
    unit = FakeUnit({"system/status": b'{"cpu": {"usage": 1}}'})
    client = unit.client()

    body = await client.fetch(probe, "system/status")

    assert body == b'{"cpu": {"usage": 1}}'
    assert str(unit.requests[0].url) == f"https://unit.test/api/v1/units/{SERIAL}/system/status"


@pytest.mark.asyncio
async def test_fetch_503_is_device_offline(probe):
    client = FakeUnit({"encoders": 503}).client()

    with pytest.raises(DeviceOffline):
        await client.fetch(probe, "encoders")


@pytest.mark.asyncio
async def test_fetch_non_ok_status_is_upstream_error(probe):
    client = FakeUnit({"encoders": 401}).client()

    with pytest.raises(UpstreamError) as exc_info:
        await client.fetch(probe, "encoders")

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_fetch_connect_failure_is_transport_error(probe):
    client = FakeUnit({"encoders": httpx.ConnectError("connection refused")}).client()

    with pytest.raises(TransportError):
        await client.fetch(probe, "encoders")


@pytest.mark.asyncio
async def test_fetch_times_out_per_call(probe):
    async def slow(request):
        await asyncio.sleep(1)
        return httpx.Response(200)

    client = DirektClient(
        username="",
        password="",
        base_url="https://unit.test/",
        timeout=0.05,
        transport=httpx.MockTransport(slow),
    )

    with pytest.raises(TransportError):
        await client.fetch(probe, "system/status")


@pytest.mark.asyncio
async def test_fetch_after_probe_deadline_makes_no_request():
    unit = FakeUnit({"system/status": {}})
    client = unit.client()
    expired = ProbeContext.start(SERIAL, timeout=-1)

    with pytest.raises(TransportError):
        await client.fetch(expired, "system/status")

    assert unit.requests == []


@pytest.mark.asyncio
async def test_basic_auth_applied_when_both_credentials_set(probe):
    unit = FakeUnit({"system/status": {}})
    client = unit.client(username="admin", password="secret")

    await client.fetch(probe, "system/status")

    expected = base64.b64encode(b"admin:secret").decode("ascii")
    assert unit.requests[0].headers["Authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
async def test_no_auth_when_password_missing(probe):
    unit = FakeUnit({"system/status": {}})
    client = unit.client(username="admin", password="")

    await client.fetch(probe, "system/status")

    assert "Authorization" not in unit.requests[0].headers
    assert client.auth_enabled is False


def test_credentials_read_from_environment():
    with patch.dict(
        "os.environ", {"DIREKT_USERNAME": "envuser", "DIREKT_PASSWORD": "envpass"}
    ):
        client = DirektClient()

    assert client.username == "envuser"
    assert client.password == "envpass"
    assert client.auth_enabled is True


def test_unit_url_joins_base_and_path():
    client = DirektClient(username="", password="", base_url="https://unit.test")

    assert (
        client.unit_url(SERIAL, "/encoders/0/status")
        == f"https://unit.test/api/v1/units/{SERIAL}/encoders/0/status"
    )
