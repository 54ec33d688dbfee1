"""Helpers shared by the listing-driven gatherers."""

from typing import Optional, Type

from ..client import DirektClient
from ..context import ProbeContext
from ..errors import DecodeError, DirektError
from ..schemas import Model, decode


async def fetch_item_status(
    probe: ProbeContext,
    client: DirektClient,
    path: str,
    model: Type[Model],
    kind: str,
    index: int,
) -> Optional[Model]:
    """Fetch and decode the status of one listed item.

    Failures are logged and reported as ``None`` so the caller can skip the
    item and carry on with its siblings.
    """
    fields = {f"{kind}_index": index, "path": path}
    try:
        body = await client.fetch(probe, path)
    except DirektError as e:
        probe.log.error(
            f"Error getting {kind} metrics, skipping",
            extra={"extra_fields": {**fields, "error": str(e)}},
        )
        return None

    try:
        return decode(model, body)
    except DecodeError as e:
        probe.log.error(
            f"Error decoding {kind} status response, skipping",
            extra={"extra_fields": {**fields, "error": str(e)}},
        )
        return None
