"""Probe orchestration: run the gatherers against one per-request registry."""

import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

from .client import DirektClient
from .context import ProbeContext
from .errors import DeviceOffline, DirektError, ValidationError
from .gatherers import DEFAULT_GATHERERS
from .metrics import ProbeRegistry


SERIAL_PREFIX = "D0"

Gatherer = Callable[[ProbeContext, ProbeRegistry, DirektClient], Awaitable[None]]


@dataclass
class ProbeResult:
    registry: ProbeRegistry
    error: Optional[DirektError] = None
    offline: bool = False

    @property
    def success(self) -> bool:
        return self.error is None


def validate_serial(serial: Optional[str]) -> str:
    if not serial:
        raise ValidationError("no serial provided")
    if not serial.startswith(SERIAL_PREFIX):
        raise ValidationError("invalid serial provided")
    return serial


async def gather_metrics(
    probe: ProbeContext,
    client: DirektClient,
    gatherers: Sequence[Gatherer] = DEFAULT_GATHERERS,
) -> ProbeResult:
    """Run ``gatherers`` in order and return whatever they collected.

    A stage error is kept (the first one is returned) and the next stage
    still runs. ``DeviceOffline`` stops the run; stages after it never
    register their gauges.
    """
    probe.log.info("Requesting metrics for Direkt unit")
    start = time.monotonic()

    registry = ProbeRegistry({"serial": probe.serial})
    success_gauge = registry.new_gauge(
        "request_success", "Displays whether or not the request was a success"
    )
    duration_gauge = registry.new_gauge(
        "request_duration_seconds",
        "Returns how long the request took to complete in seconds",
    )

    result = ProbeResult(registry=registry)
    for gatherer in gatherers:
        stage = getattr(gatherer, "__name__", repr(gatherer))
        try:
            await gatherer(probe, registry, client)
        except DeviceOffline as e:
            probe.log.warning(
                "Unit offline, skipping remaining stages",
                extra={"extra_fields": {"stage": stage}},
            )
            result.offline = True
            if result.error is None:
                result.error = e
            break
        except DirektError as e:
            probe.log.error(
                f"Error retrieving metrics: {e}",
                extra={"extra_fields": {"stage": stage}},
            )
            if result.error is None:
                result.error = e

    success_gauge.set(1 if result.success else 0)
    duration = time.monotonic() - start
    duration_gauge.set(duration)
    probe.log.info(
        "Finished gathering metrics", extra={"extra_fields": {"duration": duration}}
    )
    return result
