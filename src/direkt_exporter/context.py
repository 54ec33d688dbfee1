"""Request-scoped state shared by the gatherers of one probe."""

import logging
import time
from dataclasses import dataclass, field
from typing import Union

from .utils.logging import ContextAdapter, bind


DEFAULT_PROBE_TIMEOUT = 10.0


@dataclass
class ProbeContext:
    serial: str
    deadline: float
    log: ContextAdapter = field(repr=False)

    @classmethod
    def start(
        cls,
        serial: str,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        logger: Union[logging.Logger, ContextAdapter, None] = None,
    ) -> "ProbeContext":
        if isinstance(logger, ContextAdapter):
            log = logger.bind(serial=serial)
        else:
            log = bind(logger or logging.getLogger("direkt_exporter.probe"), serial=serial)
        return cls(serial=serial, deadline=time.monotonic() + timeout, log=log)

    def remaining(self) -> float:
        return self.deadline - time.monotonic()
