"""Gatherer stages, one per unit sub-resource.

Each stage is a coroutine ``stage(probe, registry, client)`` that registers
its gauges in the per-request registry and fills them from the unit's API.
"""

from .decoders import decoders
from .encoders import encoders
from .interfaces import interfaces
from .outputs import outputs
from .system import system


DEFAULT_GATHERERS = [system, interfaces, decoders, outputs, encoders]

__all__ = [
    "DEFAULT_GATHERERS",
    "decoders",
    "encoders",
    "interfaces",
    "outputs",
    "system",
]
