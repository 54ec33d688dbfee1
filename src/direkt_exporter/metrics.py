"""Per-request metric registry, gauge tables and label encoders."""

import copy
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Mapping, Tuple

from prometheus_client import CollectorRegistry, Gauge
from prometheus_client.metrics_core import Metric


@dataclass(frozen=True)
class GaugeDefinition:
    name: str
    desc: str
    labels: Tuple[str, ...] = field(default_factory=tuple)


class ProbeRegistry(CollectorRegistry):
    """Registry scoped to a single probe request.

    Every sample it exposes carries ``const_labels`` (the unit serial) in
    addition to the labels set by the gatherers.
    """

    def __init__(self, const_labels: Mapping[str, str]):
        super().__init__()
        self.const_labels = dict(const_labels)

    def collect(self) -> Iterator[Metric]:
        for metric in super().collect():
            labelled = copy.copy(metric)
            labelled.samples = [
                sample._replace(labels={**self.const_labels, **sample.labels})
                for sample in metric.samples
            ]
            yield labelled

    def new_gauge(self, name: str, desc: str) -> Gauge:
        gauge = Gauge(name, desc, registry=None)
        self.register(gauge)
        return gauge


def new_gauge_map(definitions: Iterable[GaugeDefinition]) -> Dict[str, Gauge]:
    """Create one unregistered, empty gauge per definition, keyed by name."""
    return {
        definition.name: Gauge(
            definition.name,
            definition.desc,
            list(definition.labels),
            registry=None,
        )
        for definition in definitions
    }


def register_gauges(
    registry: CollectorRegistry, definitions: Iterable[GaugeDefinition]
) -> Dict[str, Gauge]:
    """Build the gauges for a stage and register each exactly once.

    ``CollectorRegistry.register`` raises ``ValueError`` on a duplicated
    name, so running a stage twice against one registry fails loudly.
    """
    definitions = list(definitions)
    gauges = new_gauge_map(definitions)
    for definition in definitions:
        gauge = gauges[definition.name]
        registry.register(gauge)
        if definition.labels:
            gauge.clear()
    return gauges


# Label encoders


def bool_to_string(value: bool) -> str:
    return "true" if value else "false"


def bool_to_float(value: bool) -> float:
    return 1.0 if value else 0.0


# Spellings the unit uses for boolean true
_TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}


def status_to_int(value: str) -> int:
    """Normalise a textual health field: "ok" and true-ish strings are 1, anything else 0."""
    if value == "ok":
        value = "true"
    if value in _TRUE_STRINGS:
        return 1
    return 0


def simplify_network_interface(full_path: str) -> str:
    """Extract "0" out of "/api/v1/units/D02018/network_interfaces/0"."""
    parts = full_path.split("/")
    if len(parts) < 7:
        return full_path
    return parts[6]


def format_float(value: float, precision: int = 2) -> str:
    return f"{value:.{precision}f}"
