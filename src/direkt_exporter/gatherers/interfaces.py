"""Network interface bitrates, link speed and internet reachability."""

from ..client import DirektClient
from ..context import ProbeContext
from ..metrics import (
    GaugeDefinition,
    ProbeRegistry,
    bool_to_float,
    bool_to_string,
    register_gauges,
)
from ..schemas import InterfacesStatusResponse, decode
from . import labels


INTERFACE_RX_BITRATE = "interface_rx_bitrate_bytes_per_second"
INTERFACE_TX_BITRATE = "interface_tx_bitrate_bytes_per_second"
INTERFACE_LINK_SPEED = "interface_link_speed_bits_per_second"
INTERFACE_INTERNET_ACCESS = "interface_internet_access"
INTERFACE_TESTING_INTERNET_ACCESS = "interface_testing_internet_access"

_INTERFACE_LABELS = (labels.INTERFACE_MAC, labels.IP_ADDRESS, labels.PRIMARY_INTERFACE)

GAUGES = [
    GaugeDefinition(
        INTERFACE_RX_BITRATE,
        "Receive bitrate in bits per second for the interface",
        _INTERFACE_LABELS,
    ),
    GaugeDefinition(
        INTERFACE_TX_BITRATE,
        "Transmit bitrate in bits per second for the interface",
        _INTERFACE_LABELS,
    ),
    GaugeDefinition(
        INTERFACE_LINK_SPEED,
        "Ethernet link speed in bits per second. -1 if unknown",
        _INTERFACE_LABELS,
    ),
    GaugeDefinition(
        INTERFACE_INTERNET_ACCESS,
        "Boolean indicating if the interface has internet access (1 = yes, 0 = no)",
        _INTERFACE_LABELS,
    ),
    GaugeDefinition(
        INTERFACE_TESTING_INTERNET_ACCESS,
        "Boolean indicating if the interface is testing internet access (1 = yes, 0 = no)",
        _INTERFACE_LABELS,
    ),
]


async def interfaces(probe: ProbeContext, registry: ProbeRegistry, client: DirektClient):
    gauges = register_gauges(registry, GAUGES)

    body = await client.fetch(probe, "network_interfaces/status")
    status = decode(InterfacesStatusResponse, body)
    probe.log.debug("Successfully retrieved metrics for network interfaces status")

    for nwint in status.status:
        key = (
            nwint.ethernet.address,
            nwint.ip.address,
            bool_to_string(nwint.primary_interface),
        )
        gauges[INTERFACE_RX_BITRATE].labels(*key).set(nwint.rx_bitrate)
        gauges[INTERFACE_TX_BITRATE].labels(*key).set(nwint.tx_bitrate)
        gauges[INTERFACE_LINK_SPEED].labels(*key).set(nwint.ethernet.link)
        gauges[INTERFACE_INTERNET_ACCESS].labels(*key).set(
            bool_to_float(nwint.internet_access)
        )
        gauges[INTERFACE_TESTING_INTERNET_ACCESS].labels(*key).set(
            bool_to_float(nwint.testing_internet_access)
        )
