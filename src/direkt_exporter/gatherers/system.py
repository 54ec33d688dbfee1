"""Unit system status: firmware, CPU, memory and management bonding paths."""

from ..client import DirektClient
from ..context import ProbeContext
from ..errors import DirektError
from ..metrics import (
    GaugeDefinition,
    ProbeRegistry,
    register_gauges,
    simplify_network_interface,
    status_to_int,
)
from ..schemas import SystemResponse, decode
from . import labels


SYSTEM_INFO = "system_info"
CPU_UTILISATION_PERCENT = "cpu_utilisation_percent"
MEMORY_TOTAL_BYTES = "memory_total_bytes"
MEMORY_AVAILABLE_BYTES = "memory_available_bytes"
BONDING_PATH_RTT_SECONDS = "bonding_path_rtt_seconds"
BONDING_PATH_RX_BITRATE = "bonding_path_rx_bitrate_bytes_per_second"
BONDING_PATH_TX_BITRATE = "bonding_path_tx_bitrate_bytes_per_second"
BONDING_PATH_HEALTH = "bonding_path_health"

GAUGES = [
    GaugeDefinition(
        SYSTEM_INFO,
        "Provides information on system uptime and statistics",
        (
            labels.ACTIVE_FIRMWARE_VERSION,
            labels.BACKUP_FIRMWARE_VERSION,
            labels.DEFAULT_FIRMWARE_VERSION,
        ),
    ),
    GaugeDefinition(
        BONDING_PATH_RTT_SECONDS,
        "Round trip time in seconds for bonding path",
        (labels.NETWORK_INTERFACE,),
    ),
    GaugeDefinition(
        BONDING_PATH_RX_BITRATE,
        "Receive bitrate in bytes per second for bonding path",
        (labels.NETWORK_INTERFACE,),
    ),
    GaugeDefinition(
        BONDING_PATH_TX_BITRATE,
        "Transmit bitrate in bytes per second for bonding path",
        (labels.NETWORK_INTERFACE,),
    ),
    GaugeDefinition(
        BONDING_PATH_HEALTH,
        "Network management bonding path health",
        (labels.NETWORK_INTERFACE,),
    ),
]

# Unlabelled readings, registered only once the status decoded
READING_GAUGES = [
    GaugeDefinition(CPU_UTILISATION_PERCENT, "Percentage of CPU utilisation"),
    GaugeDefinition(MEMORY_TOTAL_BYTES, "Total amount of memory in bytes"),
    GaugeDefinition(MEMORY_AVAILABLE_BYTES, "Amount of memory available in bytes"),
]


async def system(probe: ProbeContext, registry: ProbeRegistry, client: DirektClient):
    """Populate system gauges.

    ``system_info`` is always written; its value is 1 only when the status
    decoded and reported all three firmware versions. CPU and memory
    readings are left out of the registry when the status could not be read.
    """
    gauges = register_gauges(registry, GAUGES)

    info = SystemResponse()
    success = 0.0
    error = None

    try:
        info = decode(SystemResponse, await client.fetch(probe, "system/status"))
    except DirektError as e:
        error = e
    else:
        probe.log.debug("Successfully retrieved metrics for system status")
        gauges.update(register_gauges(registry, READING_GAUGES))
        gauges[CPU_UTILISATION_PERCENT].set(info.cpu.usage)
        gauges[MEMORY_AVAILABLE_BYTES].set(info.memory.available)
        gauges[MEMORY_TOTAL_BYTES].set(info.memory.total)
        for path in info.remote_management.bonding.paths:
            ni = simplify_network_interface(path.network_interface)
            gauges[BONDING_PATH_RTT_SECONDS].labels(ni).set(path.rtt)
            gauges[BONDING_PATH_RX_BITRATE].labels(ni).set(path.rx_bitrate)
            gauges[BONDING_PATH_TX_BITRATE].labels(ni).set(path.tx_bitrate)
            gauges[BONDING_PATH_HEALTH].labels(ni).set(status_to_int(path.health))
        if info.firmware.complete():
            success = 1.0

    firmware = info.firmware
    gauges[SYSTEM_INFO].labels(
        firmware.running.version,
        firmware.recovery.version,
        firmware.default.version,
    ).set(success)

    if error is not None:
        raise error
