"""Encoders: input signal, encoding configuration and basic destinations."""

from ..client import DirektClient
from ..context import ProbeContext
from ..metrics import (
    GaugeDefinition,
    ProbeRegistry,
    bool_to_float,
    bool_to_string,
    format_float,
    register_gauges,
    simplify_network_interface,
)
from ..schemas import EncodersResponse, EncoderStatus, VideoFormat, decode
from . import labels
from .common import fetch_item_status


ENCODER_VIDEO_CONFIG = "encoder_video_config"
ENCODER_AUDIO_CONFIG = "encoder_audio_config"
ENCODER_VIDEO_INPUT_STATUS = "encoder_video_input_status"
ENCODER_AUDIO_INPUT_STATUS = "encoder_audio_input_status"
ENCODER_TOTAL_BITRATE = "encoder_total_bitrate_bits"
DESTINATION_BITRATE = "encoder_basic_destination_bitrate_bits"
DESTINATION_PACKET_LOSS = "encoder_basic_destination_packet_loss"
DESTINATION_FEC_PACKET_LOSS = "encoder_basic_destination_fec_packet_loss"
DESTINATION_FEC_OVERHEAD = "encoder_basic_destination_fec_bitrate_overhead"
DESTINATION_UDP_SMOOTHING_BUFFER = "encoder_basic_destination_udp_smoothing_buffer_seconds"
DESTINATION_FAILOVER_ACTIVE = "encoder_basic_destination_failover_active"
PATH_LATENCY = "encoder_basic_destination_path_latency_seconds"
PATH_LATENCY_HISTORICAL = "encoder_basic_destination_path_latency_historical_seconds"
PATH_VIABLE = "encoder_basic_destination_path_viable"
PATH_BITRATE = "encoder_basic_destination_path_bitrate_bits"
PATH_PACKET_LOSS = "encoder_basic_destination_path_packet_loss"
PATH_PACKET_LOSS_HISTORICAL = "encoder_basic_destination_path_packet_loss_historical"
PATH_CAPACITY = "encoder_basic_destination_path_estimated_capacity_bits"
PATH_REDUNDANCY = "encoder_basic_destination_path_redundancy_bitrate_bits"

_ENCODER = (labels.ENCODER_INDEX, labels.ENCODER_NAME)
_DESTINATION = _ENCODER + (labels.DESTINATION, labels.DESTINATION_INDEX)
_PATH = _ENCODER + (
    labels.BONDING_DESTINATION,
    labels.DESTINATION,
    labels.DESTINATION_INDEX,
    labels.NETWORK_INTERFACE,
)
_VIDEO_FORMAT = (
    labels.FRAMERATE,
    labels.WIDTH,
    labels.HEIGHT,
    labels.BIT_DEPTH,
    labels.INTERLACED,
    labels.TOP_FIELD_FIRST,
    labels.CHROMA_SUBSAMPLING,
    labels.DISPLAY_ASPECT,
    labels.PIXEL_ASPECT,
    labels.FORCED_ASPECT,
)

GAUGES = [
    GaugeDefinition(
        ENCODER_VIDEO_INPUT_STATUS,
        "Video input and encoding status. Value is 1 if source is available, 0 otherwise. Encoding and format info are exposed as labels.",
        _ENCODER + _VIDEO_FORMAT,
    ),
    GaugeDefinition(
        ENCODER_AUDIO_INPUT_STATUS,
        "Audio input status. Value is 1 if source is available, 0 otherwise. Audio properties are in labels.",
        _ENCODER
        + (
            labels.AUDIO_INDEX,
            labels.CODEC,
            labels.AUDIO_SAMPLE_RATE,
            labels.AUDIO_CHANNELS,
        ),
    ),
    GaugeDefinition(
        ENCODER_VIDEO_CONFIG,
        "Video encoder configuration. Exposes all static and configured parameters as labels. Value always 1 if encoder is active.",
        _ENCODER
        + (labels.CODEC, labels.PROFILE, labels.CODEC_LEVEL, labels.TARGET_BITRATE)
        + _VIDEO_FORMAT,
    ),
    GaugeDefinition(
        ENCODER_AUDIO_CONFIG,
        "Audio encoder configuration. Exposes all static and configured parameters as labels. Value always 1 if encoder is active.",
        _ENCODER
        + (
            labels.AUDIO_INDEX,
            labels.CODEC,
            labels.TARGET_BITRATE,
            labels.AUDIO_SAMPLE_RATE,
            labels.AUDIO_CHANNELS,
        ),
    ),
    GaugeDefinition(
        ENCODER_TOTAL_BITRATE,
        "Total encoder bitrate in bits per second (sum of video and audio streams).",
        _ENCODER,
    ),
    GaugeDefinition(
        DESTINATION_BITRATE,
        "Output bitrate to a destination in bits per second.",
        _DESTINATION,
    ),
    GaugeDefinition(
        DESTINATION_PACKET_LOSS,
        "Overall packet loss ratio for a destination (0-1).",
        _DESTINATION,
    ),
    GaugeDefinition(
        DESTINATION_FEC_PACKET_LOSS,
        "FEC packet loss for a destination (fractional).",
        _DESTINATION,
    ),
    GaugeDefinition(
        DESTINATION_FEC_OVERHEAD,
        "FEC bitrate overhead ratio for a destination (fractional).",
        _DESTINATION,
    ),
    GaugeDefinition(
        DESTINATION_UDP_SMOOTHING_BUFFER,
        "UDP smoothing buffer duration for a destination in seconds.",
        _DESTINATION,
    ),
    GaugeDefinition(
        DESTINATION_FAILOVER_ACTIVE,
        "1 if bonding failover is active for a destination, 0 otherwise.",
        _DESTINATION,
    ),
    GaugeDefinition(
        PATH_LATENCY,
        "Current latency in seconds for a destination path.",
        _PATH,
    ),
    GaugeDefinition(
        PATH_LATENCY_HISTORICAL,
        "Historical average latency in seconds for a destination path.",
        _PATH,
    ),
    GaugeDefinition(
        PATH_VIABLE,
        "1 if the destination path is viable, 0 otherwise.",
        _PATH,
    ),
    GaugeDefinition(
        PATH_BITRATE,
        "Current bitrate on a specific destination path (bits per second).",
        _PATH,
    ),
    GaugeDefinition(
        PATH_PACKET_LOSS,
        "Current packet loss ratio (0-1) on a destination path.",
        _PATH,
    ),
    GaugeDefinition(
        PATH_PACKET_LOSS_HISTORICAL,
        "Historical average packet loss ratio (0-1) on a destination path.",
        _PATH,
    ),
    GaugeDefinition(
        PATH_CAPACITY,
        "Estimated capacity in bits per second for a destination path.",
        _PATH,
    ),
    GaugeDefinition(
        PATH_REDUNDANCY,
        "Configured redundancy bitrate for a destination path (bits per second).",
        _PATH,
    ),
]


def _format_labels(fmt: VideoFormat):
    return (
        format_float(fmt.framerate, 2),
        str(fmt.width),
        str(fmt.height),
        str(fmt.bit_depth),
        bool_to_string(fmt.interlaced),
        bool_to_string(fmt.top_field_first),
        fmt.chroma_subsampling,
        fmt.display_aspect,
        fmt.pixel_aspect,
        bool_to_string(fmt.forced_aspect),
    )


async def encoders(probe: ProbeContext, registry: ProbeRegistry, client: DirektClient):
    listing = decode(EncodersResponse, await client.fetch(probe, "encoders"))

    gauges = register_gauges(registry, GAUGES)

    for encoder in listing.encoders:
        status = await fetch_item_status(
            probe,
            client,
            f"encoders/{encoder.index}/status",
            EncoderStatus,
            "encoder",
            encoder.index,
        )
        if status is None:
            continue
        _set_encoder(gauges, str(encoder.index), status)


def _set_encoder(gauges, idx: str, e: EncoderStatus):
    name = e.description
    source = e.video_source
    available = bool_to_float(source.available)
    active = bool_to_float(e.active)

    gauges[ENCODER_VIDEO_INPUT_STATUS].labels(
        idx, name, *_format_labels(source.video.format)
    ).set(available)

    for i, audio in enumerate(source.audio):
        gauges[ENCODER_AUDIO_INPUT_STATUS].labels(
            idx,
            name,
            str(i),
            audio.codec.name,
            str(audio.format.sample_rate),
            str(audio.format.channels),
        ).set(available)

    video = e.encoding.video
    gauges[ENCODER_VIDEO_CONFIG].labels(
        idx,
        name,
        video.codec.name,
        video.codec.profile,
        video.codec.level,
        str(video.codec.bitrate),
        *_format_labels(video.format),
    ).set(active)

    for i, audio in enumerate(e.encoding.audio):
        gauges[ENCODER_AUDIO_CONFIG].labels(
            idx,
            name,
            str(i),
            audio.codec.name,
            str(audio.codec.bitrate),
            str(audio.format.sample_rate),
            str(audio.format.channels),
        ).set(active)

    gauges[ENCODER_TOTAL_BITRATE].labels(idx, name).set(e.encoding.total_bitrate)

    for i, basic in enumerate(e.destinations.basic):
        bonding = basic.bonding
        dest = (idx, name, bonding.destination, str(i))

        gauges[DESTINATION_BITRATE].labels(*dest).set(basic.bitrate)
        gauges[DESTINATION_PACKET_LOSS].labels(*dest).set(basic.packet_loss)
        gauges[DESTINATION_FEC_PACKET_LOSS].labels(*dest).set(basic.fec.packet_loss)
        gauges[DESTINATION_FEC_OVERHEAD].labels(*dest).set(basic.fec.bitrate_overhead)
        gauges[DESTINATION_UDP_SMOOTHING_BUFFER].labels(*dest).set(
            basic.udp_smoothing_buffer
        )
        gauges[DESTINATION_FAILOVER_ACTIVE].labels(*dest).set(
            bool_to_float(bonding.failover_active)
        )

        for path in bonding.paths:
            key = (
                idx,
                name,
                bonding.destination,
                path.destination,
                str(i),
                simplify_network_interface(path.network_interface),
            )
            gauges[PATH_LATENCY].labels(*key).set(path.latency)
            gauges[PATH_LATENCY_HISTORICAL].labels(*key).set(path.latency_history)
            gauges[PATH_VIABLE].labels(*key).set(bool_to_float(path.viable))
            gauges[PATH_BITRATE].labels(*key).set(path.bitrate)
            gauges[PATH_PACKET_LOSS].labels(*key).set(path.packet_loss)
            gauges[PATH_PACKET_LOSS_HISTORICAL].labels(*key).set(
                path.packet_loss_history
            )
            gauges[PATH_CAPACITY].labels(*key).set(path.estimated_capacity)
            gauges[PATH_REDUNDANCY].labels(*key).set(path.redundancy_bitrate)
