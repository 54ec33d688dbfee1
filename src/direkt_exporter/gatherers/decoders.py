"""Network inputs: received streams, programs, buffers and delay."""

from ..client import DirektClient
from ..context import ProbeContext
from ..metrics import (
    GaugeDefinition,
    ProbeRegistry,
    bool_to_float,
    bool_to_string,
    format_float,
    register_gauges,
)
from ..schemas import NetworkInputsResponse, NetworkInputStatus, decode
from . import labels
from .common import fetch_item_status


NETWORK_INPUT_VIDEO_STATUS = "network_input_video_status"
NETWORK_INPUT_AUDIO_STATUS = "network_input_audio_status"
NETWORK_INPUT_VIDEO_BITRATE = "network_input_video_bitrate"
NETWORK_INPUT_BITRATE = "network_input_bitrate"
NETWORK_INPUT_PACKET_LOSS = "network_input_packet_loss"
NETWORK_INPUT_END_TO_END_DELAY = "network_input_end_to_end_delay_seconds"
NETWORK_INPUT_BUFFERS_RECEPTION = "network_input_buffers_reception_seconds"
NETWORK_INPUT_BUFFERS_DECODER = "network_input_buffers_decoder_seconds"
NETWORK_INPUT_BUFFERS_TARGET = "network_input_buffers_target_seconds"
NETWORK_INPUT_FEC_BUFFER = "network_input_fec_buffer_seconds"
NETWORK_INPUT_FEC_PACKET_LOSS = "network_input_fec_packet_loss"
NETWORK_INPUT_BONDING_BUFFER = "network_input_bonding_buffer_seconds"
NETWORK_INPUT_ACTIVE = "network_input_active"

_INPUT = (labels.INPUT_INDEX, labels.INPUT_NAME)
_PROGRAM = _INPUT + (labels.PROGRAM_INDEX,)

GAUGES = [
    GaugeDefinition(
        NETWORK_INPUT_VIDEO_STATUS,
        "Video input status (1=active, 0=inactive)",
        _INPUT
        + (
            labels.CODEC,
            labels.PROFILE,
            labels.CODEC_LEVEL,
            labels.CHROMA_SUBSAMPLING,
            labels.FRAMERATE,
            labels.WIDTH,
            labels.HEIGHT,
            labels.BIT_DEPTH,
            labels.INTERLACED,
            labels.TOP_FIELD_FIRST,
            labels.DISPLAY_ASPECT,
            labels.PIXEL_ASPECT,
            labels.FORCED_ASPECT,
            labels.PROGRAM_INDEX,
        ),
    ),
    GaugeDefinition(
        NETWORK_INPUT_AUDIO_STATUS,
        "Audio input status (1=active, 0=inactive)",
        _INPUT
        + (
            labels.CODEC,
            labels.CHANNELS,
            labels.SAMPLE_RATE,
            labels.BIT_DEPTH,
            labels.PROGRAM_INDEX,
            labels.AUDIO_INDEX,
        ),
    ),
    GaugeDefinition(
        NETWORK_INPUT_VIDEO_BITRATE,
        "Video codec bitrate in bits per second",
        _PROGRAM,
    ),
    GaugeDefinition(
        NETWORK_INPUT_BITRATE,
        "Total network input bitrate in bits per second",
        _INPUT + (labels.SOURCE_TYPE, labels.SENDER_SERIAL),
    ),
    GaugeDefinition(NETWORK_INPUT_PACKET_LOSS, "Network input packet loss", _INPUT),
    GaugeDefinition(
        NETWORK_INPUT_END_TO_END_DELAY,
        "End-to-end delay for the input in seconds",
        _PROGRAM + (labels.TARGET,),
    ),
    GaugeDefinition(
        NETWORK_INPUT_BUFFERS_RECEPTION,
        "Reception buffer duration in seconds",
        _PROGRAM,
    ),
    GaugeDefinition(
        NETWORK_INPUT_BUFFERS_DECODER,
        "Decoder buffer duration in seconds",
        _PROGRAM,
    ),
    GaugeDefinition(
        NETWORK_INPUT_BUFFERS_TARGET,
        "Target buffer duration in seconds",
        _PROGRAM,
    ),
    GaugeDefinition(NETWORK_INPUT_FEC_BUFFER, "FEC buffer duration in seconds", _PROGRAM),
    GaugeDefinition(NETWORK_INPUT_FEC_PACKET_LOSS, "FEC packet loss", _PROGRAM),
    GaugeDefinition(
        NETWORK_INPUT_BONDING_BUFFER,
        "Bonding buffer duration in seconds",
        _INPUT + (labels.PROTOCOL,),
    ),
    GaugeDefinition(
        NETWORK_INPUT_ACTIVE,
        "Indicates if the network input is active (1=active, 0=inactive)",
        _INPUT
        + (
            labels.SOURCE_TYPE,
            labels.ADDRESS,
            labels.SENDER_SERIAL,
            labels.SENDER_VERIFIED,
        ),
    ),
]


async def decoders(probe: ProbeContext, registry: ProbeRegistry, client: DirektClient):
    listing = decode(NetworkInputsResponse, await client.fetch(probe, "network_inputs"))

    gauges = register_gauges(registry, GAUGES)

    for decoder in listing.network_inputs:
        status = await fetch_item_status(
            probe,
            client,
            f"network_inputs/{decoder.index}/status",
            NetworkInputStatus,
            "decoder",
            decoder.index,
        )
        if status is None:
            continue
        _set_input(gauges, str(decoder.index), status)


def _set_input(gauges, idx: str, e: NetworkInputStatus):
    name = e.description
    source = e.network_source
    active = bool_to_float(e.active)

    gauges[NETWORK_INPUT_ACTIVE].labels(
        idx,
        name,
        source.source_type,
        source.address,
        source.sender.serial,
        bool_to_string(source.sender.verified),
    ).set(active)

    gauges[NETWORK_INPUT_BITRATE].labels(
        idx, name, source.source_type, source.sender.serial
    ).set(source.bitrate)

    gauges[NETWORK_INPUT_PACKET_LOSS].labels(idx, name).set(source.packet_loss)

    # FEC is reported per input, not per program
    gauges[NETWORK_INPUT_FEC_BUFFER].labels(idx, name, "0").set(source.fec.buffer)
    gauges[NETWORK_INPUT_FEC_PACKET_LOSS].labels(idx, name, "0").set(
        source.fec.packet_loss
    )

    if source.bonding.protocol:
        gauges[NETWORK_INPUT_BONDING_BUFFER].labels(
            idx, name, source.bonding.protocol
        ).set(source.bonding.buffer)

    for prog_index, prog in enumerate(source.programs):
        prog_idx = str(prog_index)
        video = prog.video

        gauges[NETWORK_INPUT_VIDEO_STATUS].labels(
            idx,
            name,
            video.codec.name,
            video.codec.profile,
            video.codec.level,
            video.format.chroma_subsampling,
            format_float(video.format.framerate, 2),
            str(video.format.width),
            str(video.format.height),
            str(video.format.bit_depth),
            bool_to_string(video.format.interlaced),
            bool_to_string(video.format.top_field_first),
            video.format.display_aspect,
            video.format.pixel_aspect,
            bool_to_string(video.format.forced_aspect),
            prog_idx,
        ).set(active)

        gauges[NETWORK_INPUT_VIDEO_BITRATE].labels(idx, name, prog_idx).set(
            video.codec.bitrate
        )

        for audio_index, audio in enumerate(prog.audio):
            gauges[NETWORK_INPUT_AUDIO_STATUS].labels(
                idx,
                name,
                audio.codec.name,
                str(audio.format.channels),
                str(audio.format.sample_rate),
                str(audio.format.bit_depth),
                prog_idx,
                str(audio_index),
            ).set(active)

        gauges[NETWORK_INPUT_BUFFERS_RECEPTION].labels(idx, name, prog_idx).set(
            prog.buffers.reception
        )
        gauges[NETWORK_INPUT_BUFFERS_DECODER].labels(idx, name, prog_idx).set(
            prog.buffers.decoder
        )
        gauges[NETWORK_INPUT_BUFFERS_TARGET].labels(idx, name, prog_idx).set(
            prog.buffers.target
        )

        gauges[NETWORK_INPUT_END_TO_END_DELAY].labels(
            idx, name, prog_idx, format_float(prog.end_to_end_delay.target, 4)
        ).set(prog.end_to_end_delay.delay)
