"""Video outputs and the sources feeding them."""

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
from ..schemas import VideoOutputsResponse, VideoOutputStatus, decode
from . import labels
from .common import fetch_item_status


OUTPUT_VIDEO_ACTIVE = "output_video_active"
OUTPUT_AUDIO_ACTIVE = "output_audio_active"
OUTPUT_VIDEO_SOURCE_AVAILABLE = "output_video_source_available"
OUTPUT_AUDIO_SOURCE_AVAILABLE = "output_audio_source_available"

_VIDEO_FORMAT = (
    labels.WIDTH,
    labels.HEIGHT,
    labels.FRAMERATE,
    labels.BIT_DEPTH,
    labels.INTERLACED,
    labels.CHROMA_SUBSAMPLING,
    labels.PIXEL_ASPECT,
    labels.DISPLAY_ASPECT,
    labels.TOP_FIELD_FIRST,
)

GAUGES = [
    GaugeDefinition(
        OUTPUT_VIDEO_ACTIVE,
        "Indicates if the video output is active (1=active, 0=inactive) with video format properties as labels",
        (labels.OUTPUT_INDEX, labels.OUTPUT_NAME) + _VIDEO_FORMAT,
    ),
    GaugeDefinition(
        OUTPUT_AUDIO_ACTIVE,
        "Indicates if the audio output is active (1=active, 0=inactive) with audio format properties as labels",
        (
            labels.OUTPUT_INDEX,
            labels.OUTPUT_NAME,
            labels.AUDIO_INDEX,
            labels.AUDIO_CHANNELS,
            labels.AUDIO_SAMPLE_RATE,
            labels.AUDIO_BIT_DEPTH,
        ),
    ),
    GaugeDefinition(
        OUTPUT_VIDEO_SOURCE_AVAILABLE,
        "Indicates if the video source is available (1=active, 0=inactive) with video format properties as labels",
        (
            labels.SOURCE_INDEX,
            labels.SOURCE_NAME,
            labels.CODEC_NAME,
            labels.CODEC_BITRATE,
            labels.PROFILE,
            labels.LEVEL,
        )
        + _VIDEO_FORMAT,
    ),
    GaugeDefinition(
        OUTPUT_AUDIO_SOURCE_AVAILABLE,
        "Indicates if the audio source is available (1=active, 0=inactive) with audio format properties as labels",
        (
            labels.SOURCE_INDEX,
            labels.SOURCE_NAME,
            labels.AUDIO_INDEX,
            labels.AUDIO_CODEC_NAME,
            labels.AUDIO_CHANNELS,
            labels.AUDIO_SAMPLE_RATE,
            labels.AUDIO_BIT_DEPTH,
        ),
    ),
]


def _format_labels(fmt):
    return (
        str(fmt.width),
        str(fmt.height),
        format_float(fmt.framerate, 2),
        str(fmt.bit_depth),
        bool_to_string(fmt.interlaced),
        fmt.chroma_subsampling,
        fmt.pixel_aspect,
        fmt.display_aspect,
        bool_to_string(fmt.top_field_first),
    )


async def outputs(probe: ProbeContext, registry: ProbeRegistry, client: DirektClient):
    listing = decode(VideoOutputsResponse, await client.fetch(probe, "video_outputs"))

    gauges = register_gauges(registry, GAUGES)

    for output in listing.video_outputs:
        e = await fetch_item_status(
            probe,
            client,
            f"video_outputs/{output.index}/status",
            VideoOutputStatus,
            "output",
            output.index,
        )
        if e is None:
            continue

        idx = str(output.index)
        name = output.description
        active = bool_to_float(e.active)
        available = bool_to_float(e.video_source.available)

        gauges[OUTPUT_VIDEO_ACTIVE].labels(
            idx, name, *_format_labels(e.video_out.video.format)
        ).set(active)

        for i, audio in enumerate(e.video_out.audio):
            gauges[OUTPUT_AUDIO_ACTIVE].labels(
                idx,
                name,
                str(i),
                str(audio.format.channels),
                str(audio.format.sample_rate),
                str(audio.format.bit_depth),
            ).set(active)

        codec = e.video_source.video.codec
        gauges[OUTPUT_VIDEO_SOURCE_AVAILABLE].labels(
            idx,
            name,
            codec.name,
            str(codec.bitrate),
            codec.profile,
            codec.level,
            *_format_labels(e.video_source.video.format),
        ).set(available)

        # The unit reports the source's audio tracks on the output side
        for i, audio in enumerate(e.video_out.audio):
            gauges[OUTPUT_AUDIO_SOURCE_AVAILABLE].labels(
                idx,
                name,
                str(i),
                audio.codec.name,
                str(audio.format.channels),
                str(audio.format.sample_rate),
                str(audio.format.bit_depth),
            ).set(available)
