"""Payload schemas for the Direkt unit REST API (``/api/v1/units/<serial>``)."""

from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import DecodeError


class DirektModel(BaseModel):
    """Missing keys and nulls fall back to the field default, unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


Model = TypeVar("Model", bound=DirektModel)


def decode(model: Type[Model], body: bytes) -> Model:
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"failed to decode {model.__name__}: {e}") from e


# Shared audio/video


class AudioFormat(DirektModel):
    sample_rate: int = 0
    channels: int = 0
    bit_depth: int = 0


class AudioCodec(DirektModel):
    name: str = ""
    adaptive_bitrate: bool = False
    bitrate: int = 0


class AudioStream(DirektModel):
    format: AudioFormat = Field(default_factory=AudioFormat)
    codec: AudioCodec = Field(default_factory=AudioCodec)


class VideoFormat(DirektModel):
    interlaced: bool = False
    bit_depth: int = 0
    forced_aspect: bool = False
    pixel_aspect: str = ""
    height: int = 0
    top_field_first: bool = False
    display_aspect: str = ""
    chroma_subsampling: str = ""
    framerate: float = 0.0
    width: int = 0


class VideoCodec(DirektModel):
    bitrate: int = 0
    adaptive_bitrate: bool = False
    configured_performance_mode: str = ""
    bitrate_buffer: float = 0.0
    name: str = ""
    default_performance_mode: str = ""
    profile: str = ""
    performance_mode: str = ""
    level: str = ""


class VideoStream(DirektModel):
    format: VideoFormat = Field(default_factory=VideoFormat)
    codec: VideoCodec = Field(default_factory=VideoCodec)


class VideoSource(DirektModel):
    source: str = ""
    audio: List[AudioStream] = Field(default_factory=list)
    video: VideoStream = Field(default_factory=VideoStream)
    program_id: int = 0
    thumbnail: str = ""
    available: bool = False
    fallback_type: str = ""
    fallback_description: str = ""


# Listings


class ListedItem(DirektModel):
    name: str = ""
    description: str = ""
    active: bool = False
    href: str = ""
    index: int = 0
    type: str = ""


class NetworkInputsResponse(DirektModel):
    network_inputs: List[ListedItem] = Field(default_factory=list)


class EncodersResponse(DirektModel):
    encoders: List[ListedItem] = Field(default_factory=list)


class VideoPort(DirektModel):
    video_card: str = ""
    port_index: int = 0
    usable: bool = False


class VideoOutput(ListedItem):
    video_port: VideoPort = Field(default_factory=VideoPort)


class VideoOutputsResponse(DirektModel):
    video_outputs: List[VideoOutput] = Field(default_factory=list)


# System status


class Memory(DirektModel):
    available: int = 0
    total: int = 0


class FirmwareVersion(DirektModel):
    version: str = ""
    timestamp: Optional[datetime] = Field(default=None, alias="datetime")


class Firmware(DirektModel):
    running: FirmwareVersion = Field(default_factory=FirmwareVersion)
    recovery: FirmwareVersion = Field(default_factory=FirmwareVersion)
    default: FirmwareVersion = Field(default_factory=FirmwareVersion)

    def complete(self) -> bool:
        """True when all three firmware slots reported a version."""
        slots = ("running", "recovery", "default")
        if not all(slot in self.model_fields_set for slot in slots):
            return False
        return all("version" in getattr(self, slot).model_fields_set for slot in slots)


class CPU(DirektModel):
    usage: float = 0.0


class UpgradeServer(DirektModel):
    address: str = ""
    port: int = 0


class BondingPath(DirektModel):
    https_connectivity_status: str = ""
    network_interface: str = ""
    silence_time: float = 0.0
    rtt: float = 0.0
    rx_bitrate: int = 0
    via_https: bool = False
    health: str = ""
    tx_bitrate: int = 0


class Bonding(DirektModel):
    paths: List[BondingPath] = Field(default_factory=list)


class RemoteManagement(DirektModel):
    bonding: Bonding = Field(default_factory=Bonding)
    status_description: str = ""
    network_interface: str = ""
    connected: bool = False
    via_http: bool = False
    address: str = ""


class SystemResponse(DirektModel):
    memory: Memory = Field(default_factory=Memory)
    firmware: Firmware = Field(default_factory=Firmware)
    upgrade_media_present: bool = False
    cpu: CPU = Field(default_factory=CPU)
    upgrade_server: UpgradeServer = Field(default_factory=UpgradeServer)
    timestamp: Optional[datetime] = Field(default=None, alias="datetime")
    remote_management: RemoteManagement = Field(default_factory=RemoteManagement)


# Network interfaces


class Ethernet(DirektModel):
    link: float = 0.0
    duplex: str = ""
    address: str = ""


class IPAddress(DirektModel):
    address: str = ""
    netmask: str = ""


class InterfaceStatus(DirektModel):
    testing_internet_access: bool = False
    rx_bitrate: float = 0.0
    ethernet: Ethernet = Field(default_factory=Ethernet)
    internet_access: bool = False
    primary_interface: bool = False
    tx_bitrate: float = 0.0
    ip: IPAddress = Field(default_factory=IPAddress)


class InterfacesStatusResponse(DirektModel):
    status: List[InterfaceStatus] = Field(default_factory=list)


# Network inputs (decoders)


class DecoderAudioCodec(DirektModel):
    name: str = ""
    adaptive_bitrate: bool = False


class DecoderAudio(DirektModel):
    codec: DecoderAudioCodec = Field(default_factory=DecoderAudioCodec)
    format: AudioFormat = Field(default_factory=AudioFormat)


class EndToEndDelay(DirektModel):
    delay: float = 0.0
    target: float = 0.0


class Buffers(DirektModel):
    reception: float = 0.0
    target: float = 0.0
    decoder: float = 0.0


class Program(DirektModel):
    video: VideoStream = Field(default_factory=VideoStream)
    audio: List[DecoderAudio] = Field(default_factory=list)
    messages: List[Any] = Field(default_factory=list)
    thumbnail: str = ""
    number: int = 0
    id: str = ""
    end_to_end_delay: EndToEndDelay = Field(default_factory=EndToEndDelay)
    buffers: Buffers = Field(default_factory=Buffers)


class DecoderBondingPath(DirektModel):
    address: str = ""
    messages: List[Any] = Field(default_factory=list)


class DecoderBonding(DirektModel):
    buffer: float = 0.0
    protocol: str = ""
    paths: List[DecoderBondingPath] = Field(default_factory=list)


class FEC(DirektModel):
    buffer: float = 0.0
    packet_loss: float = 0.0


class Sender(DirektModel):
    serial: str = ""
    verified: bool = False


class NetworkSource(DirektModel):
    programs: List[Program] = Field(default_factory=list)
    encrypted: bool = False
    fec: FEC = Field(default_factory=FEC)
    bonding: DecoderBonding = Field(default_factory=DecoderBonding)
    bitrate: int = 0
    source_type: str = ""
    address: str = ""
    sender: Sender = Field(default_factory=Sender)
    packet_loss: float = 0.0


class NetworkInputStatus(DirektModel):
    description: str = ""
    network_source: NetworkSource = Field(default_factory=NetworkSource)
    messages: List[Any] = Field(default_factory=list)
    active: bool = False


# Encoders


class FECStatus(DirektModel):
    packet_loss: float = 0.0
    bitrate_overhead: float = 0.0


class EncoderBondingPath(DirektModel):
    latency_history: float = 0.0
    estimate_is_max: bool = False
    packet_late_history: float = 0.0
    destination: str = ""
    redundancy_bitrate: float = 0.0
    packet_loss_history: float = 0.0
    bitrate: float = 0.0
    viable: bool = False
    estimated_capacity: float = 0.0
    packet_late: int = 0
    network_interface: str = ""
    latency: float = 0.0
    packet_loss: float = 0.0


class BondingInfo(DirektModel):
    paths: List[EncoderBondingPath] = Field(default_factory=list)
    destinations: List[str] = Field(default_factory=list)
    bitrate: float = 0.0
    estimated_capacity: float = 0.0
    estimate_is_max: bool = False
    destination: str = ""
    failover_active: bool = False


class BasicDestination(DirektModel):
    udp_smoothing_buffer: float = 0.0
    fec: FECStatus = Field(default_factory=FECStatus)
    bonding: BondingInfo = Field(default_factory=BondingInfo)
    packet_loss: float = 0.0
    id: str = ""
    bitrate: float = 0.0


class EncoderDestinations(DirektModel):
    basic: List[BasicDestination] = Field(default_factory=list)


class EncodingStatus(DirektModel):
    audio: List[AudioStream] = Field(default_factory=list)
    total_bitrate: float = 0.0
    video: VideoStream = Field(default_factory=VideoStream)


class EncoderStatus(DirektModel):
    video_source: VideoSource = Field(default_factory=VideoSource)
    destinations: EncoderDestinations = Field(default_factory=EncoderDestinations)
    description: str = ""
    active: bool = False
    encoding: EncodingStatus = Field(default_factory=EncodingStatus)


# Video outputs


class VideoOut(DirektModel):
    connector_name: str = ""
    audio: List[AudioStream] = Field(default_factory=list)
    video: VideoStream = Field(default_factory=VideoStream)


class VideoOutputStatus(DirektModel):
    active: bool = False
    video_source: VideoSource = Field(default_factory=VideoSource)
    video_out: VideoOut = Field(default_factory=VideoOut)
    description: str = ""
