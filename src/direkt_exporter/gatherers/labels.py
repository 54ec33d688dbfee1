"""Label names shared across the gatherer gauge tables."""

# Unit and interfaces
ACTIVE_FIRMWARE_VERSION = "active_firmware_version"
BACKUP_FIRMWARE_VERSION = "backup_firmware_verison"
DEFAULT_FIRMWARE_VERSION = "default_firmware_version"
NETWORK_INTERFACE = "network_interface"
INTERFACE_MAC = "interface_mac"
IP_ADDRESS = "ip_address"
PRIMARY_INTERFACE = "primary_interface"

# Network inputs
INPUT_INDEX = "input_index"
INPUT_NAME = "input_name"
CODEC = "codec"
CODEC_BITRATE = "codec_bitrate"
CODEC_LEVEL = "codec_level"
SOURCE_TYPE = "source_type"
TARGET = "target"
PROTOCOL = "protocol"
PROGRAM_INDEX = "program_number"
ADDRESS = "address"
SENDER_SERIAL = "sender_serial"
SENDER_VERIFIED = "sender_verified"

# Encoders
ENCODER_INDEX = "encoder_index"
ENCODER_NAME = "encoder_name"
DESTINATION = "destination"
DESTINATION_INDEX = "destination_index"
BONDING_DESTINATION = "bonding_destination"
TARGET_BITRATE = "target_bitrate"

# Video format
INTERLACED = "interlaced"
CHROMA_SUBSAMPLING = "chroma_subsampling"
FRAMERATE = "framerate"
BIT_DEPTH = "bit_depth"
DISPLAY_ASPECT = "display_aspect"
WIDTH = "width"
PIXEL_ASPECT = "pixel_aspect"
FORCED_ASPECT = "forced_aspect"
HEIGHT = "height"
TOP_FIELD_FIRST = "top_field_first"

# Video codec
CODEC_NAME = "codec_name"
PROFILE = "profile"
LEVEL = "level"

# Audio
SAMPLE_RATE = "sample_rate"
CHANNELS = "channels"
AUDIO_INDEX = "audio_index"
AUDIO_CODEC_NAME = "audio_codec_name"
AUDIO_CHANNELS = "audio_channels"
AUDIO_SAMPLE_RATE = "audio_sample_rate"
AUDIO_BIT_DEPTH = "audio_bit_depth"

# Video outputs
OUTPUT_INDEX = "output_index"
OUTPUT_NAME = "output_name"
SOURCE_INDEX = "source_index"
SOURCE_NAME = "source_name"
