import json

import httpx
import pytest

from direkt_exporter.client import DirektClient
from direkt_exporter.context import ProbeContext
from direkt_exporter.metrics import ProbeRegistry


SERIAL = "D02018"
UNIT_PREFIX = f"/api/v1/units/{SERIAL}/"


SYSTEM_STATUS = {
    "memory": {"available": 1048576, "total": 4194304},
    "firmware": {
        "running": {"version": "5.4.1", "datetime": "2024-03-01T10:00:00Z"},
        "recovery": {"version": "5.2.0", "datetime": "2023-11-01T10:00:00Z"},
        "default": {"version": "5.4.1", "datetime": "2024-03-01T10:00:00Z"},
    },
    "cpu": {"usage": 12.5},
    "remote_management": {
        "connected": True,
        "bonding": {
            "paths": [
                {
                    "network_interface": f"/api/v1/units/{SERIAL}/network_interfaces/0",
                    "rtt": 0.042,
                    "rx_bitrate": 1200,
                    "tx_bitrate": 3400,
                    "health": "ok",
                },
                {
                    "network_interface": "wwan0",
                    "rtt": 0.2,
                    "rx_bitrate": 10,
                    "tx_bitrate": 20,
                    "health": "degraded",
                },
            ]
        },
    },
}

INTERFACES_STATUS = {
    "status": [
        {
            "rx_bitrate": 1000.0,
            "tx_bitrate": 2000.0,
            "internet_access": True,
            "testing_internet_access": False,
            "primary_interface": True,
            "ethernet": {"link": 1000000000, "duplex": "full", "address": "00:11:22:33:44:55"},
            "ip": {"address": "10.0.0.2", "netmask": "255.255.255.0"},
        },
        {
            "rx_bitrate": 0.0,
            "tx_bitrate": 0.0,
            "internet_access": False,
            "testing_internet_access": True,
            "primary_interface": False,
            "ethernet": {"link": -1, "address": "00:11:22:33:44:56"},
            "ip": {"address": "", "netmask": ""},
        },
    ]
}

NETWORK_INPUTS = {
    "network_inputs": [
        {"index": 0, "name": "network_input_0", "description": "Studio A"},
    ]
}

NETWORK_INPUT_STATUS = {
    "description": "Studio A",
    "active": True,
    "network_source": {
        "source_type": "bonded",
        "address": "192.0.2.10",
        "bitrate": 8000000,
        "packet_loss": 0.01,
        "sender": {"serial": "D01111", "verified": True},
        "fec": {"buffer": 0.5, "packet_loss": 0.002},
        "bonding": {"buffer": 1.5, "protocol": "brt"},
        "programs": [
            {
                "video": {
                    "codec": {
                        "name": "h264",
                        "profile": "high",
                        "level": "4.1",
                        "bitrate": 6000000,
                    },
                    "format": {
                        "framerate": 25,
                        "width": 1920,
                        "height": 1080,
                        "bit_depth": 8,
                        "interlaced": False,
                        "top_field_first": False,
                        "chroma_subsampling": "4:2:0",
                        "display_aspect": "16:9",
                        "pixel_aspect": "1:1",
                        "forced_aspect": False,
                    },
                },
                "audio": [
                    {
                        "codec": {"name": "aac"},
                        "format": {"channels": 2, "sample_rate": 48000, "bit_depth": 16},
                    },
                    {
                        "codec": {"name": "opus"},
                        "format": {"channels": 1, "sample_rate": 48000, "bit_depth": 16},
                    },
                ],
                "end_to_end_delay": {"delay": 2.1, "target": 2.0},
                "buffers": {"reception": 0.4, "decoder": 0.3, "target": 0.8},
            }
        ],
    },
}

VIDEO_OUTPUTS = {
    "video_outputs": [
        {"index": 0, "name": "sdi_0", "description": "SDI 1"},
    ]
}

VIDEO_OUTPUT_STATUS = {
    "active": True,
    "description": "SDI 1",
    "video_out": {
        "connector_name": "SDI",
        "video": {
            "format": {
                "framerate": 29.97,
                "width": 1280,
                "height": 720,
                "bit_depth": 10,
                "interlaced": False,
                "chroma_subsampling": "4:2:2",
                "pixel_aspect": "1:1",
                "display_aspect": "16:9",
                "top_field_first": False,
            }
        },
        "audio": [
            {
                "codec": {"name": "pcm"},
                "format": {"channels": 2, "sample_rate": 48000, "bit_depth": 24},
            }
        ],
    },
    "video_source": {
        "available": False,
        "video": {
            "codec": {"name": "hevc", "bitrate": 4000000, "profile": "main", "level": "5"},
            "format": {"framerate": 50, "width": 3840, "height": 2160, "bit_depth": 10},
        },
    },
}

ENCODERS = {
    "encoders": [
        {"index": 0, "name": "encoder_0", "description": "Camera 1"},
        {"index": 1, "name": "encoder_1", "description": "Camera 2"},
        {"index": 2, "name": "encoder_2", "description": "Camera 3"},
    ]
}


def encoder_status(description: str) -> dict:
    return {
        "description": description,
        "active": True,
        "video_source": {
            "available": True,
            "video": {
                "format": {
                    "framerate": 59.94,
                    "width": 1920,
                    "height": 1080,
                    "bit_depth": 8,
                    "interlaced": False,
                    "top_field_first": False,
                    "chroma_subsampling": "4:2:2",
                    "display_aspect": "16:9",
                    "pixel_aspect": "1:1",
                    "forced_aspect": False,
                }
            },
            "audio": [
                {"codec": {"name": "pcm"}, "format": {"channels": 2, "sample_rate": 48000}}
            ],
        },
        "encoding": {
            "total_bitrate": 5128000,
            "video": {
                "codec": {"name": "h264", "profile": "high", "level": "4.2", "bitrate": 5000000},
                "format": {"framerate": 29.97, "width": 1280, "height": 720, "bit_depth": 8},
            },
            "audio": [
                {
                    "codec": {"name": "aac", "bitrate": 128000},
                    "format": {"channels": 2, "sample_rate": 48000},
                }
            ],
        },
        "destinations": {
            "basic": [
                {
                    "bitrate": 5200000,
                    "packet_loss": 0.001,
                    "udp_smoothing_buffer": 0.25,
                    "fec": {"packet_loss": 0.0005, "bitrate_overhead": 0.1},
                    "bonding": {
                        "destination": "receiver.example.com",
                        "failover_active": False,
                        "paths": [
                            {
                                "destination": "198.51.100.7",
                                "network_interface": f"/api/v1/units/{SERIAL}/network_interfaces/1",
                                "latency": 0.08,
                                "latency_history": 0.09,
                                "viable": True,
                                "bitrate": 2600000,
                                "packet_loss": 0.0,
                                "packet_loss_history": 0.01,
                                "estimated_capacity": 10000000,
                                "redundancy_bitrate": 0,
                            }
                        ],
                    },
                }
            ]
        },
    }


def healthy_routes() -> dict:
    return {
        "system/status": SYSTEM_STATUS,
        "network_interfaces/status": INTERFACES_STATUS,
        "network_inputs": NETWORK_INPUTS,
        "network_inputs/0/status": NETWORK_INPUT_STATUS,
        "video_outputs": VIDEO_OUTPUTS,
        "video_outputs/0/status": VIDEO_OUTPUT_STATUS,
        "encoders": ENCODERS,
        "encoders/0/status": encoder_status("Camera 1"),
        "encoders/1/status": encoder_status("Camera 2"),
        "encoders/2/status": encoder_status("Camera 3"),
    }


class FakeUnit:
    """Serves canned unit API responses through ``httpx.MockTransport``.

    Route values: a dict is returned as JSON, bytes/str as a raw 200 body,
    an int as an empty response with that status, an exception is raised.
    """

    def __init__(self, routes: dict):
        self.routes = routes
        self.requests = []

    @property
    def paths(self):
        return [r.url.path[len(UNIT_PREFIX):] for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if not path.startswith(UNIT_PREFIX):
            return httpx.Response(404)

        route = self.routes.get(path[len(UNIT_PREFIX):])
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            return httpx.Response(route)
        if isinstance(route, (bytes, str)):
            return httpx.Response(200, content=route)
        return httpx.Response(200, content=json.dumps(route).encode())

    def client(self, **kwargs) -> DirektClient:
        kwargs.setdefault("username", "")
        kwargs.setdefault("password", "")
        return DirektClient(
            base_url="https://unit.test/",
            transport=httpx.MockTransport(self.handler),
            **kwargs,
        )


@pytest.fixture
def unit():
    return FakeUnit(healthy_routes())


@pytest.fixture
def probe():
    return ProbeContext.start(SERIAL)


@pytest.fixture
def registry():
    return ProbeRegistry({"serial": SERIAL})


def value(registry, name, **labels):
    """Read one sample from a probe registry, serial label included."""
    return registry.get_sample_value(name, {"serial": SERIAL, **labels})


def metric_names(registry):
    return {metric.name for metric in registry.collect() if metric.samples}
