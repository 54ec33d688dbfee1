"""Prometheus probe exporter for Intinor Direkt units."""

__version__ = "0.1.0"
