"""Orientation sample source implementations."""

from .replay import ReplaySampleSource
from .udp_bridge import UdpBridgeSampleSource

__all__ = [
    "ReplaySampleSource",
    "UdpBridgeSampleSource",
]
