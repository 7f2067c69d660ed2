"""Orientation samples from an external bridge over UDP JSON.

The bridge (e.g. a phone page forwarding deviceorientation events, or a
headset SDK process) owns device access; this source only consumes packets.
"""

from __future__ import annotations

import logging
import socket
import time
from typing import Optional

from ..control.sample import OrientationSample
from ..control.sample_source import SampleSource
from .payload import parse_sample_packet

logger = logging.getLogger(__name__)


class _UdpSampleReceiver:
    def __init__(self, host: str, port: int):
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind((host, int(port)))
        self.sock.setblocking(False)

    @property
    def address(self) -> tuple[str, int]:
        return self.sock.getsockname()

    def recv_latest(self, units: str) -> tuple[Optional[OrientationSample], int]:
        """Drain the socket. Returns (newest valid sample, dropped packet count)."""
        latest = None
        dropped = 0
        while True:
            try:
                data, _ = self.sock.recvfrom(65535)
            except BlockingIOError:
                break
            except OSError:
                break
            parsed = parse_sample_packet(data, units=units)
            if parsed is None:
                dropped += 1
            else:
                latest = parsed
        return latest, dropped

    def close(self) -> None:
        self.sock.close()


class UdpBridgeSampleSource(SampleSource):
    """Sample source fed by JSON packets over UDP.

    Expected JSON packet schema (see payload.py):
    {"alpha": deg, "beta": deg, "gamma": deg}  or  {"quaternion": [x, y, z, w]}
    """

    # Handheld device axes differ from the viewer's by a quarter turn about z.
    default_display_frame_provider_name = "swap-xy"

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 24568,
        poll_ms: int = 8,
        angle_units: str = "deg",
    ):
        self.host = str(host)
        self.port = int(port)
        self.poll_s = max(0.001, float(poll_ms) / 1000.0)
        self.angle_units = angle_units

        self._receiver = _UdpSampleReceiver(self.host, self.port)

        self._closed = False
        self._status_text = ""
        self._last_warn_t = 0.0
        self._last_recv_t = 0.0
        self.recv_count = 0
        self.dropped_count = 0

        logger.info(
            "[SOURCE] provider=udp-bridge (host=%s, port=%s, poll_ms=%.1f, units=%s)",
            self.host,
            self._receiver.address[1],
            self.poll_s * 1000.0,
            self.angle_units,
        )

    @property
    def address(self) -> tuple[str, int]:
        return self._receiver.address

    def set_status(self, text: str) -> None:
        self._status_text = text

    def poll(self) -> Optional[OrientationSample]:
        sample, dropped = self._receiver.recv_latest(self.angle_units)
        if dropped:
            self.dropped_count += dropped
            logger.debug("[SOURCE] dropped %d malformed packet(s)", dropped)
        if sample is None:
            now = time.time()
            # Only log if we have not received any packet recently.
            if (now - self._last_recv_t) > 2.0 and (now - self._last_warn_t) > 2.0:
                logger.info("[SOURCE] waiting for bridge packets on %s:%s", self.host, self.port)
                self._last_warn_t = now
            return None

        self._last_recv_t = time.time()
        self.recv_count += 1
        if self.recv_count == 1:
            logger.info("[SOURCE] first bridge packet received on %s:%s", self.host, self.port)
        return sample

    def run(self, on_tick):
        while not self._closed:
            on_tick()
            time.sleep(self.poll_s)
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._receiver.close()
        except OSError:
            pass
