"""Replay orientation samples from a JSON-lines file."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from ..control.sample import OrientationSample
from ..control.sample_source import SampleSource
from .payload import parse_sample_packet

logger = logging.getLogger(__name__)


def load_samples(path: str, units: str = "deg") -> list[OrientationSample]:
    """Parse every non-empty, non-comment line. Malformed lines are skipped."""
    p = Path(path)
    if not p.is_file():
        raise ValueError(f"replay file not found: {p}")

    samples: list[OrientationSample] = []
    skipped = 0
    with p.open("r", encoding="utf-8") as fh:
        for raw_line in fh:
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            sample = parse_sample_packet(line, units=units)
            if sample is None:
                skipped += 1
                continue
            samples.append(sample)
    if skipped:
        logger.warning("[SOURCE] skipped %d malformed line(s) in %s", skipped, p)
    logger.info("[SOURCE] loaded %d sample(s) from %s", len(samples), p)
    return samples


class ReplaySampleSource(SampleSource):
    """Feeds recorded samples one per tick at a fixed rate."""

    default_display_frame_provider_name = "identity"

    def __init__(
        self,
        path: str,
        replay_hz: float = 60.0,
        loop: bool = False,
        angle_units: str = "deg",
    ):
        self.path = str(path)
        self.samples = load_samples(self.path, units=angle_units)
        if not self.samples:
            raise ValueError(f"replay file has no valid samples: {self.path}")
        self.interval_s = (1.0 / replay_hz) if replay_hz > 0.0 else 0.0
        self.loop = bool(loop)
        self._index = 0
        self._closed = False

    def finished(self) -> bool:
        return not self.loop and self._index >= len(self.samples)

    def poll(self) -> Optional[OrientationSample]:
        if self._index >= len(self.samples):
            if not self.loop:
                return None
            self._index = 0
        sample = self.samples[self._index]
        self._index += 1
        return sample

    def run(self, on_tick):
        while not self._closed:
            on_tick()
            if self.finished():
                break
            if self.interval_s > 0.0:
                time.sleep(self.interval_s)
        logger.info("[SOURCE] replay finished after %d sample(s)", self._index)
        self.close()

    def close(self) -> None:
        self._closed = True
