"""Control plane for mapping orientation samples -> state -> display."""

from __future__ import annotations

import math
import time

from ..math3d.coords import rotmat4_to_euler_zyx
from ..math3d.quaternion import q_to_rotmat4_colmajor, rotmat4_from_colmajor
from .display_frame_provider import DisplayFrameProvider, IdentityDisplayFrameProvider
from .display_provider import DisplayFrame, DisplayProvider
from .orientation import OrientationState
from .sample import EULER, QUATERNION, RESET, OrientationSample
from .sample_source import SampleSource


def apply_sample(
    state: OrientationState, sample: OrientationSample, quaternion_input: str = "raw"
) -> bool:
    """Write one sample into the state. Returns False when the state was left unchanged."""
    if not sample.tracked:
        return False
    v = sample.values
    if sample.kind == EULER:
        state.set_from_euler(v[0], v[1], v[2])
        return True
    if sample.kind == QUATERNION:
        if quaternion_input == "unit":
            state.set_from_unit_quaternion(v[0], v[1], v[2], v[3])
        else:
            state.set_from_quaternion(v[0], v[1], v[2], v[3])
        return True
    if sample.kind == RESET:
        state.reset()
        return True
    raise ValueError(f"unsupported sample kind: {sample.kind!r}")


class OrientationController:
    def __init__(
        self,
        sample_source: SampleSource,
        display_provider: DisplayProvider,
        display_frame_provider: DisplayFrameProvider | None = None,
        state: OrientationState | None = None,
        quaternion_input: str = "raw",
        display_hz: float = 10.0,
    ):
        self.sample_source = sample_source
        self.display_provider = display_provider
        self.display_frame_provider = display_frame_provider or IdentityDisplayFrameProvider()
        self.state = state if state is not None else OrientationState()
        self.quaternion_input = quaternion_input

        self.samples = 0
        self.last_kind = None
        self.tracked = True
        self.display_interval = (1.0 / display_hz) if display_hz > 0.0 else 0.0
        self.display_enabled = display_hz > 0.0
        self.last_display_t = 0.0

    def build_frame(self) -> DisplayFrame:
        q_native = self.state.get_quaternion()
        q = self.display_frame_provider.to_display(q_native)
        matrix = q_to_rotmat4_colmajor(q)
        yaw, pitch, roll = rotmat4_to_euler_zyx(rotmat4_from_colmajor(matrix))
        return DisplayFrame(
            quaternion_native=q_native,
            quaternion=q,
            matrix=matrix,
            euler_deg=(math.degrees(yaw), math.degrees(pitch), math.degrees(roll)),
            display_frame_provider=self.display_frame_provider.name,
            sample_kind=self.last_kind,
            samples=self.samples,
            tracked=self.tracked,
        )

    def tick(self) -> None:
        sample = self.sample_source.poll()
        if sample is not None:
            self.tracked = bool(sample.tracked)
            if apply_sample(self.state, sample, self.quaternion_input):
                self.samples += 1
                self.last_kind = sample.kind

        if not self.display_enabled:
            return
        now = time.time()
        if (now - self.last_display_t) >= self.display_interval:
            self.display_provider.update(self.build_frame())
            self.last_display_t = now

    def flush(self) -> None:
        """Render the current state regardless of the display throttle."""
        if not self.display_enabled:
            return
        self.display_provider.update(self.build_frame())
        self.last_display_t = time.time()
