"""Display frame providers.

This module is the single place that maps a sensor-native orientation to the
frame the renderer expects. Keeping this mapping isolated avoids accidental
sign/axis mismatches when new sample sources are added.

Mappings act on the quaternion [x, y, z, w] before it reaches a display; the
orientation state itself always holds the sensor-native value.
"""

from __future__ import annotations

import numpy as np


class DisplayFrameProvider:
    """Maps sensor-native quaternions into the display frame."""

    name: str = "identity"

    def to_display(self, q_native: np.ndarray) -> np.ndarray:
        return np.asarray(q_native, dtype=np.float64).reshape(4).copy()


class IdentityDisplayFrameProvider(DisplayFrameProvider):
    """Sensor frame already matches the display frame."""

    name = "identity"


class SwapXYDisplayFrameProvider(DisplayFrameProvider):
    """Handheld device frame -> viewer frame: x' = -y, y' = x.

    A quarter turn of the rotation axis about z; z and w are kept.
    """

    name = "swap-xy"

    def to_display(self, q_native: np.ndarray) -> np.ndarray:
        q = np.asarray(q_native, dtype=np.float64).reshape(4)
        return np.array([-q[1], q[0], q[2], q[3]], dtype=np.float64)


def build_display_frame_provider(name: str) -> DisplayFrameProvider:
    if name == "identity":
        return IdentityDisplayFrameProvider()
    if name == "swap-xy":
        return SwapXYDisplayFrameProvider()
    raise RuntimeError(f"Unsupported display frame provider: {name}")
