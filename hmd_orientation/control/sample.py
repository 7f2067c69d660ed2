"""Orientation sample data structures."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

EULER = "euler"
QUATERNION = "quaternion"
RESET = "reset"


@dataclass(slots=True)
class OrientationSample:
    """One orientation reading from a sample source.

    kind:
      "euler": values = [yaw, pitch, roll], radians (intrinsic ZYX).
      "quaternion": values = [x, y, z, w], as reported by the sensor.
      "reset": values empty; the state returns to identity.
    tracked:
      False when the sensor reports it has lost tracking; the state is
      then left unchanged.
    """

    kind: str
    values: np.ndarray
    tracked: bool = True


def euler_sample(yaw: float, pitch: float, roll: float, tracked: bool = True) -> OrientationSample:
    return OrientationSample(
        kind=EULER,
        values=np.array([yaw, pitch, roll], dtype=np.float64),
        tracked=tracked,
    )


def quaternion_sample(
    x: float, y: float, z: float, w: float, tracked: bool = True
) -> OrientationSample:
    return OrientationSample(
        kind=QUATERNION,
        values=np.array([x, y, z, w], dtype=np.float64),
        tracked=tracked,
    )


def reset_sample() -> OrientationSample:
    return OrientationSample(kind=RESET, values=np.zeros(0, dtype=np.float64))
