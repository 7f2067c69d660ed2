"""Angle helpers for device orientation readings."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np


def to_radians(value: Optional[float], units: str = "deg") -> float:
    """Convert one angle to radians. Missing readings (None) count as 0."""
    if value is None:
        return 0.0
    v = float(value)
    if units == "rad":
        return v
    if units == "deg":
        return math.radians(v)
    raise ValueError(f"unsupported angle units: {units!r}")


def device_orientation_to_radians(
    alpha: Optional[float],
    beta: Optional[float],
    gamma: Optional[float],
    units: str = "deg",
) -> tuple[float, float, float]:
    """
    Browser-style deviceorientation readings -> (yaw, pitch, roll) radians.

    alpha/beta/gamma arrive in degrees and may be null before the sensor
    settles; null readings are treated as 0.
    """
    return (
        to_radians(alpha, units),
        to_radians(beta, units),
        to_radians(gamma, units),
    )


def rotmat4_to_euler_zyx(m: np.ndarray) -> tuple[float, float, float]:
    """
    Recover (yaw, pitch, roll) radians from a row-indexed 4x4 rotation.

    Inverse of the intrinsic ZYX composition used by q_from_euler_zyx.
    At pitch = +-90 deg (gimbal lock) roll is reported as 0.
    """
    m = np.asarray(m, dtype=np.float64)
    if not np.isfinite(m[:3, :3]).all():
        return math.nan, math.nan, math.nan
    s = -float(m[2, 0])
    s = max(-1.0, min(1.0, s))
    pitch = math.asin(s)
    if abs(s) > 1.0 - 1e-9:
        yaw = math.atan2(-float(m[0, 1]), float(m[1, 1]))
        roll = 0.0
    else:
        yaw = math.atan2(float(m[1, 0]), float(m[0, 0]))
        roll = math.atan2(float(m[2, 1]), float(m[2, 2]))
    return yaw, pitch, roll
