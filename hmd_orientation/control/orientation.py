"""Orientation state: one quaternion, two input forms, two output forms."""

from __future__ import annotations

import numpy as np

from ..math3d.quaternion import (
    q_from_euler_zyx,
    q_identity,
    q_normalize,
    q_to_rotmat4_colmajor,
)


class OrientationState:
    """Mutable orientation of one tracked object.

    Stores a quaternion [x, y, z, w], identity at construction. Every setter
    overwrites it (last write wins); accessors return fresh fixed-length
    arrays and never cache.

    Not thread-safe: callers sharing an instance must serialize access.
    """

    __slots__ = ("_q",)

    def __init__(self):
        self._q = q_identity()

    def set_from_euler(self, alpha: float, beta: float, gamma: float) -> None:
        """Set from yaw (alpha, about Z), pitch (beta, about Y), roll (gamma, about X).

        Angles are radians in the intrinsic ZYX convention. The result is
        unit length by construction; non-finite angles are stored as-is.
        """
        self._q = q_from_euler_zyx(float(alpha), float(beta), float(gamma))

    def set_from_quaternion(self, qx: float, qy: float, qz: float, qw: float) -> None:
        """Store components verbatim. No normalization, no validation."""
        self._q = np.array([qx, qy, qz, qw], dtype=np.float64)

    def set_from_unit_quaternion(
        self, qx: float, qy: float, qz: float, qw: float
    ) -> None:
        """Store the normalized quaternion. A zero quaternion becomes identity."""
        self._q = q_normalize(np.array([qx, qy, qz, qw], dtype=np.float64))

    def reset(self) -> None:
        self._q = q_identity()

    def get_quaternion(self) -> np.ndarray:
        return self._q.copy()

    def get_rotation_matrix(self) -> np.ndarray:
        """16 floats, column-major 4x4, last row/column (0, 0, 0, 1)."""
        return q_to_rotmat4_colmajor(self._q)

    def __repr__(self) -> str:
        x, y, z, w = self._q
        return f"OrientationState(x={x:.6g}, y={y:.6g}, z={z:.6g}, w={w:.6g})"
