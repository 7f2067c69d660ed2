"""Quaternion utilities for right-handed coordinates.

Component order is [x, y, z, w] everywhere in this package, matching the
order the orientation state stores and returns.
"""

from __future__ import annotations

import numpy as np


def q_identity() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)


def q_norm(q: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(q, dtype=np.float64)))


def q_normalize(q: np.ndarray) -> np.ndarray:
    q = np.asarray(q, dtype=np.float64)
    n = q_norm(q)
    if n < 1e-12:
        return q_identity()
    return q / n


def q_conj(q: np.ndarray) -> np.ndarray:
    return np.array([-q[0], -q[1], -q[2], q[3]], dtype=np.float64)


def q_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array(
        [
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        ],
        dtype=np.float64,
    )


def q_rotate_vec(q: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Rotate vector v by unit quaternion q: v' = q*(v,0)*q^{-1}."""
    q = q_normalize(q)
    vq = np.array([float(v[0]), float(v[1]), float(v[2]), 0.0], dtype=np.float64)
    return q_mul(q_mul(q, vq), q_conj(q))[:3]


def q_from_euler_zyx(yaw: float, pitch: float, roll: float) -> np.ndarray:
    """
    Right-handed world frame, angles in radians:
      yaw around +z, pitch around +y, roll around +x
    Composition: q = q_yaw * q_pitch * q_roll (intrinsic ZYX)

    The closed form is unit length for any finite input, so no normalization
    is applied. NaN/inf inputs propagate into the result.
    """
    half = np.array([yaw, pitch, roll], dtype=np.float64) * 0.5
    with np.errstate(invalid="ignore"):
        cy, cp, cr = np.cos(half)
        sy, sp, sr = np.sin(half)
    return np.array(
        [
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
            cr * cp * cy + sr * sp * sy,
        ],
        dtype=np.float64,
    )


def q_to_rotmat4_colmajor(q: np.ndarray) -> np.ndarray:
    """Homogeneous 4x4 rotation matrix, flattened column-major (16 floats).

    The quaternion is used as given. A non-unit quaternion yields a scaled
    and skewed matrix rather than a pure rotation.
    """
    x, y, z, w = (float(c) for c in q)

    xx = x * x
    xy = x * y
    xz = x * z
    xw = x * w
    yy = y * y
    yz = y * z
    yw = y * w
    zz = z * z
    zw = z * w

    return np.array(
        [
            1.0 - 2.0 * (yy + zz),
            2.0 * (xy + zw),
            2.0 * (xz - yw),
            0.0,
            2.0 * (xy - zw),
            1.0 - 2.0 * (xx + zz),
            2.0 * (yz + xw),
            0.0,
            2.0 * (xz + yw),
            2.0 * (yz - xw),
            1.0 - 2.0 * (xx + yy),
            0.0,
            0.0,
            0.0,
            0.0,
            1.0,
        ],
        dtype=np.float64,
    )


def rotmat4_from_colmajor(flat: np.ndarray) -> np.ndarray:
    """Reshape a column-major flat matrix into a row-indexed 4x4 array (M[row, col])."""
    flat = np.asarray(flat, dtype=np.float64)
    if flat.size != 16:
        raise ValueError(f"Expected 16 matrix entries, got {flat.size}")
    return flat.reshape(4, 4).T.copy()
