"""JSON payload parsing shared by the network and replay sources.

Accepted objects (one per packet / line):

  {"alpha": 30.0, "beta": 0.0, "gamma": -5.0}     Euler yaw/pitch/roll
  {"quaternion": [x, y, z, w]}                     raw quaternion
  {"reset": true}                                  back to identity (recenter)

Optional keys: "tracked" (bool, default true) and "units" ("deg"|"rad") to
override the source's default Euler units. Null Euler fields count as 0,
like browser deviceorientation readings.
"""

from __future__ import annotations

import json
from typing import Optional

import numpy as np

from ..control.sample import OrientationSample, euler_sample, quaternion_sample, reset_sample
from ..math3d.coords import device_orientation_to_radians


def parse_sample_payload(payload: dict, units: str = "deg") -> Optional[OrientationSample]:
    tracked = bool(payload.get("tracked", True))

    if payload.get("reset") is True:
        return reset_sample()

    quaternion = payload.get("quaternion_xyzw", payload.get("quaternion"))
    if quaternion is not None:
        try:
            q = np.asarray(quaternion, dtype=np.float64)
        except (TypeError, ValueError):
            return None
        if q.ndim != 1 or q.size != 4 or not np.isfinite(q).all():
            return None
        return quaternion_sample(q[0], q[1], q[2], q[3], tracked=tracked)

    if not any(k in payload for k in ("alpha", "beta", "gamma")):
        return None
    units = str(payload.get("units", units))
    try:
        yaw, pitch, roll = device_orientation_to_radians(
            payload.get("alpha"), payload.get("beta"), payload.get("gamma"), units=units
        )
    except (TypeError, ValueError):
        return None
    if not np.isfinite([yaw, pitch, roll]).all():
        return None
    return euler_sample(yaw, pitch, roll, tracked=tracked)


def parse_sample_packet(data: bytes | str, units: str = "deg") -> Optional[OrientationSample]:
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        payload = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    return parse_sample_payload(payload, units=units)
