"""Display providers for rendering runtime orientation state."""

from __future__ import annotations

import json
import logging
import math
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

import numpy as np

from ..math3d.quaternion import rotmat4_from_colmajor
from .sample_source import SampleSource

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DisplayFrame:
    """Runtime frame data shared by all display providers."""

    # Sensor-native quaternion [x, y, z, w] as stored in the orientation state.
    quaternion_native: np.ndarray
    # Quaternion after the display frame mapping.
    quaternion: np.ndarray
    # Column-major 4x4 rotation built from `quaternion`.
    matrix: np.ndarray
    # (yaw, pitch, roll) in degrees, read back from `matrix`.
    euler_deg: tuple[float, float, float]
    display_frame_provider: str
    sample_kind: Optional[str]
    samples: int
    tracked: bool


class DisplayProvider:
    """Base display provider interface."""

    def update(self, frame: DisplayFrame) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


def _fmt_row(values) -> str:
    return "[" + ", ".join(f"{float(v): .4f}" for v in values) + "]"


def _status_lines(frame: DisplayFrame) -> list[str]:
    qn = frame.quaternion_native
    q = frame.quaternion
    m = rotmat4_from_colmajor(frame.matrix)
    yaw, pitch, roll = frame.euler_deg
    return [
        f"q native [x,y,z,w] = {_fmt_row(qn)}  |q|={float(np.linalg.norm(qn)):.6f}",
        f"q display          = {_fmt_row(q)}  ({frame.display_frame_provider})",
        f"yaw/pitch/roll     = ({yaw:7.2f}, {pitch:7.2f}, {roll:7.2f}) deg",
        f"matrix row 0       = {_fmt_row(m[0])}",
        f"matrix row 1       = {_fmt_row(m[1])}",
        f"matrix row 2       = {_fmt_row(m[2])}",
        f"matrix row 3       = {_fmt_row(m[3])}",
        f"samples            = {frame.samples}  last={frame.sample_kind}  tracked={frame.tracked}",
    ]


class _CliStatsSink:
    def __init__(self, mode: str):
        self.mode = "live" if mode == "live" else "scroll"
        self._is_tty = bool(getattr(sys.stderr, "isatty", lambda: False)())
        self._live_enabled = self.mode == "live" and self._is_tty
        self._line_count = 0

    def emit(self, lines: list[str], scroll_line: str) -> None:
        if not self._live_enabled:
            logger.info(scroll_line)
            return

        out = sys.stderr
        if self._line_count > 0:
            out.write(f"\x1b[{self._line_count}F")

        max_lines = max(self._line_count, len(lines))
        for i in range(max_lines):
            line = lines[i] if i < len(lines) else ""
            out.write("\x1b[2K")
            out.write(line)
            out.write("\n")
        out.flush()
        self._line_count = len(lines)


class TuiDisplayProvider(DisplayProvider):
    """Terminal + source UI text display provider."""

    def __init__(self, sample_source: SampleSource, cli_output: str = "live"):
        self.sample_source = sample_source
        self.cli_sink = _CliStatsSink(cli_output)

    def update(self, frame: DisplayFrame) -> None:
        lines = _status_lines(frame)
        self.sample_source.set_status("\n".join(lines))

        q = frame.quaternion
        yaw, pitch, roll = frame.euler_deg
        self.cli_sink.emit(
            lines=["hmd_orientation live state"] + lines,
            scroll_line=(
                "[ORIENT] q=(%.4f, %.4f, %.4f, %.4f) ypr=(%.2f, %.2f, %.2f) deg samples=%d"
                % (q[0], q[1], q[2], q[3], yaw, pitch, roll, frame.samples)
            ),
        )


def _json_floats(values) -> list[Optional[float]]:
    return [float(v) if math.isfinite(v) else None for v in values]


class JsonLinesDisplayProvider(DisplayProvider):
    """Writes one JSON object per frame: {"quaternion": [...], "matrix": [...]}.

    Matrix entries are the 16 column-major values. Output is strict JSON:
    non-finite entries (NaN/inf state) are written as null.
    """

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out if out is not None else sys.stdout

    def update(self, frame: DisplayFrame) -> None:
        record = {
            "quaternion": _json_floats(frame.quaternion),
            "matrix": _json_floats(frame.matrix),
            "tracked": bool(frame.tracked),
        }
        self.out.write(json.dumps(record, allow_nan=False) + "\n")
        self.out.flush()


class Matplotlib3DDisplayProvider(DisplayProvider):
    """Animated body axes of the current rotation using matplotlib."""

    def __init__(self, title: str = "hmd_orientation 3D"):
        try:
            import matplotlib.pyplot as plt
        except ImportError as exc:  # pragma: no cover - optional dependency path
            raise RuntimeError(
                "display-provider=3d requires matplotlib. Install with: pip install matplotlib"
            ) from exc

        self.plt = plt
        self.plt.ion()
        self.fig = self.plt.figure(title)
        self.ax = self.fig.add_subplot(111, projection="3d")
        self.ax.set_xlabel("x")
        self.ax.set_ylabel("y")
        self.ax.set_zlabel("z")
        self.ax.set_xlim(-1.0, 1.0)
        self.ax.set_ylim(-1.0, 1.0)
        self.ax.set_zlim(-1.0, 1.0)

        (self.x_line,) = self.ax.plot([0.0, 1.0], [0.0, 0.0], [0.0, 0.0], c="tab:red", lw=2.0, label="body x")
        (self.y_line,) = self.ax.plot([0.0, 0.0], [0.0, 1.0], [0.0, 0.0], c="tab:green", lw=2.0, label="body y")
        (self.z_line,) = self.ax.plot([0.0, 0.0], [0.0, 0.0], [0.0, 1.0], c="tab:blue", lw=2.0, label="body z")
        self.ax.legend(loc="upper left")
        self._enabled = True

    def update(self, frame: DisplayFrame) -> None:
        if not self._enabled:
            return
        if not self.plt.fignum_exists(self.fig.number):
            self._enabled = False
            return

        m = rotmat4_from_colmajor(frame.matrix)
        if not np.isfinite(m).all():
            return
        # Columns of the rotation are the body axes expressed in world frame.
        for line, col in ((self.x_line, 0), (self.y_line, 1), (self.z_line, 2)):
            axis = m[:3, col]
            line.set_data_3d([0.0, float(axis[0])], [0.0, float(axis[1])], [0.0, float(axis[2])])

        yaw, pitch, roll = frame.euler_deg
        self.ax.set_title(f"ypr=({yaw:.1f}, {pitch:.1f}, {roll:.1f}) deg  samples={frame.samples}")
        self.fig.canvas.draw_idle()
        self.plt.pause(0.001)

    def close(self) -> None:
        if not getattr(self, "_enabled", False):
            return
        self._enabled = False
        self.plt.close(self.fig)

