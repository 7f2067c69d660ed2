"""Tk sliders for yaw/pitch/roll input."""

from __future__ import annotations

import math
import tkinter as tk
from typing import Optional

from ..control.sample import OrientationSample, euler_sample
from ..control.sample_source import SampleSource


class TkSliderSampleSource(SampleSource):
    """Debug source: Euler angles in degrees, already in the display frame."""

    default_display_frame_provider_name = "identity"

    def __init__(self, title: str = "hmd_orientation - sliders"):
        try:
            self.root = tk.Tk()
        except tk.TclError as exc:
            raise RuntimeError(f"Tk display unavailable: {exc}") from exc
        self.root.title(title)

        self._var_yaw = tk.DoubleVar(value=0.0)
        self._var_pitch = tk.DoubleVar(value=0.0)
        self._var_roll = tk.DoubleVar(value=0.0)

        self._build_ui()

        self._on_tick = None
        self._closed = False
        self.root.protocol("WM_DELETE_WINDOW", self._handle_close)

    def _build_ui(self) -> None:
        def add_slider(label: str, var: tk.DoubleVar, lo: int, hi: int) -> None:
            tk.Label(self.root, text=label).pack(anchor="w", padx=10, pady=2)
            tk.Scale(
                self.root,
                from_=lo,
                to=hi,
                orient="horizontal",
                resolution=1,
                length=520,
                variable=var,
            ).pack(padx=10, pady=2)

        add_slider("Yaw about z (deg)   [-180..180]", self._var_yaw, -180, 180)
        add_slider("Pitch about y (deg) [-90..90]", self._var_pitch, -90, 90)
        add_slider("Roll about x (deg)  [-180..180]", self._var_roll, -180, 180)

        self._stats = tk.Label(self.root, text="", justify="left", font=("Consolas", 10))
        self._stats.pack(padx=10, pady=8)

    def _handle_close(self) -> None:
        self._closed = True
        self.root.destroy()

    def poll(self) -> Optional[OrientationSample]:
        if self._closed:
            return None
        return euler_sample(
            math.radians(float(self._var_yaw.get())),
            math.radians(float(self._var_pitch.get())),
            math.radians(float(self._var_roll.get())),
        )

    def set_status(self, text: str) -> None:
        if not self._closed:
            self._stats.config(text=text)

    def run(self, on_tick):
        self._on_tick = on_tick
        self.root.after(33, self._tick)
        self.root.mainloop()

    def _tick(self) -> None:
        if self._closed:
            return
        if self._on_tick is not None:
            self._on_tick()
        self.root.after(33, self._tick)

    def close(self) -> None:
        if not self._closed:
            self._handle_close()
