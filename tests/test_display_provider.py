import io
import json
import logging

import numpy as np

from hmd_orientation.control.display_provider import (
    DisplayFrame,
    JsonLinesDisplayProvider,
    TuiDisplayProvider,
)
from hmd_orientation.control.sample_source import SampleSource


class _StatusSource(SampleSource):
    def __init__(self):
        self.status = ""

    def set_status(self, text):
        self.status = text


def _identity_frame() -> DisplayFrame:
    q = np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)
    return DisplayFrame(
        quaternion_native=q.copy(),
        quaternion=q.copy(),
        matrix=np.eye(4, dtype=np.float64).reshape(16),
        euler_deg=(0.0, 0.0, 0.0),
        display_frame_provider="identity",
        sample_kind="quaternion",
        samples=3,
        tracked=True,
    )


def test_jsonl_display_writes_one_object_per_frame():
    out = io.StringIO()
    provider = JsonLinesDisplayProvider(out=out)
    provider.update(_identity_frame())
    provider.update(_identity_frame())

    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    record = json.loads(lines[0])
    assert record["quaternion"] == [0.0, 0.0, 0.0, 1.0]
    assert record["matrix"] == np.eye(4).reshape(16).tolist()
    assert record["tracked"] is True


def test_tui_display_scroll_mode_logs_and_sets_status(caplog):
    source = _StatusSource()
    provider = TuiDisplayProvider(sample_source=source, cli_output="scroll")
    with caplog.at_level(logging.INFO, logger="hmd_orientation.control.display_provider"):
        provider.update(_identity_frame())

    assert "q native [x,y,z,w]" in source.status
    assert "matrix row 3" in source.status
    assert any("[ORIENT]" in r.getMessage() for r in caplog.records)


def test_jsonl_display_writes_null_for_non_finite_state():
    frame = _identity_frame()
    frame.quaternion = np.array([np.nan, 0.0, 0.0, np.inf], dtype=np.float64)
    frame.matrix = np.full(16, np.nan, dtype=np.float64)
    out = io.StringIO()
    JsonLinesDisplayProvider(out=out).update(frame)

    text = out.getvalue()
    assert "NaN" not in text and "Infinity" not in text
    record = json.loads(text)
    assert record["quaternion"] == [None, 0.0, 0.0, None]
    assert record["matrix"] == [None] * 16
