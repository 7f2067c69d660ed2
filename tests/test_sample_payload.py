import json
import math
import socket
import time

import numpy as np

from hmd_orientation.control.sample import EULER, QUATERNION, RESET
from hmd_orientation.sample_sources.payload import parse_sample_packet, parse_sample_payload
from hmd_orientation.sample_sources.udp_bridge import UdpBridgeSampleSource


def test_parse_sample_payload_accepts_euler_degrees():
    parsed = parse_sample_payload({"alpha": 90.0, "beta": 0.0, "gamma": -45.0})
    assert parsed is not None
    assert parsed.kind == EULER
    np.testing.assert_allclose(parsed.values, [math.pi / 2.0, 0.0, -math.pi / 4.0])
    assert parsed.tracked is True


def test_parse_sample_payload_null_angles_count_as_zero():
    parsed = parse_sample_payload({"alpha": None, "beta": 10.0, "gamma": None})
    assert parsed is not None
    np.testing.assert_allclose(parsed.values, [0.0, math.radians(10.0), 0.0])


def test_parse_sample_payload_units_override():
    parsed = parse_sample_payload({"alpha": 1.0, "beta": 0.5, "gamma": 0.0, "units": "rad"})
    assert parsed is not None
    np.testing.assert_allclose(parsed.values, [1.0, 0.5, 0.0])
    assert parse_sample_payload({"alpha": 1.0, "units": "bad"}) is None


def test_parse_sample_payload_keeps_raw_quaternion():
    parsed = parse_sample_payload({"quaternion": [2.0, 0.0, 0.0, 0.0], "tracked": False})
    assert parsed is not None
    assert parsed.kind == QUATERNION
    np.testing.assert_array_equal(parsed.values, [2.0, 0.0, 0.0, 0.0])
    assert parsed.tracked is False


def test_parse_sample_payload_rejects_bad_shapes():
    assert parse_sample_payload({"quaternion": [0.0, 0.0, 1.0]}) is None
    assert parse_sample_payload({"quaternion": "abc"}) is None
    assert parse_sample_payload({"quaternion": [[0.0, 0.0], [0.0, 1.0]]}) is None
    assert parse_sample_payload({"quaternion": [0.0, 0.0, float("nan"), 1.0]}) is None
    assert parse_sample_payload({"tracked": True}) is None


def test_parse_sample_packet_rejects_invalid_json():
    assert parse_sample_packet(b"{not-json") is None
    assert parse_sample_packet(b"[1, 2, 3]") is None
    assert parse_sample_packet(b"\xff\xfe") is None


def test_udp_bridge_keeps_newest_valid_packet():
    source = UdpBridgeSampleSource(host="127.0.0.1", port=0, poll_ms=1)
    sender = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        addr = source.address
        sender.sendto(json.dumps({"quaternion": [0.0, 0.0, 0.0, 1.0]}).encode("utf-8"), addr)
        sender.sendto(b"garbage", addr)
        sender.sendto(json.dumps({"quaternion": [0.6, 0.0, 0.0, 0.8]}).encode("utf-8"), addr)

        sample = None
        deadline = time.time() + 2.0
        while time.time() < deadline:
            got = source.poll()
            if got is not None:
                sample = got
            if source.recv_count and source.dropped_count and sample is not None:
                if sample.values[0] == 0.6:
                    break
            time.sleep(0.01)

        assert sample is not None
        np.testing.assert_array_equal(sample.values, [0.6, 0.0, 0.0, 0.8])
        assert source.dropped_count == 1
        assert source.poll() is None
    finally:
        sender.close()
        source.close()


def test_parse_sample_payload_reset_command():
    parsed = parse_sample_payload({"reset": True})
    assert parsed is not None
    assert parsed.kind == RESET
    assert parse_sample_payload({"reset": False}) is None
