"""CLI config and defaults."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml


@dataclass(frozen=True)
class AppConfig:
    sample_source: str = "udp"
    bridge_host: str = "127.0.0.1"
    bridge_port: int = 24568
    poll_ms: int = 8
    replay_path: str = ""
    replay_hz: float = 60.0
    replay_loop: bool = False
    angle_units: str = "deg"
    quaternion_input: str = "raw"
    display_frame_provider: str = "auto"
    display_provider: str = "tui"
    display_hz: float = 10.0
    cli_output: str = "live"
    log_level: str = "info"


_APP_CONFIG_FIELDS = {f.name for f in fields(AppConfig)}
_BOOL_FIELDS = {"replay_loop"}
_INT_FIELDS = {"bridge_port", "poll_ms"}
_FLOAT_FIELDS = {"replay_hz", "display_hz"}
_STRING_FIELDS = {
    "sample_source",
    "bridge_host",
    "replay_path",
    "angle_units",
    "quaternion_input",
    "display_frame_provider",
    "display_provider",
    "cli_output",
    "log_level",
}

SAMPLE_SOURCES = ("udp", "replay", "sliders")
ANGLE_UNITS = ("deg", "rad")
QUATERNION_INPUTS = ("raw", "unit")
DISPLAY_FRAME_PROVIDERS = ("auto", "identity", "swap-xy")
DISPLAY_PROVIDERS = ("tui", "jsonl", "3d")
CLI_OUTPUTS = ("live", "scroll")
LOG_LEVELS = ("debug", "info", "warning", "error")


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in {"1", "true", "yes", "on"}:
            return True
        if s in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"config key '{key}' expects a bool, got {value!r}")


def _coerce_config_value(key: str, value: Any) -> Any:
    try:
        if key in _BOOL_FIELDS:
            return _parse_bool(value, key)
        if key in _INT_FIELDS:
            return int(value)
        if key in _FLOAT_FIELDS:
            return float(value)
        if key in _STRING_FIELDS:
            return "" if value is None else str(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid value for config key '{key}': {value!r}") from exc
    raise ValueError(f"unsupported config key '{key}'")


def _normalize_config_key(raw_key: Any) -> str:
    if not isinstance(raw_key, str):
        raise ValueError(f"config key must be string, got {type(raw_key).__name__}")
    key = raw_key.strip().replace("-", "_")
    if not key:
        raise ValueError("config key cannot be empty")
    return key


def _load_yaml_config(path: str) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise ValueError(f"--config file not found: {p}")
    if not p.is_file():
        raise ValueError(f"--config must point to a file: {p}")

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"failed to read --config file {p}: {exc}") from exc
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse YAML config {p}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"--config root must be a mapping/object, got {type(loaded).__name__}")

    normalized: dict[str, Any] = {}
    for raw_key, raw_value in loaded.items():
        key = _normalize_config_key(raw_key)
        if key not in _APP_CONFIG_FIELDS:
            raise ValueError(f"unknown config key in {p}: {raw_key!r}")
        normalized[key] = _coerce_config_value(key, raw_value)
    return normalized


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="hmd-orientation",
        description="Track a device orientation and expose it as quaternion + rotation matrix.",
    )
    ap.add_argument(
        "--config",
        type=str,
        default="",
        help="YAML config file path. CLI args override YAML values.",
    )
    ap.add_argument(
        "--sample-source",
        choices=list(SAMPLE_SOURCES),
        default="udp",
        help="Orientation input: UDP JSON bridge, JSON-lines replay file, or Tk sliders.",
    )
    ap.add_argument(
        "--bridge-host",
        type=str,
        default="127.0.0.1",
        help="Host to bind for the UDP sample stream.",
    )
    ap.add_argument(
        "--bridge-port",
        type=int,
        default=24568,
        help="Port to bind for the UDP sample stream.",
    )
    ap.add_argument(
        "--poll-ms",
        type=int,
        default=8,
        help="UDP polling sleep in milliseconds.",
    )
    ap.add_argument(
        "--replay-path",
        type=str,
        default="",
        help="JSON-lines file for --sample-source replay.",
    )
    ap.add_argument(
        "--replay-hz",
        type=float,
        default=60.0,
        help="Replay rate in samples per second (0 = as fast as possible).",
    )
    ap.add_argument("--replay-loop", action="store_true", help="Loop the replay file.")
    ap.add_argument(
        "--angle-units",
        choices=list(ANGLE_UNITS),
        default="deg",
        help="Units of incoming Euler angles (alpha/beta/gamma).",
    )
    ap.add_argument(
        "--quaternion-input",
        choices=list(QUATERNION_INPUTS),
        default="raw",
        help="Store incoming quaternions verbatim (raw) or normalized (unit).",
    )
    ap.add_argument(
        "--display-frame-provider",
        choices=list(DISPLAY_FRAME_PROVIDERS),
        default="auto",
        help="Sensor->display frame mapping policy.",
    )
    ap.add_argument(
        "--display-provider",
        choices=list(DISPLAY_PROVIDERS),
        default="tui",
        help="Display provider: terminal TUI, JSON lines on stdout, or matplotlib 3D axes.",
    )
    ap.add_argument(
        "--display-hz",
        type=float,
        default=10.0,
        help="Display refresh rate in Hz (0 disables display updates).",
    )
    ap.add_argument(
        "--cli-output",
        choices=list(CLI_OUTPUTS),
        default="live",
        help="TUI output mode: in-place live panel or scrolling logs.",
    )
    ap.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="info",
        help="Global log level.",
    )
    return ap


def validate_config(cfg: AppConfig) -> None:
    if cfg.sample_source not in SAMPLE_SOURCES:
        raise ValueError(
            f"--sample-source must be one of udp|replay|sliders, got {cfg.sample_source}"
        )
    if not cfg.bridge_host.strip():
        raise ValueError("--bridge-host must be non-empty")
    if not (0 <= cfg.bridge_port <= 65535):
        raise ValueError(f"--bridge-port must be in [0,65535], got {cfg.bridge_port}")
    if cfg.poll_ms <= 0:
        raise ValueError(f"--poll-ms must be > 0, got {cfg.poll_ms}")
    if cfg.sample_source == "replay" and not cfg.replay_path.strip():
        raise ValueError("--replay-path must be provided for --sample-source replay")
    if not math.isfinite(cfg.replay_hz) or cfg.replay_hz < 0.0:
        raise ValueError(f"--replay-hz must be >= 0, got {cfg.replay_hz}")
    if cfg.angle_units not in ANGLE_UNITS:
        raise ValueError(f"--angle-units must be deg|rad, got {cfg.angle_units}")
    if cfg.quaternion_input not in QUATERNION_INPUTS:
        raise ValueError(f"--quaternion-input must be raw|unit, got {cfg.quaternion_input}")
    if cfg.display_frame_provider not in DISPLAY_FRAME_PROVIDERS:
        raise ValueError(
            "--display-frame-provider must be one of auto|identity|swap-xy, "
            f"got {cfg.display_frame_provider}"
        )
    if cfg.display_provider not in DISPLAY_PROVIDERS:
        raise ValueError(
            f"--display-provider must be one of tui|jsonl|3d, got {cfg.display_provider}"
        )
    if not math.isfinite(cfg.display_hz) or cfg.display_hz < 0.0:
        raise ValueError(f"--display-hz must be >= 0, got {cfg.display_hz}")
    if cfg.cli_output not in CLI_OUTPUTS:
        raise ValueError(f"--cli-output must be live|scroll, got {cfg.cli_output}")
    if cfg.log_level not in LOG_LEVELS:
        raise ValueError(
            f"--log-level must be one of debug|info|warning|error, got {cfg.log_level}"
        )


def parse_args(argv=None) -> AppConfig:
    bootstrap = argparse.ArgumentParser(add_help=False)
    bootstrap.add_argument("--config", type=str, default="")
    bootstrap_ns, _ = bootstrap.parse_known_args(argv)

    yaml_cfg: dict[str, Any] = {}
    yaml_error: Optional[str] = None
    if bootstrap_ns.config:
        try:
            yaml_cfg = _load_yaml_config(bootstrap_ns.config)
        except ValueError as exc:
            yaml_error = str(exc)

    ap = build_arg_parser()
    if yaml_error is not None:
        ap.error(yaml_error)
    if yaml_cfg:
        ap.set_defaults(**yaml_cfg)
    args = ap.parse_args(argv)

    cfg = AppConfig(
        sample_source=args.sample_source,
        bridge_host=args.bridge_host,
        bridge_port=args.bridge_port,
        poll_ms=args.poll_ms,
        replay_path=args.replay_path,
        replay_hz=float(args.replay_hz),
        replay_loop=bool(args.replay_loop),
        angle_units=args.angle_units,
        quaternion_input=args.quaternion_input,
        display_frame_provider=args.display_frame_provider,
        display_provider=args.display_provider,
        display_hz=float(args.display_hz),
        cli_output=args.cli_output,
        log_level=args.log_level,
    )
    try:
        validate_config(cfg)
    except ValueError as exc:
        ap.error(str(exc))
    return cfg
