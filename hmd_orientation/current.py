"""
Head-mounted display orientation tracker:
- Sample source (UDP bridge / JSON-lines replay / Tk sliders) delivers Euler
  angles or raw quaternions
- OrientationState holds one quaternion [x, y, z, w]
- Display frame provider (sensor->display semantic mapping)
- Display provider (tui/jsonl/3d) renders quaternion + column-major matrix

Deps:
  pip install numpy pyyaml   (matplotlib for --display-provider 3d)
"""

from __future__ import annotations

import logging

from .config import parse_args
from .control.controller import OrientationController
from .control.display_frame_provider import build_display_frame_provider
from .control.display_provider import (
    JsonLinesDisplayProvider,
    Matplotlib3DDisplayProvider,
    TuiDisplayProvider,
)
from .control.orientation import OrientationState
from .sample_sources.replay import ReplaySampleSource
from .sample_sources.udp_bridge import UdpBridgeSampleSource

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_sample_source(cfg):
    if cfg.sample_source == "udp":
        return UdpBridgeSampleSource(
            host=cfg.bridge_host,
            port=cfg.bridge_port,
            poll_ms=cfg.poll_ms,
            angle_units=cfg.angle_units,
        )

    if cfg.sample_source == "replay":
        return ReplaySampleSource(
            cfg.replay_path,
            replay_hz=cfg.replay_hz,
            loop=cfg.replay_loop,
            angle_units=cfg.angle_units,
        )

    if cfg.sample_source == "sliders":
        try:
            from .sample_sources.tk_sliders import TkSliderSampleSource

            return TkSliderSampleSource(title="hmd_orientation - sliders")
        except (ImportError, RuntimeError):
            logger.exception("[SOURCE] failed to init Tk slider source")
            logger.warning("[SOURCE] fallback to UDP bridge")
            return UdpBridgeSampleSource(
                host=cfg.bridge_host,
                port=cfg.bridge_port,
                poll_ms=cfg.poll_ms,
                angle_units=cfg.angle_units,
            )

    raise RuntimeError(f"Unsupported sample source: {cfg.sample_source}")


def build_display_frame_provider_for(cfg, sample_source):
    choice = cfg.display_frame_provider
    if choice == "auto":
        choice = sample_source.default_display_frame_provider()
    provider = build_display_frame_provider(choice)

    logger.info(
        "[ORIENT] display frame provider=%s (requested=%s)",
        provider.name,
        cfg.display_frame_provider,
    )
    return provider


def build_display_provider(cfg, sample_source):
    if cfg.display_provider == "tui":
        return TuiDisplayProvider(sample_source=sample_source, cli_output=cfg.cli_output)

    if cfg.display_provider == "jsonl":
        return JsonLinesDisplayProvider()

    if cfg.display_provider == "3d":
        try:
            return Matplotlib3DDisplayProvider(title="hmd_orientation 3D")
        except RuntimeError:
            logger.exception("[DISPLAY] failed to initialize 3D display provider")
            logger.warning("[DISPLAY] fallback to tui provider")
            return TuiDisplayProvider(sample_source=sample_source, cli_output=cfg.cli_output)

    raise RuntimeError(f"Unsupported display provider: {cfg.display_provider}")


def main(argv=None):
    cfg = parse_args(argv)
    configure_logging(cfg.log_level)

    try:
        sample_source = build_sample_source(cfg)
    except (ValueError, OSError) as exc:
        raise SystemExit(f"failed to open sample source: {exc}") from exc

    display_frame_provider = build_display_frame_provider_for(cfg, sample_source)
    display_provider = build_display_provider(cfg, sample_source)
    controller = OrientationController(
        sample_source=sample_source,
        display_provider=display_provider,
        display_frame_provider=display_frame_provider,
        state=OrientationState(),
        quaternion_input=cfg.quaternion_input,
        display_hz=cfg.display_hz,
    )

    try:
        sample_source.run(controller.tick)
        controller.flush()
    except KeyboardInterrupt:
        logger.info("[ORIENT] interrupted after %d sample(s)", controller.samples)
    finally:
        try:
            display_provider.close()
        finally:
            sample_source.close()


if __name__ == "__main__":
    main()
