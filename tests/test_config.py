import pytest

from hmd_orientation.config import AppConfig, parse_args, validate_config


def test_validate_config_accepts_defaults():
    validate_config(AppConfig())


def test_validate_config_rejects_invalid_bridge_port():
    cfg = AppConfig(bridge_port=70000)
    with pytest.raises(ValueError, match="--bridge-port"):
        validate_config(cfg)


def test_validate_config_rejects_invalid_poll_ms():
    cfg = AppConfig(poll_ms=0)
    with pytest.raises(ValueError, match="--poll-ms"):
        validate_config(cfg)


def test_validate_config_requires_replay_path_for_replay():
    cfg = AppConfig(sample_source="replay")
    with pytest.raises(ValueError, match="--replay-path"):
        validate_config(cfg)


def test_validate_config_rejects_negative_replay_hz():
    cfg = AppConfig(replay_hz=-1.0)
    with pytest.raises(ValueError, match="--replay-hz"):
        validate_config(cfg)


def test_validate_config_rejects_invalid_angle_units():
    cfg = AppConfig(angle_units="grad")
    with pytest.raises(ValueError, match="--angle-units"):
        validate_config(cfg)


def test_validate_config_rejects_invalid_quaternion_input():
    cfg = AppConfig(quaternion_input="auto")
    with pytest.raises(ValueError, match="--quaternion-input"):
        validate_config(cfg)


def test_validate_config_rejects_invalid_display_frame_provider():
    cfg = AppConfig(display_frame_provider="bad")
    with pytest.raises(ValueError, match="--display-frame-provider"):
        validate_config(cfg)


def test_validate_config_rejects_invalid_display_provider():
    cfg = AppConfig(display_provider="bad")
    with pytest.raises(ValueError, match="--display-provider"):
        validate_config(cfg)


def test_validate_config_rejects_negative_display_hz():
    cfg = AppConfig(display_hz=-1.0)
    with pytest.raises(ValueError, match="--display-hz"):
        validate_config(cfg)


def test_validate_config_rejects_invalid_cli_output():
    cfg = AppConfig(cli_output="bad")
    with pytest.raises(ValueError, match="--cli-output"):
        validate_config(cfg)


def test_parse_args_defaults():
    cfg = parse_args([])
    assert cfg == AppConfig()


def test_parse_args_reads_yaml_config(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "\n".join(
            [
                "sample_source: replay",
                "replay-path: sessions/walk.jsonl",
                "replay_hz: 30",
                "replay_loop: yes",
                "angle_units: rad",
                "quaternion_input: unit",
                "display_provider: jsonl",
            ]
        ),
        encoding="utf-8",
    )
    cfg = parse_args(["--config", str(cfg_path)])
    assert cfg.sample_source == "replay"
    assert cfg.replay_path == "sessions/walk.jsonl"
    assert cfg.replay_hz == 30.0
    assert cfg.replay_loop is True
    assert cfg.angle_units == "rad"
    assert cfg.quaternion_input == "unit"
    assert cfg.display_provider == "jsonl"


def test_parse_args_cli_overrides_yaml(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "\n".join(
            [
                "display_provider: jsonl",
                "display_hz: 60",
            ]
        ),
        encoding="utf-8",
    )
    cfg = parse_args(
        [
            "--config",
            str(cfg_path),
            "--display-provider",
            "tui",
            "--display-hz",
            "12",
        ]
    )
    assert cfg.display_provider == "tui"
    assert cfg.display_hz == 12.0


def test_parse_args_rejects_unknown_yaml_key(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("bad_key: 1\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        parse_args(["--config", str(cfg_path)])


def test_parse_args_rejects_invalid_yaml_value(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("angle_units: grad\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        parse_args(["--config", str(cfg_path)])


def test_parse_args_rejects_missing_config_file(tmp_path):
    with pytest.raises(SystemExit):
        parse_args(["--config", str(tmp_path / "missing.yaml")])
