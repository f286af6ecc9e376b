import json

from soundmeter.config import CONFIG_VERSION, LOG_LEVEL_ENV, AppConfig, load_config


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "missing.json")
    assert config == AppConfig()
    assert config.sample_rate == 16000
    assert config.scale_max == 120
    assert config.meter_height_px == 200


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    original = AppConfig(mic_device_name="USB Mic", block_duration_ms=50, log_level="DEBUG")

    original.save(path)

    assert load_config(path) == original


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"version": CONFIG_VERSION, "animation_ms": 250, "theme": "dark"}),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.animation_ms == 250
    assert not hasattr(config, "theme")


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_non_object_payload_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_version_mismatch_is_rewritten(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"version": 0, "scale_max": 100}), encoding="utf-8")

    config = load_config(path)

    assert config.version == CONFIG_VERSION
    assert config.scale_max == 100
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == CONFIG_VERSION


def test_log_level_env_override(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert AppConfig(log_level="WARNING").resolve_log_level() == "DEBUG"


def test_log_level_from_config(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "")
    assert AppConfig(log_level="warning").resolve_log_level() == "WARNING"


def test_legacy_channels_key_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"version": CONFIG_VERSION, "channels": 2}), encoding="utf-8")
    config = load_config(path)
    assert "channels" not in config.to_dict()
