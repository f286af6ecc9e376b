"""Configuration management for SoundMeter."""

from __future__ import annotations

from dataclasses import dataclass, asdict
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv


CONFIG_DIR = Path.home() / ".soundmeter"
CONFIG_PATH = CONFIG_DIR / "config.json"
CONFIG_VERSION = 1
LOG_LEVEL_ENV = "SOUNDMETER_LOG_LEVEL"


def _ensure_config_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


@dataclass
class AppConfig:
    """Represents persisted SoundMeter configuration."""

    version: int = CONFIG_VERSION
    mic_device_name: Optional[str] = None
    sample_rate: int = 16000
    block_duration_ms: int = 100
    scale_max: int = 120
    meter_height_px: int = 200
    animation_ms: int = 100
    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a JSON serialisable dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Instantiate from persisted dictionary, ignoring unknown keys."""
        kwargs: Dict[str, Any] = {}
        for field_name in cls.__dataclass_fields__:  # type: ignore[attr-defined]
            if field_name in data:
                kwargs[field_name] = data[field_name]
        return cls(**kwargs)

    def save(self, path: Path = CONFIG_PATH) -> None:
        """Persist configuration to disk."""
        _ensure_config_dir(path)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    def resolve_log_level(self) -> str:
        """Return the log level, letting the environment (or a .env file) override it."""
        load_dotenv()
        override = os.environ.get(LOG_LEVEL_ENV, "").strip()
        return (override or self.log_level).upper()


def load_config(path: Path = CONFIG_PATH) -> AppConfig:
    """Load configuration from disk, falling back to defaults on error."""
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return AppConfig()

    if not isinstance(raw, dict):
        return AppConfig()

    config = AppConfig.from_dict(raw)
    if config.version != CONFIG_VERSION:
        config.version = CONFIG_VERSION
        config.save(path)
    return config
