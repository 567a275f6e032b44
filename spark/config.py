"""Settings loaded from config.yaml and the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from spark.fileio import read_yaml, write_yaml_atomic
from spark.workspace import config_path, workspace_root

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
LEGACY_API_KEY_ENV = "API_KEY"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class AISettings:
    model: str = DEFAULT_MODEL
    api_key_env: str = DEFAULT_API_KEY_ENV

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> AISettings:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            model=str(d.get("model") or DEFAULT_MODEL),
            api_key_env=str(d.get("api_key_env") or DEFAULT_API_KEY_ENV),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"model": self.model, "api_key_env": self.api_key_env}

    def api_key(self) -> str:
        """Resolve the API key from the environment; empty string disables AI."""
        return os.environ.get(self.api_key_env) or os.environ.get(LEGACY_API_KEY_ENV) or ""


@dataclass
class Settings:
    timezone: str = "UTC"
    log_level: str = "INFO"
    ai: AISettings = field(default_factory=AISettings)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        tz = str(d.get("timezone") or "UTC")
        try:
            ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r in config, using UTC", tz)
            tz = "UTC"
        level = str(d.get("log_level") or "INFO").upper()
        if level not in VALID_LOG_LEVELS:
            level = "INFO"
        return cls(timezone=tz, log_level=level, ai=AISettings.from_dict(d.get("ai") or {}))

    def to_dict(self) -> dict[str, Any]:
        return {
            "timezone": self.timezone,
            "log_level": self.log_level,
            "ai": self.ai.to_dict(),
        }


def load_settings(root: Path | None = None) -> Settings:
    """Load config.yaml into Settings; missing file yields defaults."""
    return Settings.from_dict(read_yaml(config_path(root)))


def ensure_config(root: Path | None = None) -> Path:
    """Write a default config.yaml if none exists. Returns its path."""
    if root is None:
        root = workspace_root()
    path = config_path(root)
    if not path.exists():
        write_yaml_atomic(path, Settings().to_dict())
    return path
