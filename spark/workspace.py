"""Where Spark keeps its files, and what "today" means for the user."""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from spark.fileio import read_yaml

logger = logging.getLogger(__name__)

DEFAULT_ROOT = Path.home() / ".spark"


def workspace_root() -> Path:
    """``$SPARK_ROOT`` if set, else ``~/.spark``."""
    return Path(os.environ.get("SPARK_ROOT", str(DEFAULT_ROOT))).expanduser().resolve()


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Zone named by ``timezone`` in config.yaml; UTC when unset or unknown."""
    try:
        name = read_yaml(config_path(root)).get("timezone")
        if name:
            return ZoneInfo(str(name))
    except Exception:
        logger.warning("Unusable timezone in %s; using UTC", config_path(root), exc_info=True)
    return ZoneInfo("UTC")


def now_local(root: Path | None = None) -> datetime:
    return datetime.now(get_user_timezone(root))


def today(root: Path | None = None) -> date:
    """The user's calendar date; habit history is keyed by it."""
    return now_local(root).date()


def today_str(root: Path | None = None) -> str:
    return today(root).isoformat()


def timestamp(root: Path | None = None) -> str:
    """Second-precision ISO 8601 time with the user's UTC offset."""
    return now_local(root).isoformat(timespec="seconds")


# ── Paths ─────────────────────────────────────────────────────


def config_path(root: Path | None = None) -> Path:
    return (root or workspace_root()) / "config.yaml"


def storage_dir(root: Path | None = None) -> Path:
    return (root or workspace_root()) / "storage"


def log_path(root: Path | None = None) -> Path:
    return (root or workspace_root()) / "logs" / "spark.log"
