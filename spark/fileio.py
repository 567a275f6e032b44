"""On-disk helpers for Spark's config file and storage blobs.

Blobs are UTF-8 JSON documents rewritten whole on every save. Readers never
raise for bad content: a blob that cannot be decoded or parsed is logged and
reads as empty, and the next save replaces it.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Contents of *path* as UTF-8, or "" when there is no such file."""
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def read_yaml(path: Path) -> dict[str, Any]:
    """Top-level mapping of a YAML file; anything else reads as {}."""
    text = read_text(path)
    if not text.strip():
        return {}
    result = yaml.safe_load(text)
    return result if isinstance(result, dict) else {}


def write_text_atomic(path: Path, content: str, suffix: str = ".tmp") -> None:
    """Replace *path* with *content* so readers see the old or new file, never half of one.

    The text goes to a locked sibling temp file that is fsynced and then
    renamed over the target. The temp file is removed if anything fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=suffix)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        os.replace(temp_path, path)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def write_yaml_atomic(path: Path, data: dict[str, Any]) -> None:
    content = yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    write_text_atomic(path, content, suffix=".yaml")


# ── JSON blobs ────────────────────────────────────────────────


def dump_json_blob(data: Any) -> str:
    """Blob encoding: two-space indented JSON, non-ASCII kept, trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json_atomic(path: Path, data: Any) -> None:
    write_text_atomic(path, dump_json_blob(data), suffix=".json")


def read_json_array(path: Path) -> list[Any]:
    """Parse a blob that should hold a JSON array.

    Missing or blank files give []. So do bytes that are not UTF-8, text that
    is not JSON, and JSON whose top level is not an array; those three are
    logged as warnings.
    """
    try:
        raw = read_text(path)
    except UnicodeDecodeError:
        logger.warning("Ignoring %s: not valid UTF-8", path.name, exc_info=True)
        return []
    if not raw.strip():
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring malformed %s blob", path.name, exc_info=True)
        return []
    if not isinstance(data, list):
        logger.warning("Ignoring %s blob: expected a JSON array, got %s", path.name, type(data).__name__)
        return []
    return data
