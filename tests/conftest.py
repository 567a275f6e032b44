"""Shared test fixtures for Spark tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with config and seeded storage."""
    root = tmp_path / "workspace"
    (root / "storage").mkdir(parents=True)

    config = {
        "timezone": "UTC",
        "log_level": "DEBUG",
        "ai": {"model": "gemini-2.5-flash", "api_key_env": "SPARK_TEST_KEY"},
    }
    (root / "config.yaml").write_text(
        yaml.dump(config, default_flow_style=False), encoding="utf-8"
    )

    habits = [
        {
            "id": "h-read",
            "title": "Read 30 mins",
            "type": "daily",
            "color": "orange",
            "history": ["2026-02-08", "2026-02-09", "2026-02-10"],
            "createdAt": "2026-02-01T08:00:00+00:00",
        },
        {
            "id": "h-gym",
            "title": "Gym",
            "type": "monthly_goal",
            "color": "orange",
            "targetCount": 12,
            "history": ["2026-01-30", "2026-02-02", "2026-02-05"],
            "createdAt": "2026-01-15T08:00:00+00:00",
        },
    ]
    (root / "storage" / "spark_habits").write_text(json.dumps(habits, indent=2), encoding="utf-8")

    notes = [
        {
            "id": "n-ideas",
            "title": "Ideas",
            "content": "Build a tiny garden.\nPlant basil.",
            "style": {"fontFamily": "serif", "fontSize": "lg", "color": "#22c55e"},
            "updatedAt": "2026-02-10T21:30:00+00:00",
        },
        {
            "id": "n-groceries",
            "title": "Groceries",
            "content": "eggs, oats",
            "style": {"fontFamily": "sans", "fontSize": "base", "color": "#000000"},
            "updatedAt": "2026-02-09T10:00:00+00:00",
        },
    ]
    (root / "storage" / "spark_notes").write_text(json.dumps(notes, indent=2), encoding="utf-8")

    os.environ["SPARK_ROOT"] = str(root)
    yield root
    if "SPARK_ROOT" in os.environ:
        del os.environ["SPARK_ROOT"]
