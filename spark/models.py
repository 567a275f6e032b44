"""Typed dataclasses for the Spark data model.

All models use from_dict/to_dict for JSON serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Union

logger = logging.getLogger(__name__)


# ── Habit kinds ───────────────────────────────────────────────


DAILY = "daily"
MONTHLY_GOAL = "monthly_goal"
DEFAULT_TARGET = 10
DEFAULT_COLOR = "orange"


@dataclass(frozen=True)
class Daily:
    """Streak habit: done or not done on each calendar day."""

    type: str = field(default=DAILY, init=False)


@dataclass(frozen=True)
class MonthlyGoal:
    """Count habit: completions this month against a target."""

    target: int = DEFAULT_TARGET
    type: str = field(default=MONTHLY_GOAL, init=False)


HabitKind = Union[Daily, MonthlyGoal]


def kind_from_dict(d: dict[str, Any]) -> HabitKind:
    if d.get("type") == MONTHLY_GOAL:
        try:
            target = int(d.get("targetCount") or DEFAULT_TARGET)
        except (TypeError, ValueError):
            target = DEFAULT_TARGET
        return MonthlyGoal(target=target)
    return Daily()


def _history_from(d: dict[str, Any]) -> set[str]:
    history = d.get("history")
    if history is None:
        return set()
    if not isinstance(history, list):
        logger.warning(
            "Habit %s: history is %s, not a list; loading it empty",
            d.get("id", "?"), type(history).__name__,
        )
        return set()
    return {day for day in history if isinstance(day, str)}


# ── Habits ────────────────────────────────────────────────────


@dataclass
class Habit:
    id: str = ""
    title: str = ""
    kind: HabitKind = field(default_factory=Daily)
    history: set[str] = field(default_factory=set)  # ISO dates
    created_at: str = ""
    color: str = DEFAULT_COLOR

    @property
    def is_daily(self) -> bool:
        return isinstance(self.kind, Daily)

    @property
    def target(self) -> int | None:
        return self.kind.target if isinstance(self.kind, MonthlyGoal) else None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Habit:
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            kind=kind_from_dict(d),
            history=_history_from(d),
            created_at=str(d.get("createdAt", "")),
            color=str(d.get("color") or DEFAULT_COLOR),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "type": self.kind.type,
            "color": self.color,
        }
        if isinstance(self.kind, MonthlyGoal):
            d["targetCount"] = self.kind.target
        d["history"] = sorted(self.history)
        d["createdAt"] = self.created_at
        return d


@dataclass
class HabitCollection:
    habits: list[Habit] = field(default_factory=list)

    @classmethod
    def from_list(cls, items: Any) -> HabitCollection:
        if not items or not isinstance(items, list):
            return cls()
        return cls(habits=[Habit.from_dict(h) for h in items if isinstance(h, dict)])

    def to_list(self) -> list[dict[str, Any]]:
        return [h.to_dict() for h in self.habits]

    def __len__(self) -> int:
        return len(self.habits)


@dataclass
class HabitStats:
    """Display statistic for one habit card."""

    label: str = ""
    count: int = 0
    value: str = ""


# ── Notes ─────────────────────────────────────────────────────


FONT_FAMILIES = ("sans", "serif", "mono")
FONT_SIZES = ("sm", "base", "lg", "xl")
DEFAULT_NOTE_COLOR = "#000000"
HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
COLOR_PALETTE = (
    "#000000",
    "#ef4444",
    "#f97316",
    "#eab308",
    "#22c55e",
    "#3b82f6",
    "#a855f7",
    "#ec4899",
    "#64748b",
)


@dataclass(frozen=True)
class NoteStyle:
    font_family: str = "sans"
    font_size: str = "base"
    color: str = DEFAULT_NOTE_COLOR

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> NoteStyle:
        if not d or not isinstance(d, dict):
            return cls()
        family = str(d.get("fontFamily", "sans"))
        size = str(d.get("fontSize", "base"))
        color = d.get("color")
        if not isinstance(color, str) or not HEX_COLOR_RE.match(color):
            if color:
                logger.warning("Ignoring note color %r; using %s", color, DEFAULT_NOTE_COLOR)
            color = DEFAULT_NOTE_COLOR
        return cls(
            font_family=family if family in FONT_FAMILIES else "sans",
            font_size=size if size in FONT_SIZES else "base",
            color=color.lower(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"fontFamily": self.font_family, "fontSize": self.font_size, "color": self.color}


@dataclass
class Note:
    id: str = ""
    title: str = ""
    content: str = ""
    style: NoteStyle = field(default_factory=NoteStyle)
    updated_at: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Note:
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            content=str(d.get("content", "")),
            style=NoteStyle.from_dict(d.get("style") or {}),
            updated_at=str(d.get("updatedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "style": self.style.to_dict(),
            "updatedAt": self.updated_at,
        }


@dataclass
class NoteCollection:
    notes: list[Note] = field(default_factory=list)

    @classmethod
    def from_list(cls, items: Any) -> NoteCollection:
        if not items or not isinstance(items, list):
            return cls()
        return cls(notes=[Note.from_dict(n) for n in items if isinstance(n, dict)])

    def to_list(self) -> list[dict[str, Any]]:
        return [n.to_dict() for n in self.notes]

    def __len__(self) -> int:
        return len(self.notes)
