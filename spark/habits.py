"""Habit CRUD, history toggling and persistence for Spark."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable

from spark.models import Habit, HabitCollection, HabitKind, MonthlyGoal
from spark.storage import HABITS_KEY, LocalStorage

logger = logging.getLogger(__name__)

DELETE_HABIT_PROMPT = "Are you sure you want to delete this habit?"
MIN_TARGET = 1
MAX_TARGET = 31


# ── Validation ────────────────────────────────────────────────


def validate_habit(title: str, kind: HabitKind) -> list[str]:
    """Validate new-habit form input and return list of errors (empty if valid)."""
    errors = []
    if not (title or "").strip():
        errors.append("Missing required field: title")
    if isinstance(kind, MonthlyGoal):
        if not isinstance(kind.target, int) or not MIN_TARGET <= kind.target <= MAX_TARGET:
            errors.append(f"target must be integer {MIN_TARGET}-{MAX_TARGET}")
    return errors


# ── CRUD ──────────────────────────────────────────────────────


def find_habit(collection: HabitCollection, habit_id: str) -> Habit | None:
    for h in collection.habits:
        if h.id == habit_id:
            return h
    return None


def add_habit(collection: HabitCollection, habit: Habit) -> None:
    collection.habits.append(habit)


def create_habit(
    collection: HabitCollection, title: str, kind: HabitKind, now: str
) -> tuple[Habit | None, list[str]]:
    """Create and append a new habit. Returns (habit, errors)."""
    errors = validate_habit(title, kind)
    if errors:
        return None, errors

    habit = Habit(
        id=str(uuid.uuid4()),
        title=title,
        kind=kind,
        created_at=now,
    )
    add_habit(collection, habit)
    logger.info("Created habit %s (%s)", habit.id, kind.type)
    return habit, []


def toggle_habit(collection: HabitCollection, habit_id: str, day: str) -> bool:
    """Mark *day* done if absent from history, else unmark it.

    Returns False for an unknown habit ID (no-op).
    """
    habit = find_habit(collection, habit_id)
    if habit is None:
        return False
    if day in habit.history:
        habit.history.discard(day)
    else:
        habit.history.add(day)
    return True


def delete_habit(
    collection: HabitCollection, habit_id: str, confirm: Callable[[str], bool]
) -> bool:
    """Remove a habit after the user confirms. Returns True if removed."""
    if find_habit(collection, habit_id) is None:
        return False
    if not confirm(DELETE_HABIT_PROMPT):
        return False
    collection.habits = [h for h in collection.habits if h.id != habit_id]
    logger.info("Deleted habit %s", habit_id)
    return True


# ── Persistence ───────────────────────────────────────────────


def load_habits(storage: LocalStorage) -> HabitCollection:
    """Load the habits blob; absent or unreadable state yields an empty collection."""
    return HabitCollection.from_list(storage.get_json_array(HABITS_KEY))


def save_habits(storage: LocalStorage, collection: HabitCollection) -> None:
    """Re-serialize the full collection."""
    storage.set_json(HABITS_KEY, collection.to_list())
