"""Note CRUD, styling and persistence for Spark."""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Callable

from spark.models import (
    FONT_FAMILIES,
    FONT_SIZES,
    HEX_COLOR_RE,
    Note,
    NoteCollection,
    NoteStyle,
)
from spark.storage import NOTES_KEY, LocalStorage

logger = logging.getLogger(__name__)

DELETE_NOTE_PROMPT = "Delete this note?"
PREVIEW_CHARS = 120


# ── Validation ────────────────────────────────────────────────


def validate_note(note: Note) -> list[str]:
    """Validate a note before saving and return list of errors (empty if valid)."""
    errors = []
    if not note.id:
        errors.append("Missing required field: id")
    if not note.title.strip():
        errors.append("Missing required field: title")
    if note.style.font_family not in FONT_FAMILIES:
        errors.append(f"Invalid font family: {note.style.font_family}")
    if note.style.font_size not in FONT_SIZES:
        errors.append(f"Invalid font size: {note.style.font_size}")
    if not HEX_COLOR_RE.match(note.style.color):
        errors.append(f"Invalid color: {note.style.color}")
    return errors


# ── Style ─────────────────────────────────────────────────────


def set_font_family(style: NoteStyle, family: str) -> NoteStyle:
    if family not in FONT_FAMILIES:
        raise ValueError(f"Invalid font family: {family!r}")
    return dataclasses.replace(style, font_family=family)


def set_font_size(style: NoteStyle, size: str) -> NoteStyle:
    if size not in FONT_SIZES:
        raise ValueError(f"Invalid font size: {size!r}")
    return dataclasses.replace(style, font_size=size)


def set_color(style: NoteStyle, color: str) -> NoteStyle:
    if not HEX_COLOR_RE.match(color):
        raise ValueError(f"Invalid color: {color!r}")
    return dataclasses.replace(style, color=color.lower())


# ── CRUD ──────────────────────────────────────────────────────


def new_note(now: str) -> Note:
    """A blank note with a fresh ID and the default style, stamped *now*."""
    return Note(id=str(uuid.uuid4()), updated_at=now)


def find_note(collection: NoteCollection, note_id: str) -> Note | None:
    for n in collection.notes:
        if n.id == note_id:
            return n
    return None


def save_note(collection: NoteCollection, note: Note, now: str) -> list[str]:
    """Upsert a note: replace in place by ID, else prepend. Returns errors."""
    errors = validate_note(note)
    if errors:
        return errors

    note.updated_at = now
    for i, n in enumerate(collection.notes):
        if n.id == note.id:
            collection.notes[i] = note
            return []
    collection.notes.insert(0, note)
    logger.info("Created note %s", note.id)
    return []


def delete_note(
    collection: NoteCollection, note_id: str, confirm: Callable[[str], bool]
) -> bool:
    """Remove a note after the user confirms. Returns True if removed."""
    if find_note(collection, note_id) is None:
        return False
    if not confirm(DELETE_NOTE_PROMPT):
        return False
    collection.notes = [n for n in collection.notes if n.id != note_id]
    logger.info("Deleted note %s", note_id)
    return True


def preview(note: Note, limit: int = PREVIEW_CHARS) -> str:
    """Single-line excerpt of the content for list views."""
    text = " ".join(note.content.split())
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


# ── Persistence ───────────────────────────────────────────────


def load_notes(storage: LocalStorage) -> NoteCollection:
    """Load the notes blob; absent or unreadable state yields an empty collection."""
    return NoteCollection.from_list(storage.get_json_array(NOTES_KEY))


def save_notes(storage: LocalStorage, collection: NoteCollection) -> None:
    """Re-serialize the full collection."""
    storage.set_json(NOTES_KEY, collection.to_list())
