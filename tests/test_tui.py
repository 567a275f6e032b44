"""Tests for spark/tui.py: rendering helpers and the app via Textual's pilot."""

import asyncio
import json
from datetime import date

from spark.ai import MOTIVATION_FALLBACK, TextGenerator
from spark.habits import load_habits
from spark.models import DEFAULT_NOTE_COLOR, Habit, MonthlyGoal, Note
from spark.notes import load_notes
from spark.storage import NOTES_KEY, THEME_KEY, LocalStorage, load_theme
from spark.tui import HabitCard, NoteEditorScreen, NoteRow, SparkApp, card_text, note_text
from spark.workspace import today

DAY = date(2026, 2, 11)


def _app(root) -> SparkApp:
    return SparkApp(root=root, generator=TextGenerator(api_key=""))


def test_card_text_daily():
    habit = Habit(id="a", title="Read", history={"2026-02-10", "2026-02-09"})
    text = card_text(habit, DAY, "Nice!")
    lines = text.splitlines()
    assert lines[0] == "Read"
    assert lines[1] == "Current Streak: 2 Days"
    assert lines[2].endswith("· Today")
    assert lines[-1] == '"Nice!"'


def test_card_text_monthly_goal():
    habit = Habit(id="g", title="Gym", kind=MonthlyGoal(target=12), history={"2026-02-11"})
    lines = card_text(habit, DAY).splitlines()
    assert lines[0] == "Gym   Goal: 12/mo"
    assert lines[1] == "This Month: 1 / 12"
    assert lines[2] == "February 2026  🔥 done today"


def test_note_text():
    text = note_text(Note(id="n", title="Ideas", content="one\ntwo", updated_at="2026-02-10T10:00:00"))
    assert text.splitlines() == ["Ideas", "one two", "2026-02-10"]


def test_app_lists_habits_and_notes(workspace):
    async def run():
        app = _app(workspace)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert len(app.query(HabitCard)) == 2
            assert len(app.query(NoteRow)) == 2
            assert app.sub_title == "2 habits  ·  2 notes"

    asyncio.run(run())


def test_app_space_toggles_today_and_persists(workspace):
    day = today(workspace).isoformat()

    async def run():
        app = _app(workspace)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("space")
            await pilot.pause()
            assert day in app.habits.habits[0].history
            stored = load_habits(LocalStorage(workspace))
            assert day in stored.habits[0].history
            await pilot.press("space")
            await pilot.pause()
            assert day not in load_habits(LocalStorage(workspace)).habits[0].history

    asyncio.run(run())


def test_app_delete_requires_confirmation(workspace):
    async def run():
        app = _app(workspace)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("x")
            await pilot.pause()
            await pilot.press("n")
            await pilot.pause()
            assert len(app.habits) == 2

            await pilot.press("x")
            await pilot.pause()
            await pilot.press("y")
            await pilot.pause()
            assert [h.id for h in app.habits.habits] == ["h-gym"]
            assert [h.id for h in load_habits(LocalStorage(workspace)).habits] == ["h-gym"]

    asyncio.run(run())


def test_app_motivation_without_key_shows_fallback(workspace):
    async def run():
        app = _app(workspace)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("m")
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert app._motivation["h-read"] == MOTIVATION_FALLBACK

    asyncio.run(run())


def test_app_theme_toggle_persists(workspace):
    async def run():
        app = _app(workspace)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.theme == "textual-dark"
            await pilot.press("l")
            await pilot.pause()
            assert app.theme == "textual-light"

    asyncio.run(run())
    assert load_theme(LocalStorage(workspace)) == "light"


def test_app_new_note_saved_first(workspace):
    async def run():
        app = _app(workspace)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("n")
            await pilot.press("a")
            await pilot.pause()
            await pilot.press("ctrl+s")
            await pilot.pause()
            # empty title is rejected and the editor stays open
            assert len(app.notes) == 2
            await pilot.press(*"Plan")
            await pilot.press("ctrl+s")
            await pilot.pause()
            assert len(app.notes) == 3
            assert app.notes.notes[0].title == "Plan"

    asyncio.run(run())
    assert load_notes(LocalStorage(workspace)).notes[0].title == "Plan"


def test_app_stores_default_theme_on_first_launch(workspace):
    storage = LocalStorage(workspace)
    assert storage.get_item(THEME_KEY) is None

    async def run():
        app = _app(workspace)
        async with app.run_test() as pilot:
            await pilot.pause()

    asyncio.run(run())
    assert load_theme(storage) == "dark"


def test_app_opens_note_with_unusable_color(workspace):
    LocalStorage(workspace).set_item(
        NOTES_KEY,
        json.dumps([{"id": "n-bad", "title": "Odd", "content": "x", "style": {"color": "not-a-color"}}]),
    )

    async def run():
        app = _app(workspace)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("n")
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()
            assert isinstance(app.screen, NoteEditorScreen)
            assert app.screen.style_state.color == DEFAULT_NOTE_COLOR
            await pilot.press("ctrl+s")
            await pilot.pause()
            assert not isinstance(app.screen, NoteEditorScreen)

    asyncio.run(run())
    assert load_notes(LocalStorage(workspace)).notes[0].style.color == DEFAULT_NOTE_COLOR
