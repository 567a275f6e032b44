"""Tests for spark/models.py: serialization round-trips and defaults."""

from spark.models import (
    Daily,
    Habit,
    HabitCollection,
    MonthlyGoal,
    Note,
    NoteCollection,
    NoteStyle,
)


def test_habit_from_dict_daily():
    h = Habit.from_dict({"id": "a", "title": "Read", "type": "daily", "history": ["2026-02-10"]})
    assert h.kind == Daily()
    assert h.is_daily
    assert h.target is None
    assert h.history == {"2026-02-10"}
    assert h.color == "orange"


def test_habit_from_dict_monthly_goal():
    h = Habit.from_dict({"id": "a", "title": "Gym", "type": "monthly_goal", "targetCount": 12})
    assert h.kind == MonthlyGoal(target=12)
    assert h.target == 12
    assert not h.is_daily


def test_habit_monthly_goal_missing_target_uses_default():
    h = Habit.from_dict({"id": "a", "title": "Gym", "type": "monthly_goal"})
    assert h.target == 10


def test_habit_unknown_type_loads_as_daily():
    h = Habit.from_dict({"id": "a", "title": "?", "type": "weekly"})
    assert h.kind == Daily()


def test_habit_history_duplicates_collapse():
    h = Habit.from_dict({"id": "a", "history": ["2026-02-10", "2026-02-10", "2026-02-09"]})
    assert len(h.history) == 2


def test_habit_to_dict_daily_omits_target():
    d = Habit(id="a", title="Read", history={"2026-02-10", "2026-02-08"}).to_dict()
    assert d["type"] == "daily"
    assert "targetCount" not in d
    assert d["history"] == ["2026-02-08", "2026-02-10"]


def test_habit_to_dict_monthly_goal_camel_case():
    d = Habit(id="a", title="Gym", kind=MonthlyGoal(target=8), created_at="2026-02-01").to_dict()
    assert d["type"] == "monthly_goal"
    assert d["targetCount"] == 8
    assert d["createdAt"] == "2026-02-01"


def test_habit_collection_skips_non_dict_entries():
    c = HabitCollection.from_list([{"id": "a"}, "junk", 3])
    assert len(c) == 1
    assert HabitCollection.from_list({"not": "a list"}).habits == []


def test_note_style_defaults_for_unknown_values():
    s = NoteStyle.from_dict({"fontFamily": "comic", "fontSize": "huge"})
    assert s.font_family == "sans"
    assert s.font_size == "base"
    assert s.color == "#000000"


def test_note_style_non_hex_color_falls_back():
    for color in ("not-a-color", "red", "#fff", 42, ["#ef4444"]):
        assert NoteStyle.from_dict({"color": color}).color == "#000000"
    assert NoteStyle.from_dict({"color": "#EF4444"}).color == "#ef4444"


def test_habit_from_dict_history_must_be_list():
    assert Habit.from_dict({"id": "a", "history": 5}).history == set()
    assert Habit.from_dict({"id": "a", "history": {"2026-02-10": True}}).history == set()
    assert Habit.from_dict({"id": "a", "history": None}).history == set()


def test_note_round_trip_dict():
    d = {
        "id": "n1",
        "title": "Ideas",
        "content": "text",
        "style": {"fontFamily": "mono", "fontSize": "xl", "color": "#ef4444"},
        "updatedAt": "2026-02-10T10:00:00+00:00",
    }
    assert Note.from_dict(d).to_dict() == d


def test_note_collection_to_list():
    c = NoteCollection(notes=[Note(id="a", title="A"), Note(id="b", title="B")])
    assert [n["id"] for n in c.to_list()] == ["a", "b"]
