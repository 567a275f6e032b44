"""Spark TUI: habit tracker and note editor powered by Textual."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import (
    Button,
    ContentSwitcher,
    Footer,
    Header,
    Input,
    Label,
    ListItem,
    ListView,
    RadioButton,
    RadioSet,
    Select,
    Static,
    TextArea,
)

from spark.ai import TextGenerator, habit_motivation, refine_note_content
from spark.config import Settings, ensure_config, load_settings
from spark.habits import (
    DELETE_HABIT_PROMPT,
    create_habit,
    delete_habit,
    find_habit,
    load_habits,
    save_habits,
    toggle_habit,
    validate_habit,
)
from spark.logs import setup_logger
from spark.models import (
    COLOR_PALETTE,
    DEFAULT_NOTE_COLOR,
    DEFAULT_TARGET,
    FONT_FAMILIES,
    FONT_SIZES,
    Daily,
    Habit,
    HabitKind,
    MonthlyGoal,
    Note,
    NoteStyle,
)
from spark.notes import (
    DELETE_NOTE_PROMPT,
    delete_note,
    find_note,
    load_notes,
    new_note,
    preview,
    save_note,
    save_notes,
    set_color,
    set_font_family,
    set_font_size,
    validate_note,
)
from spark.stats import compute_stats, is_done_on, recent_days
from spark.storage import LocalStorage, load_theme, save_theme
from spark.workspace import log_path, timestamp, today, workspace_root

logger = logging.getLogger(__name__)

THEME_NAMES = {"dark": "textual-dark", "light": "textual-light"}


CSS = """
Screen {
    layout: vertical;
}

#views {
    height: 1fr;
}

#tracker, #notes {
    padding: 0 1;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
    padding: 0 1;
}

.empty-hint {
    color: $text-muted;
    padding: 1 2;
}

ListView {
    height: 1fr;
}

ListItem {
    padding: 0 1;
    margin: 0 0 1 0;
    border: tall $primary-background-darken-2;
}

.card-body {
    height: auto;
}

ConfirmScreen, HabitFormScreen {
    align: center middle;
}

.dialog {
    width: 60;
    height: auto;
    padding: 1 2;
    border: thick $warning;
    background: $surface;
}

.dialog-buttons {
    height: auto;
    margin: 1 0 0 0;
}

.dialog-buttons Button {
    margin: 0 1 0 0;
}

#target-row {
    height: auto;
    display: none;
}

#editor-toolbar {
    height: auto;
    padding: 0 1;
}

#editor-toolbar Select {
    width: 18;
    margin: 0 1 0 0;
}

#ai-row {
    height: auto;
    padding: 0 1;
    display: none;
}

#ai-prompt {
    width: 1fr;
}

#note-title {
    margin: 1 1 0 1;
}

#note-content {
    height: 1fr;
    margin: 0 1;
}
"""


# ── Rendering helpers ──────────────────────────────────────────


def card_text(habit: Habit, day: date, motivation: str = "") -> str:
    """Plain-text body of a habit card."""
    stats = compute_stats(habit, day)
    lines = [habit.title]
    if isinstance(habit.kind, MonthlyGoal):
        lines[0] += f"   Goal: {habit.kind.target}/mo"
    lines.append(f"{stats.label}: {stats.value}")
    if isinstance(habit.kind, Daily):
        cells = []
        for d, done in recent_days(habit, day):
            mark = "🔥" if done else "·"
            name = "Today" if d == day else d.strftime("%d")
            cells.append(f"{mark} {name}")
        lines.append("  ".join(cells))
    else:
        state = "🔥 done today" if is_done_on(habit, day) else "○ not yet today"
        lines.append(f"{day.strftime('%B %Y')}  {state}")
    if motivation:
        lines.append(f'"{motivation}"')
    return "\n".join(lines)


def note_text(note: Note) -> str:
    lines = [note.title or "(untitled)"]
    excerpt = preview(note)
    if excerpt:
        lines.append(excerpt)
    if note.updated_at:
        lines.append(note.updated_at[:10])
    return "\n".join(lines)


# ── Custom widgets ─────────────────────────────────────────────


class HabitCard(ListItem):
    """One habit in the tracker list."""

    def __init__(self, habit_id: str, text: str, **kwargs) -> None:
        super().__init__(Static(text, markup=False, classes="card-body"), **kwargs)
        self.habit_id = habit_id

    def set_text(self, text: str) -> None:
        self.query_one(".card-body", Static).update(text)


class NoteRow(ListItem):
    """One note in the notes list."""

    def __init__(self, note_id: str, text: str, **kwargs) -> None:
        super().__init__(Static(text, markup=False, classes="card-body"), **kwargs)
        self.note_id = note_id


# ── Modal screens ──────────────────────────────────────────────


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no question before a destructive action."""

    BINDINGS = [
        Binding("y", "answer(True)", "Yes"),
        Binding("n,escape", "answer(False)", "No"),
    ]

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Label(self.message)
            with Horizontal(classes="dialog-buttons"):
                yield Button("Delete", variant="error", id="confirm-yes")
                yield Button("Cancel", id="confirm-no")

    def action_answer(self, value: bool) -> None:
        self.dismiss(value)

    @on(Button.Pressed, "#confirm-yes")
    def _yes(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#confirm-no")
    def _no(self) -> None:
        self.dismiss(False)


class HabitFormScreen(ModalScreen["tuple[str, HabitKind] | None"]):
    """New habit form: title, kind and monthly target."""

    AUTO_FOCUS = "#habit-title"

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Label("New Habit", classes="section-title")
            yield Input(placeholder="e.g. Read 30 mins", id="habit-title")
            with RadioSet(id="habit-kind"):
                yield RadioButton("Daily Streak", value=True, id="kind-daily")
                yield RadioButton("Monthly Goal", id="kind-monthly")
            with Horizontal(id="target-row"):
                yield Label("Target per month (1-31) ")
                yield Input(str(DEFAULT_TARGET), type="integer", id="habit-target")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Ignite", variant="warning", id="ignite")
                yield Button("Cancel", id="habit-cancel")

    @property
    def _monthly(self) -> bool:
        return self.query_one("#kind-monthly", RadioButton).value

    @on(RadioSet.Changed, "#habit-kind")
    def _on_kind_change(self, event: RadioSet.Changed) -> None:
        self.query_one("#target-row").display = self._monthly

    @on(Input.Submitted, "#habit-title")
    @on(Button.Pressed, "#ignite")
    def _submit(self) -> None:
        title = self.query_one("#habit-title", Input).value
        kind: HabitKind = Daily()
        if self._monthly:
            raw = self.query_one("#habit-target", Input).value.strip()
            try:
                target = int(raw)
            except ValueError:
                target = 0
            kind = MonthlyGoal(target=target)
        errors = validate_habit(title, kind)
        if errors:
            self.notify("; ".join(errors), title="Cannot create habit", severity="warning")
            return
        self.dismiss((title, kind))

    @on(Button.Pressed, "#habit-cancel")
    def action_cancel(self) -> None:
        self.dismiss(None)


class NoteEditorScreen(Screen["Note | None"]):
    """Full-screen note editor with style toolbar and AI rewrite."""

    AUTO_FOCUS = "#note-title"

    BINDINGS = [
        Binding("ctrl+s", "save", "Save"),
        Binding("ctrl+r", "toggle_ai", "AI Rewrite"),
        Binding("escape", "cancel", "Back"),
    ]

    def __init__(self, note: Note, generator: TextGenerator) -> None:
        super().__init__()
        self.note = note
        self.generator = generator
        self.style_state: NoteStyle = note.style

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="editor-toolbar"):
            yield Select(
                [(f, f) for f in FONT_FAMILIES],
                value=self.style_state.font_family,
                allow_blank=False,
                id="font-family",
            )
            yield Select(
                [(s, s) for s in FONT_SIZES],
                value=self.style_state.font_size,
                allow_blank=False,
                id="font-size",
            )
            colors = list(COLOR_PALETTE)
            if self.style_state.color not in colors:
                colors.append(self.style_state.color)
            yield Select(
                [(c, c) for c in colors],
                value=self.style_state.color,
                allow_blank=False,
                id="font-color",
            )
            yield Button("Save", variant="primary", id="note-save")
            yield Button("Back", id="note-cancel")
        with Horizontal(id="ai-row"):
            yield Input(
                placeholder="E.g., 'Summarize this', 'Make it more professional', 'Create a list'",
                id="ai-prompt",
            )
            yield Button("Go", variant="warning", id="ai-go")
        yield Input(self.note.title, placeholder="Note Title", id="note-title")
        yield TextArea(self.note.content, id="note-content")
        yield Footer()

    def on_mount(self) -> None:
        self._apply_color()

    def _apply_color(self) -> None:
        area = self.query_one("#note-content", TextArea)
        if self.style_state.color != DEFAULT_NOTE_COLOR:
            area.styles.color = self.style_state.color
        else:
            area.styles.color = None

    @on(Select.Changed)
    def _on_style_change(self, event: Select.Changed) -> None:
        if not isinstance(event.value, str):
            return
        setter = {
            "font-family": set_font_family,
            "font-size": set_font_size,
            "font-color": set_color,
        }.get(event.select.id or "")
        if setter is None:
            return
        self.style_state = setter(self.style_state, event.value)
        self._apply_color()

    def _build_note(self) -> Note:
        return Note(
            id=self.note.id,
            title=self.query_one("#note-title", Input).value,
            content=self.query_one("#note-content", TextArea).text,
            style=self.style_state,
            updated_at=self.note.updated_at,
        )

    @on(Button.Pressed, "#note-save")
    def action_save(self) -> None:
        note = self._build_note()
        errors = validate_note(note)
        if errors:
            self.notify("; ".join(errors), title="Cannot save note", severity="warning")
            return
        self.dismiss(note)

    @on(Button.Pressed, "#note-cancel")
    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_toggle_ai(self) -> None:
        row = self.query_one("#ai-row")
        row.display = not row.display
        if row.display:
            self.query_one("#ai-prompt", Input).focus()

    @on(Input.Submitted, "#ai-prompt")
    @on(Button.Pressed, "#ai-go")
    def _on_ai_go(self) -> None:
        instruction = self.query_one("#ai-prompt", Input).value
        if not instruction.strip():
            return
        self._refine(instruction)

    @work
    async def _refine(self, instruction: str) -> None:
        button = self.query_one("#ai-go", Button)
        button.label = "Thinking..."
        button.disabled = True
        area = self.query_one("#note-content", TextArea)
        refined = await refine_note_content(self.generator, area.text, instruction)
        area.load_text(refined)
        button.label = "Go"
        button.disabled = False
        self.query_one("#ai-prompt", Input).value = ""
        self.query_one("#ai-row").display = False


# ── Main app ───────────────────────────────────────────────────


class SparkApp(App):
    """Spark: habits and notes in the terminal."""

    TITLE = "Spark"
    CSS = CSS

    BINDINGS = [
        Binding("h", "show_tracker", "Tracker"),
        Binding("n", "show_notes", "Notes"),
        Binding("a", "add", "Add"),
        Binding("space", "toggle_today", "Done today"),
        Binding("m", "motivate", "Motivate"),
        Binding("x,delete", "delete_selected", "Delete"),
        Binding("l", "toggle_theme", "Light/Dark"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(
        self,
        root: Path | None = None,
        settings: Settings | None = None,
        generator: TextGenerator | None = None,
    ) -> None:
        super().__init__()
        self.root = root if root is not None else workspace_root()
        self.settings = settings if settings is not None else load_settings(self.root)
        self.storage = LocalStorage(self.root)
        self.habits = load_habits(self.storage)
        self.notes = load_notes(self.storage)
        self.generator = generator if generator is not None else TextGenerator.from_settings(self.settings)
        self.current_view = "tracker"
        self.theme_mode = load_theme(self.storage) or "dark"
        self._motivation: dict[str, str] = {}

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Main-view bindings are inactive while a dialog or the editor is open."""
        if len(self.screen_stack) > 1:
            return False
        if action in {"toggle_today", "motivate"}:
            return True if self.current_view == "tracker" else None
        return True

    @property
    def _main(self) -> Screen:
        """The tracker/notes screen, even while a dialog or the editor is on top."""
        return self.screen_stack[0]

    def compose(self) -> ComposeResult:
        yield Header()
        with ContentSwitcher(initial="tracker", id="views"):
            with Vertical(id="tracker"):
                yield Label("Habits", classes="section-title")
                yield Static("No habits yet. Press a to ignite one.", id="habits-empty", classes="empty-hint")
                yield ListView(id="habit-list")
            with Vertical(id="notes"):
                yield Label("Notes", classes="section-title")
                yield Static("No notes yet. Press a to start writing.", id="notes-empty", classes="empty-hint")
                yield ListView(id="note-list")
        yield Footer()

    async def on_mount(self) -> None:
        self.theme = THEME_NAMES[self.theme_mode]
        if load_theme(self.storage) is None:
            save_theme(self.storage, self.theme_mode)
        await self._rebuild_habits()
        await self._rebuild_notes()
        self._main.query_one("#habit-list", ListView).focus()

    # ── Persistence ────────────────────────────────────────────

    def _persist_habits(self) -> None:
        save_habits(self.storage, self.habits)
        self._update_subtitle()

    def _persist_notes(self) -> None:
        save_notes(self.storage, self.notes)
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        self.sub_title = f"{len(self.habits)} habits  ·  {len(self.notes)} notes"

    # ── List rendering ─────────────────────────────────────────

    async def _rebuild_habits(self) -> None:
        view = self._main.query_one("#habit-list", ListView)
        index = view.index or 0
        await view.clear()
        day = today(self.root)
        await view.extend(
            HabitCard(h.id, card_text(h, day, self._motivation.get(h.id, "")))
            for h in self.habits.habits
        )
        self._main.query_one("#habits-empty").display = not self.habits.habits
        if self.habits.habits:
            view.index = min(index, len(self.habits.habits) - 1)
        self._update_subtitle()

    async def _rebuild_notes(self) -> None:
        view = self._main.query_one("#note-list", ListView)
        await view.clear()
        await view.extend(NoteRow(n.id, note_text(n)) for n in self.notes.notes)
        self._main.query_one("#notes-empty").display = not self.notes.notes
        if self.notes.notes:
            view.index = 0
        self._update_subtitle()

    def _refresh_card(self, habit_id: str) -> None:
        habit = find_habit(self.habits, habit_id)
        if habit is None:
            return
        for card in self._main.query(HabitCard):
            if card.habit_id == habit_id:
                card.set_text(card_text(habit, today(self.root), self._motivation.get(habit_id, "")))

    def _selected_habit(self) -> Habit | None:
        item = self._main.query_one("#habit-list", ListView).highlighted_child
        if isinstance(item, HabitCard):
            return find_habit(self.habits, item.habit_id)
        return None

    def _selected_note(self) -> Note | None:
        item = self._main.query_one("#note-list", ListView).highlighted_child
        if isinstance(item, NoteRow):
            return find_note(self.notes, item.note_id)
        return None

    # ── View switching ─────────────────────────────────────────

    def _switch_to(self, view: str) -> None:
        self.current_view = view
        self._main.query_one("#views", ContentSwitcher).current = view
        target = "#habit-list" if view == "tracker" else "#note-list"
        self._main.query_one(target, ListView).focus()
        self.refresh_bindings()

    def action_show_tracker(self) -> None:
        self._switch_to("tracker")

    def action_show_notes(self) -> None:
        self._switch_to("notes")

    # ── Habits ─────────────────────────────────────────────────

    def action_add(self) -> None:
        if self.current_view == "tracker":
            self.push_screen(HabitFormScreen(), self._on_habit_form)
        else:
            self._open_editor(new_note(timestamp(self.root)))

    async def _on_habit_form(self, result: tuple[str, HabitKind] | None) -> None:
        if result is None:
            return
        title, kind = result
        habit, errors = create_habit(self.habits, title, kind, timestamp(self.root))
        if errors or habit is None:
            self.notify("; ".join(errors), title="Cannot create habit", severity="warning")
            return
        self._persist_habits()
        await self._rebuild_habits()
        view = self._main.query_one("#habit-list", ListView)
        view.index = len(self.habits.habits) - 1

    def action_toggle_today(self) -> None:
        habit = self._selected_habit()
        if habit is None:
            return
        if toggle_habit(self.habits, habit.id, today(self.root).isoformat()):
            self._persist_habits()
            self._refresh_card(habit.id)

    @work
    async def action_motivate(self) -> None:
        habit = self._selected_habit()
        if habit is None:
            return
        stats = compute_stats(habit, today(self.root))
        self.notify("Asking for a spark of motivation…", timeout=2)
        text = await habit_motivation(self.generator, habit.title, stats.count)
        self._motivation[habit.id] = text
        self._refresh_card(habit.id)

    @work
    async def action_delete_selected(self) -> None:
        if self.current_view == "tracker":
            habit = self._selected_habit()
            if habit is None:
                return
            answer = await self.push_screen_wait(ConfirmScreen(DELETE_HABIT_PROMPT))
            if delete_habit(self.habits, habit.id, lambda _prompt: answer):
                self._motivation.pop(habit.id, None)
                self._persist_habits()
                await self._rebuild_habits()
        else:
            note = self._selected_note()
            if note is None:
                return
            answer = await self.push_screen_wait(ConfirmScreen(DELETE_NOTE_PROMPT))
            if delete_note(self.notes, note.id, lambda _prompt: answer):
                self._persist_notes()
                await self._rebuild_notes()

    # ── Notes ──────────────────────────────────────────────────

    @on(ListView.Selected, "#note-list")
    def _on_note_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, NoteRow):
            note = find_note(self.notes, event.item.note_id)
            if note is not None:
                self._open_editor(note)

    def _open_editor(self, note: Note) -> None:
        self.push_screen(NoteEditorScreen(note, self.generator), self._on_editor_closed)

    async def _on_editor_closed(self, note: Note | None) -> None:
        if note is None:
            return
        errors = save_note(self.notes, note, timestamp(self.root))
        if errors:
            self.notify("; ".join(errors), title="Cannot save note", severity="warning")
            return
        self._persist_notes()
        await self._rebuild_notes()

    # ── Theme & exit ───────────────────────────────────────────

    def action_toggle_theme(self) -> None:
        self.theme_mode = "light" if self.theme_mode == "dark" else "dark"
        self.theme = THEME_NAMES[self.theme_mode]
        save_theme(self.storage, self.theme_mode)

    def action_quit_app(self) -> None:
        self.exit()


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    ensure_config(root)
    settings = load_settings(root)
    setup_logger(log_path(root), settings.log_level)
    logger.info("Starting Spark in %s (AI %s)", root, "enabled" if settings.ai.api_key() else "disabled")
    app = SparkApp(root=root, settings=settings)
    app.run()


if __name__ == "__main__":
    main()
