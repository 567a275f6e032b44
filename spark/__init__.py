"""Spark core library: habit tracker, notes and AI helpers.

Public API re-exports for convenient imports:
    from spark import LocalStorage, load_habits, toggle_habit, compute_stats, ...
"""

# Workspace & paths
from spark.workspace import (
    workspace_root,
    get_user_timezone,
    today,
    today_str,
    now_local,
    timestamp,
    config_path,
    storage_dir,
    log_path,
)

# Configuration & logging
from spark.config import Settings, AISettings, load_settings, ensure_config
from spark.logs import setup_logger

# Storage
from spark.storage import (
    LocalStorage,
    HABITS_KEY,
    NOTES_KEY,
    THEME_KEY,
    load_theme,
    save_theme,
)

# Models
from spark.models import (
    Daily,
    MonthlyGoal,
    HabitKind,
    Habit,
    HabitCollection,
    HabitStats,
    NoteStyle,
    Note,
    NoteCollection,
)

# Habits
from spark.habits import (
    validate_habit,
    find_habit,
    add_habit,
    create_habit,
    toggle_habit,
    delete_habit,
    load_habits,
    save_habits,
)

# Stats
from spark.stats import (
    compute_streak,
    count_this_month,
    compute_stats,
    recent_days,
    is_done_on,
)

# Notes
from spark.notes import (
    validate_note,
    new_note,
    find_note,
    save_note,
    delete_note,
    set_font_family,
    set_font_size,
    set_color,
    load_notes,
    save_notes,
)

# AI
from spark.ai import (
    AIResult,
    TextGenerator,
    MOTIVATION_FALLBACK,
    habit_motivation,
    refine_note_content,
)
