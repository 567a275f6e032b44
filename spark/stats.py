"""Streak and monthly-goal statistics for Spark habits.

Everything here is a pure function of (habit, today). Nothing is cached;
cards recompute from history on every render.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from spark.models import Habit, HabitStats, MonthlyGoal

STREAK_WINDOW_DAYS = 365


def is_done_on(habit: Habit, day: date) -> bool:
    return day.isoformat() in habit.history


def compute_streak(habit: Habit, today: date) -> int:
    """Count consecutive done days ending today.

    A missing today is skipped once so an unlogged morning does not zero
    the streak; any other gap ends the count.
    """
    streak = 0
    for i in range(STREAK_WINDOW_DAYS):
        if is_done_on(habit, today - timedelta(days=i)):
            streak += 1
        elif i == 0:
            continue
        else:
            break
    return streak


def month_bounds(today: date) -> tuple[date, date]:
    last = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last)


def count_this_month(habit: Habit, today: date) -> int:
    """Number of history dates inside today's calendar month."""
    start, end = month_bounds(today)
    count = 0
    for entry in habit.history:
        try:
            d = date.fromisoformat(entry)
        except ValueError:
            continue
        if start <= d <= end:
            count += 1
    return count


def compute_stats(habit: Habit, today: date) -> HabitStats:
    if isinstance(habit.kind, MonthlyGoal):
        count = count_this_month(habit, today)
        return HabitStats(label="This Month", count=count, value=f"{count} / {habit.kind.target}")
    streak = compute_streak(habit, today)
    return HabitStats(label="Current Streak", count=streak, value=f"{streak} Days")


def recent_days(habit: Habit, today: date, days: int = 7) -> list[tuple[date, bool]]:
    """The last *days* days, oldest first, with their done flag."""
    out = []
    for i in range(days - 1, -1, -1):
        d = today - timedelta(days=i)
        out.append((d, is_done_on(habit, d)))
    return out
