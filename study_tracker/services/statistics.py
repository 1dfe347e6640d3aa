"""
Statistics functions over task and session snapshots
"""

import calendar
from collections import Counter
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence, Set
from study_tracker.config.constants import SUBJECTS, STREAK_WINDOW_DAYS, WEEKLY_SERIES_DAYS
from study_tracker.models.session import Session
from study_tracker.models.stats import (
    MotivationTier,
    SubjectProgress,
    DayActivity,
    CalendarDay,
    ProgressSummary,
)
from study_tracker.models.task import Task
from study_tracker.services.task_query import is_overdue
from study_tracker.utils.date_utils import get_current_date, to_local_date, last_days


def _percent(part: int, total: int) -> int:
    # Half-up, as the progress bar has always rounded
    if total == 0:
        return 0
    return int((Decimal(100 * part) / Decimal(total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def progress_percent(tasks: Sequence[Task]) -> int:
    """Share of completed tasks, 0 for an empty list"""
    return _percent(sum(1 for t in tasks if t.completed), len(tasks))


def motivation_tier(percent: int, has_any_task: bool) -> MotivationTier:
    """
    Map progress to its motivation band

    Args:
        percent: Completion percentage
        has_any_task: Whether the store holds any task

    Returns:
        Tier; ALL_DONE tiers ask the renderer to celebrate
    """
    if not has_any_task:
        return MotivationTier.NO_TASKS
    if percent >= 100:
        return MotivationTier.ALL_DONE
    if percent >= 75:
        return MotivationTier.ALMOST
    if percent >= 50:
        return MotivationTier.HALFWAY
    if percent >= 25:
        return MotivationTier.STARTED
    return MotivationTier.BEGINNING


def active_days(tasks: Iterable[Task], sessions: Iterable[Session]) -> Set[date]:
    """Calendar days with a completed task or a completed session"""
    days = {to_local_date(t.completed_at) for t in tasks if t.completed and t.completed_at}
    days.update(to_local_date(s.completed_at) for s in sessions)
    return days


def streak(
    tasks: Iterable[Task],
    sessions: Iterable[Session],
    today: Optional[date] = None,
    window: int = STREAK_WINDOW_DAYS,
) -> int:
    """
    Count consecutive active days walking back from today

    Today without activity doesn't end the streak (the day isn't over yet),
    any earlier gap does. The walk looks back at most ``window`` days.
    """
    today = today or get_current_date()
    days = active_days(tasks, sessions)

    count = 0
    for offset in range(window):
        if (today - timedelta(days=offset)) in days:
            count += 1
        elif offset > 0:
            break
    return count


def subject_breakdown(tasks: Iterable[Task], subjects: Sequence[str] = SUBJECTS) -> List[SubjectProgress]:
    """Completed/total counts for each subject, matched case-insensitively on category"""
    totals: Counter = Counter()
    done: Counter = Counter()
    for task in tasks:
        subject = task.category.strip().lower()
        totals[subject] += 1
        if task.completed:
            done[subject] += 1

    breakdown = []
    for subject in subjects:
        key = subject.lower()
        breakdown.append(SubjectProgress(
            subject=subject,
            completed=done[key],
            total=totals[key],
            percent=_percent(done[key], totals[key]),
        ))
    return breakdown


def weekly_series(
    tasks: Iterable[Task],
    sessions: Iterable[Session],
    today: Optional[date] = None,
    days: int = WEEKLY_SERIES_DAYS,
) -> List[DayActivity]:
    """Focus minutes and completed tasks per day for the last week, oldest first"""
    today = today or get_current_date()

    minutes: Counter = Counter()
    for session in sessions:
        minutes[to_local_date(session.completed_at)] += session.duration

    completed: Counter = Counter(
        to_local_date(t.completed_at) for t in tasks if t.completed and t.completed_at
    )

    return [
        DayActivity(day=day, focus_minutes=minutes[day], tasks_completed=completed[day])
        for day in last_days(today, days)
    ]


def calendar_month(tasks: Iterable[Task], year: int, month: int) -> List[CalendarDay]:
    """Tasks due on each day of a month and how many of them are done"""
    _, days_in_month = calendar.monthrange(year, month)
    due: Counter = Counter()
    done: Counter = Counter()
    for task in tasks:
        if task.due_date is None or (task.due_date.year, task.due_date.month) != (year, month):
            continue
        due[task.due_date] += 1
        if task.completed:
            done[task.due_date] += 1

    return [
        CalendarDay(day=day, due=due[day], completed=done[day])
        for day in (date(year, month, n) for n in range(1, days_in_month + 1))
    ]


def build_summary(
    tasks: Sequence[Task],
    sessions: Sequence[Session],
    today: Optional[date] = None,
    window: int = STREAK_WINDOW_DAYS,
    subjects: Sequence[str] = SUBJECTS,
    focus_minutes_today: Optional[int] = None,
) -> ProgressSummary:
    """
    Bundle every statistic shown next to the task list

    focus_minutes_today may be supplied by the session store; otherwise it is
    summed from the sessions that fall on today.
    """
    today = today or get_current_date()
    if focus_minutes_today is None:
        focus_minutes_today = sum(s.duration for s in sessions if to_local_date(s.completed_at) == today)
    percent = progress_percent(tasks)
    tier = motivation_tier(percent, bool(tasks))

    return ProgressSummary(
        total=len(tasks),
        completed=sum(1 for t in tasks if t.completed),
        overdue=sum(1 for t in tasks if is_overdue(t, today)),
        percent=percent,
        tier=tier,
        message=tier.message,
        celebrate=tier.celebrate,
        streak=streak(tasks, sessions, today=today, window=window),
        focus_minutes_today=focus_minutes_today,
        subjects=subject_breakdown(tasks, subjects),
        weekly=weekly_series(tasks, sessions, today=today),
    )
