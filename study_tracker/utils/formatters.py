"""
Message and report formatting utilities
"""

from typing import Dict, List, Optional, Sequence
from datetime import date, datetime
from study_tracker.config.constants import DELETED_TASK_LABEL
from study_tracker.models.session import Session
from study_tracker.models.stats import ProgressSummary
from study_tracker.models.task import Task
from study_tracker.services.task_query import is_overdue
from study_tracker.utils.date_utils import format_due_date, to_local_date


def format_task_line(task: Task, today: date) -> str:
    """
    Format one task for the report

    Args:
        task: Task to format
        today: Reference date for the overdue flag

    Returns:
        Line like "[ ] Read chapter 3 [HIGH] [history] | Due: 05.11.2024"
    """
    status = "[x]" if task.completed else "[ ]"
    line = f"{status} {task.text} [{task.priority.value.upper()}] [{task.category}]"

    if task.due_date:
        line += f" | Due: {format_due_date(task.due_date)}"

    if is_overdue(task, today):
        line += " | OVERDUE"

    return line


def format_session_line(session: Session, tasks_by_id: Dict[int, Task]) -> str:
    """
    Format one focus session

    A link to a task that no longer exists is shown as "deleted task".
    """
    time_str = session.completed_at.astimezone().strftime("%H:%M")
    line = f"{time_str} - {session.duration} min"

    if session.linked_task is not None:
        task = tasks_by_id.get(session.linked_task)
        line += f" - {task.text if task else DELETED_TASK_LABEL}"

    return line


def format_summary(summary: ProgressSummary) -> str:
    return (
        f"Total Tasks: {summary.total} | Completed: {summary.completed} | "
        f"Overdue: {summary.overdue}"
    )


def format_report(
    tasks: Sequence[Task],
    sessions: Sequence[Session],
    summary: ProgressSummary,
    generated_at: datetime,
) -> str:
    """
    Build the plain-text export of all tasks and today's sessions

    Args:
        tasks: Task snapshot in manual order
        sessions: Today's sessions, oldest first
        summary: Statistics computed for the same snapshot
        generated_at: Report timestamp

    Returns:
        Report text
    """
    today = to_local_date(generated_at)
    tasks_by_id = {t.id: t for t in tasks}

    lines: List[str] = [
        "🎯 My To-Do List",
        f"Generated on: {generated_at.strftime('%d.%m.%Y %H:%M')}",
        "",
        "📊 Summary",
        format_summary(summary),
        f"Progress: {summary.percent}% - {summary.message}",
        f"Streak: {summary.streak} day{'s' if summary.streak != 1 else ''}",
        "",
        "📋 Task List",
    ]

    if tasks:
        lines.extend(format_task_line(task, today) for task in tasks)
    else:
        lines.append("No tasks yet.")

    lines.append("")
    lines.append(f"⏱ Focus Today: {summary.focus_minutes_today} min")
    lines.extend(format_session_line(session, tasks_by_id) for session in sessions)

    return "\n".join(lines) + "\n"


def report_filename(generated_at: Optional[datetime] = None) -> str:
    """File name for a saved report, e.g. tasks-2024-11-05.txt"""
    generated_at = generated_at or datetime.now()
    return f"tasks-{generated_at.strftime('%Y-%m-%d')}.txt"
