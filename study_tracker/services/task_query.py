"""
Task query functions: status filter, text search and priority sort
"""

from enum import Enum
from datetime import date, datetime
from typing import Iterable, List, Optional, Union
from study_tracker.models.task import Task
from study_tracker.utils.date_utils import get_current_datetime, to_local_date
from study_tracker.utils.error_handler import ValidationError


class StatusFilter(str, Enum):
    """Filter tabs of the task list"""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"
    OVERDUE = "overdue"


def normalize_search(text: Optional[str]) -> str:
    """
    Normalize the search query for comparison

    Rules:
    - Convert to lowercase
    - Strip surrounding whitespace; inner whitespace must match exactly
    """
    if not text:
        return ""
    return text.lower().strip()


def parse_filter(value: Union[StatusFilter, str, None]) -> StatusFilter:
    """
    Resolve a filter name

    Raises:
        ValidationError: If the name is not a known filter
    """
    if value is None or value == "":
        return StatusFilter.ALL
    try:
        return StatusFilter(value)
    except ValueError:
        raise ValidationError(f"Unknown filter: '{value}'")


def is_overdue(task: Task, today: date) -> bool:
    """Incomplete task whose due date is before today"""
    return not task.completed and task.due_date is not None and task.due_date < today


def _matches_status(task: Task, status_filter: StatusFilter, today: date) -> bool:
    if status_filter is StatusFilter.ACTIVE:
        return not task.completed
    if status_filter is StatusFilter.COMPLETED:
        return task.completed
    if status_filter is StatusFilter.OVERDUE:
        return is_overdue(task, today)
    return True


def _matches_search(task: Task, query: str) -> bool:
    return query in task.text.lower() or query in task.category.lower()


def sort_by_priority(tasks: Iterable[Task]) -> List[Task]:
    """High priority first, newest first within a priority"""
    newest_first = sorted(tasks, key=lambda t: t.created_at, reverse=True)
    return sorted(newest_first, key=lambda t: t.priority.rank)


def filter_and_sort(
    tasks: Iterable[Task],
    status_filter: Union[StatusFilter, str, None] = StatusFilter.ALL,
    search_text: Optional[str] = "",
    now: Optional[datetime] = None,
    manual_order: bool = False,
) -> List[Task]:
    """
    Compute the visible task list

    Args:
        tasks: Task snapshot in manual order
        status_filter: all, active, completed or overdue
        search_text: Case-insensitive substring of text or category
        now: Reference time for overdue checks (defaults to now)
        manual_order: Keep the manual order instead of sorting; honoured only
            for the unfiltered, unsearched list

    Returns:
        Ordered list of tasks (possibly empty)
    """
    status_filter = parse_filter(status_filter)
    today = to_local_date(now or get_current_datetime())
    query = normalize_search(search_text)

    visible = [t for t in tasks if _matches_status(t, status_filter, today)]

    if query:
        visible = [t for t in visible if _matches_search(t, query)]

    if manual_order and status_filter is StatusFilter.ALL and not query:
        return visible

    return sort_by_priority(visible)
