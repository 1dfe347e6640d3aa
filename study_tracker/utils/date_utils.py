"""
Centralized date/time utilities in the local timezone
All "now"/"today" lookups should go through this module
"""

from datetime import datetime, date, timedelta
from typing import Callable, Iterator, Optional

Clock = Callable[[], datetime]


def get_current_datetime() -> datetime:
    """
    Get current datetime in the local timezone
    
    Returns:
        Timezone-aware current datetime
    """
    return datetime.now().astimezone()


def get_current_date() -> date:
    """
    Get current local calendar date
    
    Returns:
        Today's date
    """
    return get_current_datetime().date()


def to_local_date(moment: datetime) -> date:
    """
    Calendar date of a timestamp in the local timezone
    
    Naive datetimes are taken to be local already.
    """
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone().date()


def last_days(today: date, count: int) -> Iterator[date]:
    """Yield the last ``count`` calendar days ending with ``today``, oldest first"""
    for offset in range(count - 1, -1, -1):
        yield today - timedelta(days=offset)


def format_due_date(value: Optional[date]) -> str:
    """Display format for due dates (DD.MM.YYYY)"""
    if value is None:
        return ""
    return value.strftime("%d.%m.%Y")


def format_countdown(seconds: int) -> str:
    """Format remaining timer seconds as MM:SS"""
    seconds = max(0, seconds)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"
