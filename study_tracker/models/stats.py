"""
Derived statistics models (never persisted)
"""

from enum import Enum
from typing import List
from datetime import date
from pydantic import BaseModel
from study_tracker.config import constants


class MotivationTier(str, Enum):
    """Progress band with its fixed message"""
    NO_TASKS = "no_tasks"
    BEGINNING = "beginning"
    STARTED = "started"
    HALFWAY = "halfway"
    ALMOST = "almost"
    ALL_DONE = "all_done"
    
    @property
    def message(self) -> str:
        return _TIER_MESSAGES[self]
    
    @property
    def celebrate(self) -> bool:
        return self is MotivationTier.ALL_DONE


_TIER_MESSAGES = {
    MotivationTier.NO_TASKS: constants.MOTIVATION_NO_TASKS,
    MotivationTier.BEGINNING: constants.MOTIVATION_BEGINNING,
    MotivationTier.STARTED: constants.MOTIVATION_STARTED,
    MotivationTier.HALFWAY: constants.MOTIVATION_HALFWAY,
    MotivationTier.ALMOST: constants.MOTIVATION_ALMOST,
    MotivationTier.ALL_DONE: constants.MOTIVATION_ALL_DONE,
}


class SubjectProgress(BaseModel):
    """Completion counts for one subject"""
    subject: str
    completed: int
    total: int
    percent: int


class DayActivity(BaseModel):
    """One point of the weekly trend series"""
    day: date
    focus_minutes: int
    tasks_completed: int


class CalendarDay(BaseModel):
    """Tasks due on one day of a calendar month"""
    day: date
    due: int
    completed: int


class ProgressSummary(BaseModel):
    """All statistics shown next to the task list"""
    total: int
    completed: int
    overdue: int
    percent: int
    tier: MotivationTier
    message: str
    celebrate: bool
    streak: int
    focus_minutes_today: int
    subjects: List[SubjectProgress]
    weekly: List[DayActivity]
