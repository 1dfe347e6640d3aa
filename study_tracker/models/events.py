"""
UI event model consumed by the tracker's handlers
"""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum
from study_tracker.models.task import Priority
from study_tracker.models.user_settings import Theme


class ActionType(str, Enum):
    """User-intent events emitted by the rendering side"""
    CREATE_TASK = "create_task"
    TOGGLE_TASK = "toggle_task"
    DELETE_TASK = "delete_task"
    REORDER_TASKS = "reorder_tasks"
    SET_SEARCH = "set_search"
    SET_FILTER = "set_filter"
    TIMER_START = "timer_start"
    TIMER_PAUSE = "timer_pause"
    TIMER_RESET = "timer_reset"
    SET_THEME = "set_theme"
    TOGGLE_THEME = "toggle_theme"
    SET_FOCUS_DURATION = "set_focus_duration"
    CLEAR_DATA = "clear_data"


class TrackerEvent(BaseModel):
    """One user-intent event; only the fields its action needs are set"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    action: ActionType
    task_id: Optional[int] = Field(None, alias="taskId")
    text: Optional[str] = None
    due_date: Optional[str] = Field(None, alias="dueDate")
    category: Optional[str] = None
    priority: Optional[Priority] = None
    ids: Optional[List[int]] = None  # For reorder_tasks
    search: Optional[str] = None
    filter: Optional[str] = None
    theme: Optional[Theme] = None
    focus_duration: Optional[int] = Field(None, alias="focusDuration")
