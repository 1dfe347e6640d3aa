"""
Main application entry point
"""

from typing import Callable, List, Optional
from pydantic import BaseModel
from study_tracker.config.constants import EMPTY_LIST_MESSAGE
from study_tracker.config.settings import settings
from study_tracker.models.events import ActionType, TrackerEvent
from study_tracker.models.response import ActionResult
from study_tracker.models.session import Session
from study_tracker.models.stats import ProgressSummary
from study_tracker.models.task import DEFAULT_PRIORITY, Task
from study_tracker.models.user_settings import UserSettings
from study_tracker.services.focus_timer import FocusTimer, TickScheduler, TimerState
from study_tracker.services.session_store import SessionStore
from study_tracker.services.settings_store import SettingsStore
from study_tracker.services.statistics import build_summary
from study_tracker.services.storage import Storage
from study_tracker.services.task_query import StatusFilter, filter_and_sort, parse_filter
from study_tracker.services.task_store import TaskStore
from study_tracker.utils.date_utils import Clock, get_current_datetime, to_local_date
from study_tracker.utils.error_handler import TrackerError, ValidationError, handle_error
from study_tracker.utils.formatters import format_report
from study_tracker.utils.logger import logger


class TrackerView(BaseModel):
    """Everything the renderer needs for one repaint"""
    filter: StatusFilter
    search: str
    manual_order: bool
    tasks: List[Task]
    empty_message: Optional[str] = None
    summary: ProgressSummary
    recent_sessions: List[Session]
    settings: UserSettings
    timer: TimerState


class StudyTracker:
    """Main application: stores, timer and event handlers"""

    def __init__(
        self,
        storage: Optional[Storage] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[TickScheduler] = None,
    ):
        """
        Initialize tracker

        Args:
            storage: Persistence adapter (optional, uses settings.DATA_DIR)
            clock: Source of the current time (optional)
            scheduler: Timer tick scheduler (optional, uses the running loop)
        """
        self.clock: Clock = clock or get_current_datetime
        self.storage = storage or Storage()
        self.task_store = TaskStore(self.storage, clock=self.clock)
        self.session_store = SessionStore(self.storage, clock=self.clock)
        self.settings_store = SettingsStore(self.storage, clock=self.clock)
        self.timer = FocusTimer(
            self.settings_store,
            self.session_store,
            linked_task_provider=self._first_incomplete_id,
            scheduler=scheduler,
        )
        self.logger = logger

        # View state, owned by the rendering side but kept here between events
        self.current_filter = StatusFilter.ALL
        self.search_text = ""
        self.manual_order = False

        self.logger.info(f"[StudyTracker] Ready (data: {self.storage.data_dir})")

    def _first_incomplete_id(self) -> Optional[int]:
        task = self.task_store.first_incomplete()
        return task.id if task else None

    def subscribe(self, callback: Callable[[str], None]) -> None:
        """
        Register a repaint callback

        The callback receives the key of what changed: "tasks", "sessions",
        "settings" or "timer".
        """
        self.task_store.subscribe(callback)
        self.session_store.subscribe(callback)
        self.settings_store.subscribe(callback)
        self.timer.subscribe(lambda _session: callback("timer"))

    # ---- derived views ----

    def visible_tasks(self) -> List[Task]:
        return filter_and_sort(
            self.task_store.tasks,
            self.current_filter,
            self.search_text,
            now=self.clock(),
            manual_order=self.manual_order,
        )

    def summary(self) -> ProgressSummary:
        return build_summary(
            self.task_store.tasks,
            self.session_store.sessions,
            today=to_local_date(self.clock()),
            window=settings.STREAK_WINDOW_DAYS,
            focus_minutes_today=self.session_store.todays_focus_minutes(),
        )

    def view(self) -> TrackerView:
        tasks = self.visible_tasks()
        return TrackerView(
            filter=self.current_filter,
            search=self.search_text,
            manual_order=self.manual_order,
            tasks=tasks,
            empty_message=None if tasks else EMPTY_LIST_MESSAGE,
            summary=self.summary(),
            recent_sessions=self.session_store.recent_sessions(),
            settings=self.settings_store.settings,
            timer=self.timer.snapshot(),
        )

    def export_report(self) -> str:
        """Plain-text report of every task and today's sessions"""
        return format_report(
            self.task_store.tasks,
            self.session_store.todays_sessions(),
            self.summary(),
            generated_at=self.clock(),
        )

    # ---- events ----

    def handle_event(self, event: TrackerEvent) -> ActionResult:
        """
        Handle one UI event

        Args:
            event: Event emitted by the rendering side

        Returns:
            Result; failures carry the user-facing message
        """
        try:
            return self._dispatch(event)
        except TrackerError as e:
            error = handle_error(e)
            return ActionResult(
                message=error.message,
                success=False,
                transient=error.transient,
            )

    def _dispatch(self, event: TrackerEvent) -> ActionResult:
        action = event.action
        self.logger.debug(f"[StudyTracker] Event {action.value}")

        if action == ActionType.CREATE_TASK:
            task = self.task_store.create(
                event.text or "",
                due_date=event.due_date,
                category=event.category,
                priority=event.priority or DEFAULT_PRIORITY,
            )
            return ActionResult(message=f"Task '{task.text}' added", data=task)

        elif action == ActionType.TOGGLE_TASK:
            task = self.task_store.toggle_complete(self._require_task_id(event))
            if task is None:
                return ActionResult(message="Nothing to update")
            state = "completed" if task.completed else "reopened"
            return ActionResult(message=f"Task '{task.text}' {state}", data=task)

        elif action == ActionType.DELETE_TASK:
            removed = self.task_store.delete(self._require_task_id(event))
            return ActionResult(message="Task deleted" if removed else "Nothing to delete")

        elif action == ActionType.REORDER_TASKS:
            tasks = self.task_store.reorder(event.ids or [])
            self.manual_order = True
            return ActionResult(message="Order saved", data=tasks)

        elif action == ActionType.SET_SEARCH:
            self.search_text = event.search or ""
            return ActionResult(message="Search updated", data=self.visible_tasks())

        elif action == ActionType.SET_FILTER:
            self.current_filter = parse_filter(event.filter)
            return ActionResult(message=f"Showing {self.current_filter.value} tasks", data=self.visible_tasks())

        elif action == ActionType.TIMER_START:
            return ActionResult(message="Focus timer started", data=self.timer.start())

        elif action == ActionType.TIMER_PAUSE:
            return ActionResult(message="Focus timer paused", data=self.timer.pause())

        elif action == ActionType.TIMER_RESET:
            return ActionResult(message="Focus timer reset", data=self.timer.reset())

        elif action == ActionType.SET_THEME:
            if event.theme is None:
                raise ValidationError("Theme is required")
            return ActionResult(message="Theme updated", data=self.settings_store.set_theme(event.theme))

        elif action == ActionType.TOGGLE_THEME:
            return ActionResult(message="Theme updated", data=self.settings_store.toggle_theme())

        elif action == ActionType.SET_FOCUS_DURATION:
            if event.focus_duration is None:
                raise ValidationError("Focus duration is required")
            return ActionResult(
                message=f"Focus duration set to {event.focus_duration} min",
                data=self.settings_store.set_focus_duration(event.focus_duration),
            )

        elif action == ActionType.CLEAR_DATA:
            self.clear_all_data()
            return ActionResult(message="All tasks and sessions deleted")

        else:
            return ActionResult(message=f"Action '{action}' is not supported", success=False)

    @staticmethod
    def _require_task_id(event: TrackerEvent) -> int:
        if event.task_id is None:
            raise ValidationError("Task id is required")
        return event.task_id

    def clear_all_data(self) -> None:
        """Full data-clear: every task and session; settings are kept"""
        self.timer.reset()
        self.task_store.clear()
        self.session_store.clear()
        self.manual_order = False
        self.logger.info("[StudyTracker] All data cleared")


def main():
    """Main entry point: serve the HTTP interface"""
    import uvicorn
    from study_tracker.web.main import app

    settings.validate()
    uvicorn.run(app, host="127.0.0.1", port=settings.WEB_PORT)


if __name__ == "__main__":
    main()
