"""
Focus timer: single countdown that records a session when it runs out
"""

import asyncio
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol
from pydantic import BaseModel
from study_tracker.config.constants import TIMER_TICK_SECONDS
from study_tracker.models.session import Session
from study_tracker.services.session_store import SessionStore
from study_tracker.services.settings_store import SettingsStore
from study_tracker.utils.date_utils import format_countdown
from study_tracker.utils.logger import logger


class TimerStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class TimerState(BaseModel):
    """Snapshot of the timer for rendering"""
    status: TimerStatus
    remaining_seconds: int
    display: str
    duration_minutes: int


class TickHandle(Protocol):
    def cancel(self) -> Any: ...


class TickScheduler(Protocol):
    """Anything with asyncio's call_later signature"""
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TickHandle: ...


CompletionListener = Callable[[Session], None]


class FocusTimer:
    """
    Countdown state machine

    States: IDLE (full duration loaded), RUNNING (one tick per second),
    PAUSED (remaining time kept). Ticks are scheduled through ``scheduler``;
    without one the running asyncio loop is used, and outside a loop ticks
    must be driven by calling ``tick()``.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        session_store: SessionStore,
        linked_task_provider: Optional[Callable[[], Optional[int]]] = None,
        scheduler: Optional[TickScheduler] = None,
    ):
        self.settings_store = settings_store
        self.session_store = session_store
        self.linked_task_provider = linked_task_provider
        self.scheduler = scheduler
        self.logger = logger

        self.status = TimerStatus.IDLE
        self.remaining_seconds = self._full_duration()
        self._handle: Optional[TickHandle] = None
        self._listeners: List[CompletionListener] = []

        settings_store.subscribe(self._on_settings_changed)

    def _full_duration(self) -> int:
        return self.settings_store.focus_duration * 60

    def _on_settings_changed(self, _key: str) -> None:
        # Only an idle timer picks up a new duration
        if self.status is TimerStatus.IDLE:
            self.remaining_seconds = self._full_duration()

    # ---- scheduling ----

    def _resolve_scheduler(self) -> Optional[TickScheduler]:
        if self.scheduler is not None:
            return self.scheduler
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def _schedule_next(self) -> None:
        self._cancel_pending()
        scheduler = self._resolve_scheduler()
        if scheduler is None:
            self.logger.debug("[FocusTimer] No scheduler, ticks are driven manually")
            return
        self._handle = scheduler.call_later(TIMER_TICK_SECONDS, self._on_tick)

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_tick(self) -> None:
        self._handle = None
        self.tick()

    # ---- transitions ----

    def start(self) -> TimerState:
        """IDLE or PAUSED -> RUNNING"""
        if self.status is TimerStatus.RUNNING:
            return self.snapshot()
        if self.remaining_seconds <= 0:
            self.remaining_seconds = self._full_duration()
        self.status = TimerStatus.RUNNING
        self.logger.info(f"[FocusTimer] Started with {format_countdown(self.remaining_seconds)} left")
        self._schedule_next()
        return self.snapshot()

    def pause(self) -> TimerState:
        """RUNNING -> PAUSED"""
        if self.status is TimerStatus.RUNNING:
            self._cancel_pending()
            self.status = TimerStatus.PAUSED
            self.logger.info(f"[FocusTimer] Paused at {format_countdown(self.remaining_seconds)}")
        return self.snapshot()

    def reset(self) -> TimerState:
        """Any state -> IDLE with the configured duration loaded"""
        self._cancel_pending()
        self.status = TimerStatus.IDLE
        self.remaining_seconds = self._full_duration()
        self.logger.info("[FocusTimer] Reset")
        return self.snapshot()

    def tick(self) -> Optional[Session]:
        """
        Advance the countdown by one second

        Returns:
            Recorded session if this tick expired the timer, else None
        """
        if self.status is not TimerStatus.RUNNING:
            return None
        self.remaining_seconds -= 1
        if self.remaining_seconds <= 0:
            return self._expire()
        self._schedule_next()
        return None

    def _expire(self) -> Session:
        self._cancel_pending()
        self.status = TimerStatus.IDLE
        self.remaining_seconds = self._full_duration()

        linked_task_id = self.linked_task_provider() if self.linked_task_provider else None
        session = self.session_store.record_completion(
            self.settings_store.focus_duration,
            linked_task_id,
        )
        self.logger.info(f"[FocusTimer] Focus session complete ({session.duration} min)")

        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception as e:
                self.logger.error(f"[FocusTimer] Completion listener failed: {e}", exc_info=True)
        return session

    # ---- observers ----

    def subscribe(self, listener: CompletionListener) -> None:
        """Register a callback invoked with the session recorded on expiry"""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: CompletionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self) -> TimerState:
        return TimerState(
            status=self.status,
            remaining_seconds=self.remaining_seconds,
            display=format_countdown(self.remaining_seconds),
            duration_minutes=self.settings_store.focus_duration,
        )
