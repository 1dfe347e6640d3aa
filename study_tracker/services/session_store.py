"""
Session store: completed focus-timer intervals
"""

from typing import List, Optional
from study_tracker.config.constants import SESSIONS_KEY, RECENT_SESSIONS_LIMIT
from study_tracker.models.session import Session
from study_tracker.services.base_store import ObservableStore
from study_tracker.services.storage import Storage
from study_tracker.utils.date_utils import Clock, to_local_date
from study_tracker.utils.error_handler import ValidationError


class SessionStore(ObservableStore):
    """Service for recording focus sessions"""

    key = SESSIONS_KEY

    def __init__(self, storage: Storage, clock: Optional[Clock] = None):
        super().__init__(storage, clock)
        self._sessions: List[Session] = self._load_records(Session)
        self._seed_ids(s.id for s in self._sessions)
        self.logger.info(f"[SessionStore] Loaded {len(self._sessions)} sessions")

    @property
    def sessions(self) -> List[Session]:
        """Snapshot of all sessions in recording order"""
        return [s.model_copy() for s in self._sessions]

    def __len__(self) -> int:
        return len(self._sessions)

    def _save(self) -> None:
        self._changed([s.to_record() for s in self._sessions])

    def record_completion(self, duration_minutes: int, linked_task_id: Optional[int] = None) -> Session:
        """
        Record a completed focus interval

        Args:
            duration_minutes: Length of the interval
            linked_task_id: Task worked on (optional)

        Returns:
            Recorded session
        """
        if duration_minutes <= 0:
            raise ValidationError("Session duration must be positive")

        session = Session(
            id=self._next_id(),
            duration=duration_minutes,
            completed_at=self.clock(),
            linked_task=linked_task_id,
        )
        self._sessions.append(session)
        self.logger.info(
            f"[SessionStore] Recorded {duration_minutes} min session {session.id}"
            f" (task: {linked_task_id})"
        )
        self._save()
        return session.model_copy()

    def todays_sessions(self) -> List[Session]:
        """Sessions completed on the current local calendar day, oldest first"""
        today = to_local_date(self.clock())
        todays = [s for s in self._sessions if to_local_date(s.completed_at) == today]
        todays.sort(key=lambda s: s.completed_at)
        return [s.model_copy() for s in todays]

    def recent_sessions(self, n: int = RECENT_SESSIONS_LIMIT) -> List[Session]:
        """Most recent n sessions of today, oldest of them first"""
        if n <= 0:
            return []
        return self.todays_sessions()[-n:]

    def todays_focus_minutes(self) -> int:
        return sum(s.duration for s in self.todays_sessions())

    def clear(self) -> None:
        """Delete every session"""
        self._sessions = []
        self.logger.info("[SessionStore] Cleared all sessions")
        self._erase()
