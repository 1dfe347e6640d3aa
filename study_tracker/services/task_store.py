"""
Task store: owns the task collection and its manual order
"""

from datetime import date
from typing import Iterable, List, Optional, Union
from study_tracker.config.constants import TASKS_KEY
from study_tracker.models.task import DEFAULT_PRIORITY, Task, Priority
from study_tracker.services.base_store import ObservableStore
from study_tracker.services.storage import Storage
from study_tracker.utils.date_parser import parse_date
from study_tracker.utils.date_utils import Clock
from study_tracker.utils.error_handler import ValidationError, NotFoundError


class TaskStore(ObservableStore):
    """Service for managing tasks"""

    key = TASKS_KEY

    def __init__(self, storage: Storage, clock: Optional[Clock] = None):
        """
        Initialize task store and load persisted tasks

        Args:
            storage: Persistence adapter
            clock: Source of the current time (optional)
        """
        super().__init__(storage, clock)
        self._tasks: List[Task] = self._load_records(Task)
        self._seed_ids(t.id for t in self._tasks)
        self.logger.info(f"[TaskStore] Loaded {len(self._tasks)} tasks")

    @property
    def tasks(self) -> List[Task]:
        """Snapshot of the tasks in manual order"""
        return [t.model_copy() for t in self._tasks]

    def __len__(self) -> int:
        return len(self._tasks)

    def _save(self) -> None:
        self._changed([t.to_record() for t in self._tasks])

    def _find(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def get(self, task_id: int) -> Task:
        """
        Get task by id

        Raises:
            NotFoundError: If no task has this id
        """
        task = self._find(task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        return task.model_copy()

    def first_incomplete(self) -> Optional[Task]:
        """First incomplete task in manual order"""
        for task in self._tasks:
            if not task.completed:
                return task.model_copy()
        return None

    def create(
        self,
        text: str,
        due_date: Union[date, str, None] = None,
        category: Optional[str] = None,
        priority: Union[Priority, str] = DEFAULT_PRIORITY,
    ) -> Task:
        """
        Create a task

        Args:
            text: Task text, must not be blank
            due_date: Due date or due-date input string (optional)
            category: Category/subject, blank means "General"
            priority: high, medium or low

        Returns:
            Created task

        Raises:
            ValidationError: If text is blank, or due date/priority can't be parsed
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Please enter a task!")

        if isinstance(due_date, str):
            raw_due = due_date
            due_date = parse_date(raw_due, today=self.clock().date())
            if due_date is None and raw_due.strip():
                raise ValidationError(f"Unrecognized due date: '{raw_due}'")

        try:
            priority = Priority(priority or DEFAULT_PRIORITY)
        except ValueError:
            raise ValidationError(f"Unknown priority: '{priority}'")

        task = Task(
            id=self._next_id(),
            text=text,
            due_date=due_date,
            category=category,
            priority=priority,
            created_at=self.clock(),
        )
        self._tasks.append(task)
        self.logger.info(f"[TaskStore] Created task {task.id}: '{task.text}'")
        self._save()
        return task.model_copy()

    def toggle_complete(self, task_id: int) -> Optional[Task]:
        """
        Flip the completed flag of a task

        Returns:
            Updated task, or None if the id is absent (no-op)
        """
        task = self._find(task_id)
        if task is None:
            self.logger.debug(f"[TaskStore] Toggle ignored, task {task_id} not found")
            return None

        task.completed = not task.completed
        task.completed_at = self.clock() if task.completed else None
        self.logger.info(f"[TaskStore] Task {task_id} completed={task.completed}")
        self._save()
        return task.model_copy()

    def delete(self, task_id: int) -> bool:
        """
        Delete a task; deleting an absent id is a silent no-op

        Returns:
            True if a task was removed
        """
        task = self._find(task_id)
        if task is None:
            self.logger.debug(f"[TaskStore] Delete ignored, task {task_id} not found")
            return False

        self._tasks.remove(task)
        self.logger.info(f"[TaskStore] Deleted task {task_id}")
        self._save()
        return True

    def reorder(self, id_sequence: Iterable[int]) -> List[Task]:
        """
        Apply a manual order

        Tasks named in id_sequence come first in that order; the others keep
        their relative order after them. Unknown and repeated ids are ignored.

        Returns:
            Tasks in their new order
        """
        by_id = {t.id: t for t in self._tasks}
        ordered: List[Task] = []
        placed = set()
        for task_id in id_sequence:
            if task_id in by_id and task_id not in placed:
                ordered.append(by_id[task_id])
                placed.add(task_id)
        ordered.extend(t for t in self._tasks if t.id not in placed)

        self._tasks = ordered
        self.logger.info(f"[TaskStore] Reordered {len(placed)} of {len(ordered)} tasks")
        self._save()
        return self.tasks

    def clear(self) -> None:
        """Delete every task"""
        self._tasks = []
        self.logger.info("[TaskStore] Cleared all tasks")
        self._erase()
