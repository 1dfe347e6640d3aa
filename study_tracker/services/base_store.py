"""
Shared plumbing for the persisted stores: change notification, id issuing, save/load
"""

from typing import Any, Callable, Iterable, List, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError as ModelValidationError
from study_tracker.services.storage import Storage
from study_tracker.utils.date_utils import Clock, get_current_datetime
from study_tracker.utils.error_handler import PersistenceWriteError
from study_tracker.utils.logger import logger

Listener = Callable[[str], None]
ModelT = TypeVar("ModelT", bound=BaseModel)


class ObservableStore:
    """Base class for stores that persist on every mutation and notify listeners"""

    key: str = ""

    def __init__(self, storage: Storage, clock: Optional[Clock] = None):
        self.storage = storage
        self.clock: Clock = clock or get_current_datetime
        self.logger = logger
        self.last_save_ok = True
        self._listeners: List[Listener] = []
        self._last_id = 0

    # ---- observers ----

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked with the store key after each change"""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.key)
            except Exception as e:
                self.logger.error(f"[{type(self).__name__}] Listener failed: {e}", exc_info=True)

    # ---- ids ----

    def _seed_ids(self, ids: Iterable[int]) -> None:
        self._last_id = max([self._last_id, *ids])

    def _next_id(self) -> int:
        """Epoch milliseconds, bumped past every id already issued"""
        candidate = int(self.clock().timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    # ---- persistence ----

    def _persist(self, value: Any) -> bool:
        """
        Write value under the store key

        A failed write leaves the in-memory state as is; it just won't
        survive a reload.
        """
        try:
            self.storage.save(self.key, value)
        except PersistenceWriteError as e:
            self.logger.error(f"[{type(self).__name__}] {e.message}. Changes are kept in memory only.")
            self.last_save_ok = False
            return False
        self.last_save_ok = True
        return True

    def _changed(self, value: Any) -> None:
        self._persist(value)
        self._notify()

    def _erase(self) -> None:
        """Drop the stored document for the store key, then notify"""
        try:
            self.storage.delete(self.key)
        except PersistenceWriteError as e:
            self.logger.error(f"[{type(self).__name__}] {e.message}. Stored data is left as is.")
            self.last_save_ok = False
        else:
            self.last_save_ok = True
        self._notify()

    def _load_records(self, model: Type[ModelT]) -> List[ModelT]:
        raw = self.storage.load(self.key, [])
        if not isinstance(raw, list):
            self.logger.warning(f"[{type(self).__name__}] Stored '{self.key}' is not a list, starting empty")
            return []

        items: List[ModelT] = []
        seen = set()
        for record in raw:
            try:
                item = model.model_validate(record)
            except ModelValidationError as e:
                self.logger.warning(f"[{type(self).__name__}] Skipping malformed record {record!r}: {e}")
                continue
            item_id = getattr(item, "id", None)
            if item_id in seen:
                self.logger.warning(f"[{type(self).__name__}] Skipping duplicate id {item_id}")
                continue
            seen.add(item_id)
            items.append(item)
        return items
