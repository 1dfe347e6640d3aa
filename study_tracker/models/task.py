"""
Task model
"""

from enum import Enum
from typing import Optional, Any, List
from datetime import date, datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from study_tracker.config.constants import TASK_DEFAULT_CATEGORY, TASK_DEFAULT_PRIORITY, PRIORITY_ORDER


class Priority(str, Enum):
    """Task priority"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    
    @property
    def rank(self) -> int:
        return PRIORITY_ORDER[self.value]


DEFAULT_PRIORITY = Priority(TASK_DEFAULT_PRIORITY)


class Task(BaseModel):
    """Task model"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: int
    text: str
    due_date: Optional[date] = Field(None, alias="dueDate")
    category: str = TASK_DEFAULT_CATEGORY
    priority: Priority = DEFAULT_PRIORITY
    completed: bool = False
    created_at: datetime = Field(alias="createdAt")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")
    
    @model_validator(mode="before")
    @classmethod
    def _accept_subject(cls, data: Any) -> Any:
        # Records of the study variant store the category as "subject"
        if isinstance(data, dict) and "category" not in data and "subject" in data:
            data = {**data, "category": data["subject"]}
        return data
    
    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, value: Any) -> Any:
        if value == "":
            return None
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value
    
    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return TASK_DEFAULT_CATEGORY
        return value
    
    @field_validator("created_at", "completed_at", mode="after")
    @classmethod
    def _aware(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are local time
        if value is not None and value.tzinfo is None:
            return value.astimezone()
        return value
    
    @model_validator(mode="after")
    def _sync_completed_at(self) -> "Task":
        # completed_at is set iff completed
        if self.completed and self.completed_at is None:
            self.completed_at = self.created_at
        elif not self.completed and self.completed_at is not None:
            self.completed_at = None
        return self
    
    def to_record(self) -> dict:
        """Serialize to the persisted JSON record"""
        return self.model_dump(mode="json", by_alias=True)


class TaskCreate(BaseModel):
    """Task creation model"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    text: str
    due_date: Optional[str] = Field(None, alias="dueDate")
    category: Optional[str] = None
    priority: Priority = DEFAULT_PRIORITY


class ReorderRequest(BaseModel):
    """Manual drag-reorder result"""
    ids: List[int]
