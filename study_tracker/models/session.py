"""
Focus session model
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator


class Session(BaseModel):
    """Completed focus-timer interval"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: int
    duration: int  # minutes
    completed_at: datetime = Field(alias="completedAt")
    linked_task: Optional[int] = Field(None, alias="linkedTask")  # weak reference, may dangle
    
    @field_validator("completed_at", mode="after")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.astimezone()
        return value
    
    def to_record(self) -> dict:
        """Serialize to the persisted JSON record"""
        return self.model_dump(mode="json", by_alias=True)
