"""
User preferences model
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from study_tracker.config.constants import FOCUS_DEFAULT_DURATION


class Theme(str, Enum):
    """UI theme"""
    LIGHT = "light"
    DARK = "dark"


class UserSettings(BaseModel):
    """User preferences persisted under the settings key"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    theme: Theme = Theme.LIGHT
    focus_duration: int = Field(FOCUS_DEFAULT_DURATION, alias="focusDuration", gt=0)
    
    def to_record(self) -> dict:
        """Serialize to the persisted JSON record"""
        return self.model_dump(mode="json", by_alias=True)


class SettingsUpdate(BaseModel):
    """Partial settings update"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    theme: Optional[Theme] = None
    focus_duration: Optional[int] = Field(None, alias="focusDuration")
