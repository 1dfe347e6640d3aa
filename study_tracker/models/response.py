"""
Response models for handler and HTTP results
"""

from typing import Optional, Any
from pydantic import BaseModel


class ActionResult(BaseModel):
    """Result of handling one UI event"""
    message: str
    success: bool = True
    transient: bool = False  # auto-dismissing warning
    data: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    error_code: Optional[str] = None
    transient: bool = False
    details: Optional[dict] = None
