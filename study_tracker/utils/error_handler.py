"""
Error handling utilities
"""

from typing import Optional
from study_tracker.models.response import ErrorResponse
from study_tracker.utils.logger import logger


class TrackerError(Exception):
    """Base exception for tracker errors"""
    pass


class ValidationError(TrackerError):
    """Invalid user input, the operation is aborted with no state change"""
    pass


class NotFoundError(TrackerError):
    """Entity id is not present in its store"""
    def __init__(self, kind: str, entity_id: Optional[int]):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")


class PersistenceError(TrackerError):
    """Storage error exception"""
    def __init__(self, message: str, key: Optional[str] = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


class PersistenceReadError(PersistenceError):
    """Stored document is corrupt or unreadable"""
    pass


class PersistenceWriteError(PersistenceError):
    """Stored document could not be written"""
    pass


def handle_error(error: Exception) -> ErrorResponse:
    """
    Handle error and return user-friendly message
    
    Args:
        error: Exception to handle
        
    Returns:
        ErrorResponse with user-friendly message
    """
    if isinstance(error, ValidationError):
        logger.info(f"Validation failed: {error}")
        return ErrorResponse(
            message=str(error),
            error_code="validation",
            transient=True,
        )
    
    if isinstance(error, NotFoundError):
        logger.debug(f"Not found: {error}")
        return ErrorResponse(
            message=f"{error.kind.capitalize()} no longer exists.",
            error_code="not_found",
            details={"id": error.entity_id},
        )
    
    logger.error(f"Error occurred: {error}", exc_info=True)
    
    if isinstance(error, PersistenceError):
        return ErrorResponse(
            message="Your changes could not be saved and will be lost on reload.",
            error_code="persistence",
            details={"key": error.key},
        )
    
    # Generic error message
    return ErrorResponse(
        message="Something went wrong. Please try again.",
    )


def format_error_message(error: Exception) -> str:
    """
    Format error message for user
    
    Args:
        error: Exception to format
        
    Returns:
        User-friendly error message
    """
    error_response = handle_error(error)
    return error_response.message
