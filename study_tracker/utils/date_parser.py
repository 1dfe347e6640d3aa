"""
Date parsing utilities for converting due-date input to calendar dates
"""

from datetime import date, datetime, timedelta
from typing import Optional
from study_tracker.utils.date_utils import get_current_date


def parse_date(date_str: Optional[str], today: Optional[date] = None) -> Optional[date]:
    """
    Parse due-date input to a calendar date
    
    Args:
        date_str: Date string (e.g., "tomorrow", "2024-11-05", "08.11.2025",
            "2024-11-05T10:00:00+03:00")
        today: Reference date for relative words (defaults to local today)
        
    Returns:
        Parsed date or None
    """
    if not date_str:
        return None
    
    original_date_str = date_str.strip()
    date_str_lower = original_date_str.lower()
    if not date_str_lower:
        return None
    
    if today is None:
        today = get_current_date()
    
    # Relative dates
    relative = {
        "today": 0,
        "tomorrow": 1,
        "day after tomorrow": 2,
        "yesterday": -1,
    }
    if date_str_lower in relative:
        return today + timedelta(days=relative[date_str_lower])
    
    # Full ISO timestamp: keep only the calendar date
    if "t" in date_str_lower:
        try:
            return datetime.fromisoformat(original_date_str.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    
    date_formats = [
        "%Y-%m-%d",
        "%d.%m.%Y",
        "%d/%m/%Y",
    ]
    
    for fmt in date_formats:
        try:
            return datetime.strptime(date_str_lower, fmt).date()
        except ValueError:
            continue
    
    # If can't parse, return None
    return None
