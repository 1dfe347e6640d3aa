"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from study_tracker.config.constants import FOCUS_DEFAULT_DURATION, STREAK_WINDOW_DAYS

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""
    
    # Storage
    DATA_DIR: str = os.getenv("DATA_DIR", ".study_tracker")
    
    # Focus timer
    DEFAULT_FOCUS_DURATION: int = int(os.getenv("DEFAULT_FOCUS_DURATION", str(FOCUS_DEFAULT_DURATION)))
    
    # Statistics
    STREAK_WINDOW_DAYS: int = int(os.getenv("STREAK_WINDOW_DAYS", str(STREAK_WINDOW_DAYS)))
    
    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")  # empty disables the file log
    WEB_PORT: int = int(os.getenv("WEB_PORT", "8000"))
    
    @classmethod
    def validate(cls) -> bool:
        """Validate that numeric settings are usable"""
        numeric = {
            "DEFAULT_FOCUS_DURATION": cls.DEFAULT_FOCUS_DURATION,
            "STREAK_WINDOW_DAYS": cls.STREAK_WINDOW_DAYS,
            "WEB_PORT": cls.WEB_PORT,
        }
        
        invalid = [name for name, value in numeric.items() if value <= 0]
        
        if invalid:
            raise ValueError(
                f"Settings must be positive: {', '.join(invalid)}"
            )
        
        return True


# Global settings instance
settings = Settings()
