"""
Application constants
"""

# Storage keys
TASKS_KEY = "tasks"
SESSIONS_KEY = "sessions"
SETTINGS_KEY = "settings"

# Task defaults
TASK_DEFAULT_CATEGORY = "General"
TASK_DEFAULT_PRIORITY = "medium"
PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}  # lower rank sorts first

# Fixed subjects of the study-tracker variant
SUBJECTS = ("math", "science", "english", "history")

# Focus timer
FOCUS_DEFAULT_DURATION = 25  # minutes
TIMER_TICK_SECONDS = 1

# Statistics
STREAK_WINDOW_DAYS = 30
WEEKLY_SERIES_DAYS = 7
RECENT_SESSIONS_LIMIT = 5

# Motivation messages, one per progress band
MOTIVATION_NO_TASKS = "Start adding tasks!"
MOTIVATION_BEGINNING = "🌱 Just beginning? Every step counts!"
MOTIVATION_STARTED = "🚀 Getting started! Push forward!"
MOTIVATION_HALFWAY = "💪 Halfway! You've got this!"
MOTIVATION_ALMOST = "🔥 Almost there! Keep going!"
MOTIVATION_ALL_DONE = "🎉 All done! Amazing!"

# Rendering placeholders
EMPTY_LIST_MESSAGE = "No tasks match your criteria."
DELETED_TASK_LABEL = "deleted task"

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
