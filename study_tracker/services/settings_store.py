"""
Settings store: theme and focus duration
"""

from typing import Optional, Union
from pydantic import ValidationError as ModelValidationError
from study_tracker.config.constants import SETTINGS_KEY
from study_tracker.config.settings import settings as app_settings
from study_tracker.models.user_settings import UserSettings, Theme
from study_tracker.services.base_store import ObservableStore
from study_tracker.services.storage import Storage
from study_tracker.utils.date_utils import Clock
from study_tracker.utils.error_handler import ValidationError


class SettingsStore(ObservableStore):
    """Service for user preferences"""

    key = SETTINGS_KEY

    def __init__(
        self,
        storage: Storage,
        clock: Optional[Clock] = None,
        default_focus_duration: Optional[int] = None,
    ):
        super().__init__(storage, clock)
        self.default_focus_duration = default_focus_duration or app_settings.DEFAULT_FOCUS_DURATION
        self._settings = self._load()

    def _defaults(self) -> UserSettings:
        return UserSettings(focus_duration=self.default_focus_duration)

    def _load(self) -> UserSettings:
        raw = self.storage.load(self.key, None)
        if raw is None:
            return self._defaults()
        if not isinstance(raw, dict):
            self.logger.warning("[SettingsStore] Stored settings are not an object, using defaults")
            return self._defaults()

        record = {"focusDuration": self.default_focus_duration, **raw}
        try:
            return UserSettings.model_validate(record)
        except ModelValidationError as e:
            self.logger.warning(f"[SettingsStore] Invalid stored settings, using defaults: {e}")
            return self._defaults()

    @property
    def settings(self) -> UserSettings:
        return self._settings.model_copy()

    @property
    def focus_duration(self) -> int:
        return self._settings.focus_duration

    @property
    def theme(self) -> Theme:
        return self._settings.theme

    def _save(self) -> None:
        self._changed(self._settings.to_record())

    def set_theme(self, theme: Union[Theme, str]) -> UserSettings:
        try:
            theme = Theme(theme)
        except ValueError:
            raise ValidationError(f"Unknown theme: '{theme}'")
        self._settings.theme = theme
        self.logger.info(f"[SettingsStore] Theme set to {theme.value}")
        self._save()
        return self.settings

    def toggle_theme(self) -> UserSettings:
        if self._settings.theme is Theme.DARK:
            return self.set_theme(Theme.LIGHT)
        return self.set_theme(Theme.DARK)

    def set_focus_duration(self, minutes: int) -> UserSettings:
        """
        Change the focus duration used by future timer resets

        Raises:
            ValidationError: If minutes is not a positive integer
        """
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
            raise ValidationError("Focus duration must be a positive number of minutes")
        self._settings.focus_duration = minutes
        self.logger.info(f"[SettingsStore] Focus duration set to {minutes} min")
        self._save()
        return self.settings
