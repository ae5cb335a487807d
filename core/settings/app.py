# core/settings/app.py
from functools import lru_cache

from core.infrastructure.database.config import DatabaseSettings
from core.settings.sections.integrations import TelegramSettings
from core.settings.sections.plisio import PlisioSettings
from core.settings.sections.store import StoreSettings


class AppSettings:
    """
    Central application settings aggregator.
    Settings are loaded lazily inside __init__
    to prevent eager evaluation at import time.
    """

    def __init__(self):
        # Load each settings class ONLY when AppSettings is instantiated
        self.database = DatabaseSettings()
        self.plisio = PlisioSettings()
        self.telegram = TelegramSettings()
        self.store = StoreSettings()


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings()
