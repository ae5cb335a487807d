from core.settings.sections.integrations import TelegramSettings
from core.settings.sections.plisio import PlisioSettings
from core.settings.sections.store import StoreSettings

__all__ = ["PlisioSettings", "StoreSettings", "TelegramSettings"]
