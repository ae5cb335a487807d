from pydantic import Field
from pydantic_settings import BaseSettings

from core.domain.value_objects import AdminAllowList


class StoreSettings(BaseSettings):
    """
    Storefront-wide settings.
    ADMIN_TELEGRAM_IDS is a comma separated list of Telegram user ids.
    """

    base_url: str = Field(default="http://localhost:8000", alias="BASE_URL")
    admin_telegram_ids: str = Field(default="", alias="ADMIN_TELEGRAM_IDS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def admins(self) -> AdminAllowList:
        return AdminAllowList.from_csv(self.admin_telegram_ids)

    @property
    def webhook_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/api/v1/webhooks/plisio?json=true"

    @property
    def success_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/payment/success"

    @property
    def fail_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/payment/fail"
