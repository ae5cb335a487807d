from pydantic import Field
from pydantic_settings import BaseSettings


class TelegramSettings(BaseSettings):
    """
    Telegram Bot API settings used for payment notifications.
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(default=False, alias="STORE_TELEGRAM_ENABLED")
    token: str = Field(default="", alias="TELEGRAM_BOT_TOKEN")
    api_url: str = Field(default="https://api.telegram.org", alias="TELEGRAM_API_URL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }
