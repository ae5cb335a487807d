from pydantic import Field
from pydantic_settings import BaseSettings


class PlisioSettings(BaseSettings):
    """
    Plisio payment gateway settings.
    The secret key is used both as the API key and as the webhook HMAC key.
    """

    secret_key: str = Field(..., alias="PLISIO_SECRET_KEY")
    api_url: str = Field(default="https://plisio.net/api/v1", alias="PLISIO_API_URL")
    timeout_seconds: float = Field(default=30.0, alias="PLISIO_TIMEOUT_SECONDS")
    default_currency: str = Field(default="BTC", alias="PLISIO_DEFAULT_CURRENCY")
    invoice_ttl_hours: int = Field(default=24, alias="PLISIO_INVOICE_TTL_HOURS")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }
