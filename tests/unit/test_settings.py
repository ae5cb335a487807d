"""Settings loading from environment variables."""
import pytest
from pydantic import ValidationError

from core.infrastructure.database.config import DatabaseSettings
from core.settings.app import AppSettings
from core.settings.sections.integrations import TelegramSettings
from core.settings.sections.plisio import PlisioSettings
from core.settings.sections.store import StoreSettings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run from an empty directory so no local .env leaks in."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "PLISIO_SECRET_KEY",
        "PLISIO_API_URL",
        "PLISIO_DEFAULT_CURRENCY",
        "BASE_URL",
        "ADMIN_TELEGRAM_IDS",
        "STORE_TELEGRAM_ENABLED",
        "TELEGRAM_BOT_TOKEN",
        "DB_DATABASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_plisio_secret_is_required():
    with pytest.raises(ValidationError):
        PlisioSettings()


def test_plisio_settings_from_env(monkeypatch):
    monkeypatch.setenv("PLISIO_SECRET_KEY", "abc")
    monkeypatch.setenv("PLISIO_DEFAULT_CURRENCY", "USDT")

    settings = PlisioSettings()

    assert settings.secret_key == "abc"
    assert settings.default_currency == "USDT"
    assert settings.api_url == "https://plisio.net/api/v1"
    assert settings.invoice_ttl_hours == 24


def test_store_urls_derive_from_base_url(monkeypatch):
    monkeypatch.setenv("BASE_URL", "https://shop.example/")

    settings = StoreSettings()

    assert settings.webhook_url == "https://shop.example/api/v1/webhooks/plisio?json=true"
    assert settings.success_url == "https://shop.example/payment/success"
    assert settings.fail_url == "https://shop.example/payment/fail"


def test_admin_ids_parsed_from_env(monkeypatch):
    monkeypatch.setenv("ADMIN_TELEGRAM_IDS", "111, 222")

    admins = StoreSettings().admins

    assert admins.is_admin(111)
    assert admins.is_admin(222)
    assert not admins.is_admin(333)


def test_admin_ids_default_to_nobody():
    assert len(StoreSettings().admins) == 0


def test_telegram_disabled_by_default():
    settings = TelegramSettings()

    assert settings.enabled is False
    assert settings.token == ""


def test_database_defaults_to_local_sqlite():
    assert DatabaseSettings().database_url.startswith("sqlite+aiosqlite://")


def test_app_settings_aggregates_sections(monkeypatch):
    monkeypatch.setenv("PLISIO_SECRET_KEY", "abc")
    monkeypatch.setenv("STORE_TELEGRAM_ENABLED", "true")
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")

    settings = AppSettings()

    assert settings.plisio.secret_key == "abc"
    assert settings.telegram.enabled is True
    assert settings.telegram.token == "123:abc"
    assert settings.store.base_url == "http://localhost:8000"
