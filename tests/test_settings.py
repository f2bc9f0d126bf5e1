import pytest
from dotenv import dotenv_values

from uptogo_shipping.exceptions import ConfigurationError
from uptogo_shipping.models import Settings
from uptogo_shipping.settings import configure, load_settings, save_settings


def test_configure_fills_store_from_customer(api):
    api.get_customer.return_value = {"Id": 42, "Location": "-23.5,-46.6"}

    settings = configure(api, "key-123")

    api.get_customer.assert_called_once_with("key-123")
    assert settings == Settings(api_key="key-123", store_id="42", store_location="-23.5,-46.6")


@pytest.mark.parametrize("lookup", [None, {}, []])
def test_configure_rejects_unknown_key(api, lookup):
    api.get_customer.return_value = lookup

    with pytest.raises(ConfigurationError, match="Access key not found."):
        configure(api, "bad-key")


def test_configure_rejects_blank_key_without_lookup(api):
    with pytest.raises(ConfigurationError):
        configure(api, "  ")
    api.get_customer.assert_not_called()


def test_load_settings_prefers_arguments(monkeypatch):
    monkeypatch.setenv("UPTOGO_API_KEY", "env-key")
    monkeypatch.setenv("UPTOGO_STORE_ID", "7")
    monkeypatch.setenv("UPTOGO_STORE_LOCATION", "1,2")

    assert load_settings() == Settings(api_key="env-key", store_id="7", store_location="1,2")
    assert load_settings(api_key="arg-key").api_key == "arg-key"


def test_save_settings_writes_env_file(tmp_path, settings):
    path = tmp_path / ".env"

    save_settings(settings, str(path))

    assert dotenv_values(path) == {
        "UPTOGO_API_KEY": "key-123",
        "UPTOGO_STORE_ID": "42",
        "UPTOGO_STORE_LOCATION": "-23.5,-46.6",
    }
