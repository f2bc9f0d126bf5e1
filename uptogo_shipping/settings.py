"""Loading and saving the store's Uptogo settings."""

import logging
import os

from dotenv import load_dotenv, set_key

from uptogo_shipping.exceptions import ConfigurationError
from uptogo_shipping.formatters import sanitize_value
from uptogo_shipping.models import Customer, Settings
from uptogo_shipping.uptogo_client import UptogoClient

load_dotenv()

logger = logging.getLogger(__name__)

_ENV_KEYS = {
    "api_key": "UPTOGO_API_KEY",
    "store_id": "UPTOGO_STORE_ID",
    "store_location": "UPTOGO_STORE_LOCATION",
}


def load_settings(
    api_key: str | None = None,
    store_id: str | None = None,
    store_location: str | None = None,
) -> Settings:
    """Build settings from arguments, falling back to the environment."""
    return Settings(
        api_key=api_key or os.getenv(_ENV_KEYS["api_key"], ""),
        store_id=store_id or os.getenv(_ENV_KEYS["store_id"], ""),
        store_location=store_location or os.getenv(_ENV_KEYS["store_location"], ""),
    )


def configure(client: UptogoClient, api_key: str) -> Settings:
    """Resolve the store behind *api_key* and return complete settings.

    Raises:
        ConfigurationError: If no Uptogo customer matches the key.
    """
    data = client.get_customer(api_key) if sanitize_value(api_key, None) else None
    if not data or not isinstance(data, dict):
        raise ConfigurationError("Access key not found.")
    customer = Customer.from_api(data)
    logger.info("Access key resolved to store %s", customer.id)
    return Settings(api_key=api_key, store_id=customer.id, store_location=customer.location)


def save_settings(settings: Settings, path: str = ".env") -> None:
    """Write *settings* to a dotenv file, creating it if needed."""
    if not os.path.exists(path):
        open(path, "a").close()
    for field_name, env_key in _ENV_KEYS.items():
        set_key(path, env_key, getattr(settings, field_name))
