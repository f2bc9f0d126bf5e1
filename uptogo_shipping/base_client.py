"""Abstract base class for the host platform's shipping-method records."""

from abc import ABC, abstractmethod
from typing import Any


class ShippingMethodRecord(ABC):
    """Metadata bag attached to an order's Uptogo shipping line.

    The host platform owns persistence: mutations are only durable once
    save_meta_data() is called.
    """

    @property
    @abstractmethod
    def record_id(self) -> str:
        """Stable identifier of the shipping line on the host platform."""

    @abstractmethod
    def get_meta(self, key: str) -> Any:
        """Return the value stored under *key*, or None when absent."""

    @abstractmethod
    def add_meta(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def delete_meta(self, key: str) -> None:
        """Remove *key* if it is present."""

    @abstractmethod
    def meta_exists(self, key: str) -> bool:
        """Return True when *key* holds a value."""

    @abstractmethod
    def save_meta_data(self) -> None:
        """Persist pending metadata changes."""
