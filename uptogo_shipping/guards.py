"""Preconditions gating quoting and delivery actions."""

from uptogo_shipping.base_client import ShippingMethodRecord
from uptogo_shipping.formatters import sanitize_value
from uptogo_shipping.models import Order, Settings, ShippingMetadata


def is_settings_valid(settings: Settings | None) -> bool:
    """Return True when the API key, store id and store location are all set."""
    if settings is None:
        return False
    return all(
        sanitize_value(value, None) is not None
        for value in (settings.api_key, settings.store_id, settings.store_location)
    )


def allow_delivery_create(
    settings: Settings,
    order: Order,
    shipping_method: ShippingMethodRecord | None,
) -> bool:
    """Return True when a delivery can be requested for *order*.

    A rate must have been selected (inventory and proposal recorded) and
    no delivery may be outstanding yet.
    """
    if not is_settings_valid(settings):
        return False
    if sanitize_value(order.shipping_postcode, None) is None or shipping_method is None:
        return False
    meta = ShippingMetadata.load(shipping_method)
    return (
        meta.request_id is None
        and meta.inventory_id is not None
        and meta.proposal_id is not None
    )


def allow_delivery_cancel(
    settings: Settings,
    shipping_method: ShippingMethodRecord | None,
) -> bool:
    """Return True when *shipping_method* has an outstanding delivery."""
    if not is_settings_valid(settings) or shipping_method is None:
        return False
    return ShippingMetadata.load(shipping_method).request_id is not None
