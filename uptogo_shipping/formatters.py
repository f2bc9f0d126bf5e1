"""Pure helpers that shape order and rate data for the Uptogo API."""

import logging
import re
from typing import Any

from uptogo_shipping.models import Order, PackageItem, Rate
from uptogo_shipping.uptogo_client import get_base_url_app

logger = logging.getLogger(__name__)

DEFAULT_ASSIGNMENT = "Deliver goods to customer."
DEFAULT_MERCHANDISE_NAME = "Sem nome"

# Street number: leading digits plus an optional letter ("123", "45B").
_ADDRESS_NUMBER = re.compile(r"\d+\w?")


def sanitize_value(value: Any, default: Any) -> Any:
    """Return *value*, or *default* when it is None, empty or only whitespace."""
    if value is None or not str(value).strip():
        return default
    return value


def extract_number_from_address(address: str | None) -> str | None:
    """Return the first street number found in *address*, if any."""
    match = _ADDRESS_NUMBER.search(address or "")
    return match.group(0) if match else None


def format_delivery_time(days: int) -> str:
    """Render a delivery lead time, e.g. "Immediate delivery" or "3 days"."""
    if days == 0:
        return "Immediate delivery"
    unit = "day" if days == 1 else "days"
    return f"{days} {unit}"


def format_rate_label(rate: Rate) -> str:
    return f"Uptogo - {rate.modality_name} ({format_delivery_time(rate.lead_time_days)})"


def format_contact_name(order: Order) -> str | None:
    """Contact shown to the courier: shipping name followed by billing phone."""
    return sanitize_value(
        f"{order.shipping_first_name} {order.shipping_last_name} {order.billing_phone}",
        None,
    )


def format_assignment(order: Order) -> str:
    return sanitize_value(order.customer_note, DEFAULT_ASSIGNMENT)


def format_store_location(
    store_location: str,
    label_lat: str,
    label_lng: str,
) -> dict:
    """Split a "lat,lng" settings value into a labelled coordinate pair.

    Tokens are passed through untouched. A value that is not exactly two
    comma-separated tokens is logged and the missing side becomes None.
    """
    parts = (store_location or "").split(",")
    if len(parts) != 2:
        logger.warning("Store location %r is not a 'lat,lng' pair", store_location)
    return {
        label_lat: parts[0] if parts[0] else None,
        label_lng: parts[1] if len(parts) > 1 else None,
    }


def format_merchandise(item: PackageItem) -> dict:
    """Build the merchandise payload for one package line.

    Missing measurements, price or quantity fall back to 1 and a missing
    name to a placeholder, so a poorly described product never blocks a
    quote.
    """
    return {
        "Altura": sanitize_value(item.height, 1),
        "Comprimento": sanitize_value(item.length, 1),
        "Largura": sanitize_value(item.width, 1),
        "Nome": sanitize_value(item.name, DEFAULT_MERCHANDISE_NAME),
        "Peso": sanitize_value(item.weight, 1),
        "Preco": sanitize_value(item.price, 1),
        "Quantidade": sanitize_value(item.quantity, 1),
        "TipoCaixa": True,
        "TipoEnvelope": False,
    }


def delivery_link(request_id: str) -> str:
    """HTML link to the tracking page of a delivery."""
    return f'<a href="{get_base_url_app()}/acompanhar/lote/{request_id}">{request_id}</a>'
