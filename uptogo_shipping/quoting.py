"""Shipping rate quoting against the Uptogo API."""

import logging
from collections.abc import Callable

from uptogo_shipping.exceptions import StepAborted
from uptogo_shipping.formatters import format_merchandise, format_rate_label
from uptogo_shipping.guards import is_settings_valid
from uptogo_shipping.models import (
    Directions,
    Package,
    PlaceDetails,
    Rate,
    Settings,
    ShippingMetadata,
    ShippingRateOffer,
)
from uptogo_shipping.routing import get_directions, resolve_place
from uptogo_shipping.uptogo_client import UptogoClient

logger = logging.getLogger(__name__)


def create_delivery_request(
    client: UptogoClient,
    settings: Settings,
    place: PlaceDetails,
    directions: Directions,
) -> str:
    """Register a delivery request (inventory) and return its identifier."""
    payload = {
        "Carregadores": 0,
        "CepDestino": place.postal_code,
        "CepOrigem": 0,
        "ClienteId": settings.store_id,
        "Distancia": directions.distance,
        "PagarNoDestino": False,
        "Pontos": 1,
        "Retirar": True,
        "Tempo": directions.duration,
        "TipoVeiculo": 0,
    }
    inventory = client.create_delivery_request(payload)
    if not inventory or not isinstance(inventory, dict) or "Id" not in inventory:
        raise StepAborted("delivery_request", "delivery request was not created")
    return inventory["Id"]


def create_merchandises(
    client: UptogoClient,
    package: Package,
    inventory_id: str,
) -> None:
    """Attach every package line to the delivery request.

    Lines the API rejects are logged and skipped; quoting goes on with
    whatever was accepted.
    """
    for item in package.contents:
        if not client.create_merchandise(inventory_id, format_merchandise(item)):
            logger.info(
                "Merchandise %r was not added to delivery request %s",
                item.name,
                inventory_id,
            )


def make_offer(inventory_id: str, rate: Rate) -> ShippingRateOffer:
    return ShippingRateOffer(
        id=rate.modality_id,
        cost=rate.price,
        label=format_rate_label(rate),
        meta=ShippingMetadata(
            inventory_id=inventory_id,
            proposal_id=rate.id,
            warning=rate.comment,
        ),
    )


def parse_rates(results: list, step: str) -> list[Rate]:
    """Parse API rate records, aborting *step* on the first malformed one."""
    try:
        return [Rate.from_api(rate) for rate in results]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise StepAborted(step, f"malformed rate: {exc!r}") from exc


def get_rate_offers(client: UptogoClient, inventory_id: str) -> list[ShippingRateOffer]:
    """Fetch the quotes for a delivery request, in the order the API returns them."""
    rates = client.get_rates(inventory_id)
    results = rates.get("results") if isinstance(rates, dict) else None
    if not results or not isinstance(results, list):
        raise StepAborted("rates", f"no rates for delivery request {inventory_id}")
    return [make_offer(inventory_id, rate) for rate in parse_rates(results, "rates")]


def calculate_shipping(
    client: UptogoClient,
    settings: Settings,
    package: Package,
    add_rate: Callable[[ShippingRateOffer], None] | None = None,
) -> list[ShippingRateOffer]:
    """Quote Uptogo delivery rates for *package*.

    Resolves the destination, routes to it from the store, registers a
    delivery request with the package contents and collects its quotes.
    Any step that comes back empty ends the calculation with no rates.

    Args:
        client: Uptogo API client.
        settings: Store settings.
        package: Package with destination postcode and contents.
        add_rate: Optional callback receiving each offer in turn.

    Returns:
        The offers, in the order returned by the API.
    """
    if not is_settings_valid(settings):
        logger.debug("Uptogo settings incomplete, skipping shipping calculation")
        return []

    try:
        place = resolve_place(client, package.destination_postcode)
        directions = get_directions(client, settings, place)
        inventory_id = create_delivery_request(client, settings, place, directions)
        create_merchandises(client, package, inventory_id)
        offers = get_rate_offers(client, inventory_id)
    except StepAborted as exc:
        logger.info("Shipping calculation stopped at %s: %s", exc.step, exc.detail)
        return []

    if add_rate is not None:
        for offer in offers:
            add_rate(offer)
    return offers
