"""Geocoding and routing steps shared by quoting and delivery creation.

Each step raises StepAborted when the API gives back nothing usable, so
callers can run them in sequence and stop at the first gap.
"""

import logging

from uptogo_shipping.exceptions import StepAborted
from uptogo_shipping.formatters import format_store_location
from uptogo_shipping.models import Directions, PlaceDetails, Settings
from uptogo_shipping.uptogo_client import UptogoClient

logger = logging.getLogger(__name__)


def get_place_suggestions(client: UptogoClient, postcode: str) -> list[dict]:
    """Look up place suggestions for a postal code.

    Returns:
        The non-empty list of suggestions returned by the API.
    """
    suggestions = client.get_place_suggestions(postcode)
    if not suggestions or not isinstance(suggestions, list):
        raise StepAborted("place_suggestions", f"no match for postcode {postcode!r}")
    return suggestions


def get_place_details(client: UptogoClient, suggestions: list[dict]) -> PlaceDetails:
    """Fetch details for the first suggestion. Others are ignored."""
    first = suggestions[0]
    if not isinstance(first, dict) or "id" not in first:
        raise StepAborted("place_details", f"malformed suggestion {first!r}")
    place_id = first["id"]
    details = client.get_place_details(place_id)
    if not details or not isinstance(details, dict):
        raise StepAborted("place_details", f"no details for place {place_id!r}")
    try:
        return PlaceDetails.from_api(details)
    except (TypeError, ValueError) as exc:
        raise StepAborted("place_details", f"malformed address: {exc!r}") from exc


def resolve_place(client: UptogoClient, postcode: str) -> PlaceDetails:
    suggestions = get_place_suggestions(client, postcode)
    return get_place_details(client, suggestions)


def get_directions(
    client: UptogoClient,
    settings: Settings,
    place: PlaceDetails,
) -> Directions:
    """Compute the route from the store to *place*."""
    points = [
        format_store_location(settings.store_location, "Latitude", "Longitude"),
        place.location,
    ]
    directions = client.get_directions(points)
    if not directions or not isinstance(directions, dict):
        raise StepAborted("directions", "no route to destination")
    result = Directions.from_api(directions)
    logger.debug(
        "Route to %s: distance=%s duration=%s",
        place.postal_code,
        result.distance,
        result.duration,
    )
    return result
