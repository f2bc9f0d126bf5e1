"""Creation and cancellation of Uptogo deliveries for store orders.

The shipping line's metadata is the only record of whether a delivery is
outstanding: a "Request" entry means one was created and not cancelled.
"""

import logging
import threading
import weakref

from uptogo_shipping.base_client import ShippingMethodRecord
from uptogo_shipping.exceptions import StepAborted
from uptogo_shipping.formatters import (
    delivery_link,
    extract_number_from_address,
    format_assignment,
    format_contact_name,
    format_store_location,
    sanitize_value,
)
from uptogo_shipping.guards import allow_delivery_cancel, allow_delivery_create
from uptogo_shipping.models import (
    META_INVENTORY,
    META_PROPOSAL,
    META_REQUEST,
    META_WARNING,
    Order,
    PlaceDetails,
    Rate,
    Settings,
    ShippingMetadata,
    ShippingRateOffer,
)
from uptogo_shipping.quoting import parse_rates
from uptogo_shipping.routing import resolve_place
from uptogo_shipping.uptogo_client import UptogoClient

logger = logging.getLogger(__name__)

ACTION_CREATE = "uptogo_delivery_create"
ACTION_CANCEL = "uptogo_delivery_cancel"

# Payment method code for deliveries billed to the store account.
_PAYMENT_METHOD = 3

# Entries vanish once no create/cancel holds the lock.
_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_locks_guard = threading.Lock()


def _lock_for(shipping_method: ShippingMethodRecord) -> threading.Lock:
    with _locks_guard:
        lock = _locks.get(shipping_method.record_id)
        if lock is None:
            lock = threading.Lock()
            _locks[shipping_method.record_id] = lock
        return lock


def available_actions(shipping_method: ShippingMethodRecord | None) -> dict[str, str]:
    """Return the delivery action the store admin can run on an order."""
    if shipping_method is None:
        return {}
    if ShippingMetadata.load(shipping_method).request_id is not None:
        return {ACTION_CANCEL: "Cancel delivery"}
    return {ACTION_CREATE: "Request delivery"}


def select_rate(shipping_method: ShippingMethodRecord, offer: ShippingRateOffer) -> None:
    """Record the offer the customer chose at checkout."""
    selected = offer.meta.as_meta()
    for key in (META_INVENTORY, META_PROPOSAL, META_WARNING):
        if key in selected:
            shipping_method.add_meta(key, selected[key])
        else:
            shipping_method.delete_meta(key)
    shipping_method.save_meta_data()


class DeliveryManager:
    """Requests and cancels deliveries for orders shipped with Uptogo."""

    def __init__(self, client: UptogoClient, settings: Settings):
        self.client = client
        self.settings = settings

    def get_selected_rate(self, inventory_id: str, proposal_id: str) -> Rate:
        """Fetch the quote chosen at checkout."""
        response = self.client.get_rate(inventory_id, proposal_id)
        results = response.get("results") if isinstance(response, dict) else None
        if not results or not isinstance(results, list):
            raise StepAborted("rate", f"proposal {proposal_id} not found in {inventory_id}")
        return parse_rates(results[:1], "rate")[0]

    def build_delivery_payload(self, order: Order, rate: Rate, place: PlaceDetails) -> dict:
        address = dict(place.address)
        address.update(
            {
                "Numero": extract_number_from_address(order.shipping_address_1),
                "Complemento": sanitize_value(order.shipping_address_2, None),
            }
        )
        return {
            "clienteId": self.settings.store_id,
            "CotacaoId": rate.id,
            "Distancia": 0,
            "Ecommerce": True,
            "localCliente": format_store_location(self.settings.store_location, "lat", "lng"),
            "MetodoPagamento": _PAYMENT_METHOD,
            "pontos": [
                {
                    "Label": "0",
                    "Invert": False,
                    "Tarefa": format_assignment(order),
                    "NomeContato": format_contact_name(order),
                    "Notificar": sanitize_value(order.billing_email, None),
                    "Localizacao": place.location,
                    "Endereco": address,
                }
            ],
            "Tempo": rate.lead_time_days * 24 * 60,
            "Valor": rate.price,
        }

    def submit_delivery(self, order: Order, rate: Rate, place: PlaceDetails) -> str:
        """Create the delivery order and return its identifier."""
        response = self.client.create_delivery(self.build_delivery_payload(order, rate, place))
        if not isinstance(response, dict) or not response.get("sucesso") or not response.get("id"):
            raise StepAborted("delivery_create", f"delivery for order {order.order_id} refused")
        return response["id"]

    def create_delivery(
        self,
        order: Order,
        shipping_method: ShippingMethodRecord | None,
    ) -> str | None:
        """Request a delivery for *order* using the rate chosen at checkout.

        Does nothing when a delivery is already outstanding or no rate was
        selected.

        Returns:
            The new delivery identifier, or None if nothing was created.
        """
        if shipping_method is None:
            return None

        with _lock_for(shipping_method):
            if not allow_delivery_create(self.settings, order, shipping_method):
                logger.debug("Delivery create not allowed for order %s", order.order_id)
                return None

            meta = ShippingMetadata.load(shipping_method)
            try:
                place = resolve_place(self.client, order.shipping_postcode)
                rate = self.get_selected_rate(meta.inventory_id, meta.proposal_id)
                request_id = self.submit_delivery(order, rate, place)
            except StepAborted as exc:
                logger.info(
                    "Delivery create for order %s stopped at %s: %s",
                    order.order_id,
                    exc.step,
                    exc.detail,
                )
                return None

            order.add_order_note(
                f"Delivery number {delivery_link(request_id)} has been requested."
            )
            shipping_method.add_meta(META_REQUEST, request_id)
            shipping_method.save_meta_data()
            logger.info("Delivery %s requested for order %s", request_id, order.order_id)
            return request_id

    def cancel_delivery(
        self,
        order: Order,
        shipping_method: ShippingMethodRecord | None,
    ) -> bool:
        """Cancel the outstanding delivery of *order*, if there is one.

        Returns:
            True if a delivery was cancelled.
        """
        if shipping_method is None:
            return False

        with _lock_for(shipping_method):
            if not allow_delivery_cancel(self.settings, shipping_method):
                logger.debug("Delivery cancel not allowed for order %s", order.order_id)
                return False

            request_id = ShippingMetadata.load(shipping_method).request_id
            result = self.client.cancel_delivery(request_id)
            if isinstance(result, list):
                result = result[0] if result else None
            if isinstance(result, dict):
                result = result.get("sucesso")
            if not result:
                logger.info(
                    "Delivery %s for order %s was not cancelled", request_id, order.order_id
                )
                return False

            order.add_order_note(
                f"Delivery number {delivery_link(request_id)} has been cancelled."
            )
            shipping_method.delete_meta(META_REQUEST)
            shipping_method.save_meta_data()
            logger.info("Delivery %s cancelled for order %s", request_id, order.order_id)
            return True
