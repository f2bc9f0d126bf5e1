"""Shared data models for Uptogo delivery quoting and lifecycle."""

from dataclasses import dataclass, field
from typing import Any

from uptogo_shipping.base_client import ShippingMethodRecord

# Metadata labels stored on the host's shipping line.
META_INVENTORY = "Inventory"
META_PROPOSAL = "Proposal"
META_REQUEST = "Request"
META_WARNING = "Warning"


@dataclass
class Settings:
    """Store settings needed to talk to Uptogo."""

    api_key: str = ""
    store_id: str = ""
    store_location: str = ""


@dataclass
class Customer:
    """An Uptogo customer (the store) found by API key."""

    id: str
    location: str

    @classmethod
    def from_api(cls, data: dict) -> "Customer":
        return cls(id=str(data.get("Id", "")), location=str(data.get("Location", "")))


@dataclass
class PlaceDetails:
    """A geocoded place.

    ``location`` and ``address`` are kept as returned by the API since
    they are sent back verbatim when a delivery is created.
    """

    location: Any
    address: dict

    @property
    def postal_code(self) -> str | None:
        return self.address.get("Cep")

    @classmethod
    def from_api(cls, data: dict) -> "PlaceDetails":
        return cls(
            location=data.get("Localizacao"),
            address=dict(data.get("Endereco") or {}),
        )


@dataclass
class Directions:
    """Route between the store and a destination."""

    distance: float
    duration: float

    @classmethod
    def from_api(cls, data: dict) -> "Directions":
        return cls(distance=data.get("Distancia", 0), duration=data.get("Tempo", 0))


@dataclass
class Rate:
    """A priced quote ("proposal") for one delivery modality."""

    id: str
    modality_id: str
    modality_name: str
    price: float
    lead_time_days: int
    comment: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Rate":
        modality = data.get("Modalidade") or {}
        return cls(
            id=data["Id"],
            modality_id=modality.get("Id"),
            modality_name=modality.get("Nome", ""),
            price=data.get("Preco"),
            lead_time_days=int(data.get("Prazo") or 0),
            comment=modality.get("Comentario"),
        )


@dataclass
class ShippingMetadata:
    """Typed view over the metadata kept on a shipping line."""

    inventory_id: str | None = None
    proposal_id: str | None = None
    request_id: str | None = None
    warning: str | None = None

    @classmethod
    def load(cls, record: ShippingMethodRecord) -> "ShippingMetadata":
        def read(key):
            return record.get_meta(key) if record.meta_exists(key) else None

        return cls(
            inventory_id=read(META_INVENTORY),
            proposal_id=read(META_PROPOSAL),
            request_id=read(META_REQUEST),
            warning=read(META_WARNING),
        )

    def as_meta(self) -> dict:
        """Return the labelled key/value pairs that are set."""
        pairs = {
            META_INVENTORY: self.inventory_id,
            META_PROPOSAL: self.proposal_id,
            META_REQUEST: self.request_id,
            META_WARNING: self.warning,
        }
        return {k: v for k, v in pairs.items() if v is not None}


@dataclass
class ShippingRateOffer:
    """A shipping rate handed back to the host's shipping calculation."""

    id: str
    cost: float
    label: str
    meta: ShippingMetadata
    calc_tax: str = "per_order"


@dataclass
class PackageItem:
    """One content line of a shipment package."""

    name: str | None = None
    height: Any = None
    length: Any = None
    width: Any = None
    weight: Any = None
    price: Any = None
    quantity: Any = None


@dataclass
class Package:
    """A shipment package as passed to the shipping calculation."""

    destination_postcode: str
    contents: list[PackageItem] = field(default_factory=list)


@dataclass
class Order:
    """The parts of a store order the integration reads."""

    order_id: str
    shipping_first_name: str = ""
    shipping_last_name: str = ""
    shipping_postcode: str = ""
    shipping_address_1: str = ""
    shipping_address_2: str = ""
    billing_phone: str = ""
    billing_email: str = ""
    customer_note: str = ""
    notes: list[str] = field(default_factory=list)

    def add_order_note(self, note: str) -> None:
        self.notes.append(note)


class InMemoryShippingMethod(ShippingMethodRecord):
    """Dict-backed shipping line used by the CLI and tests."""

    def __init__(self, record_id: str, meta: dict | None = None):
        self._record_id = record_id
        self.meta: dict = dict(meta or {})
        self.saved_meta: dict = dict(self.meta)

    @property
    def record_id(self) -> str:
        return self._record_id

    def get_meta(self, key: str) -> Any:
        return self.meta.get(key)

    def add_meta(self, key: str, value: Any) -> None:
        self.meta[key] = value

    def delete_meta(self, key: str) -> None:
        self.meta.pop(key, None)

    def meta_exists(self, key: str) -> bool:
        return key in self.meta

    def save_meta_data(self) -> None:
        self.saved_meta = dict(self.meta)
