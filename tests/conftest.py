"""Shared fixtures for the Uptogo shipping tests."""

from unittest.mock import MagicMock

import pytest

from uptogo_shipping.models import InMemoryShippingMethod, Order, Package, PackageItem, Settings
from uptogo_shipping.uptogo_client import UptogoClient

PLACE_DETAILS = {
    "Localizacao": {"lat": -23.55, "lng": -46.63},
    "Endereco": {"Cep": "01310100", "Logradouro": "Avenida Paulista", "Cidade": "Sao Paulo"},
}


def api_rate(rate_id, price, days, modality_id="M1", name="Moto", comment=None):
    return {
        "Id": rate_id,
        "Preco": price,
        "Prazo": days,
        "Modalidade": {"Id": modality_id, "Nome": name, "Comentario": comment},
    }


@pytest.fixture(autouse=True)
def _prod_env(monkeypatch):
    monkeypatch.delenv("UPTOGO_ENV", raising=False)


@pytest.fixture
def settings():
    return Settings(api_key="key-123", store_id="42", store_location="-23.5,-46.6")


@pytest.fixture
def api():
    """An UptogoClient double answering the happy path of every endpoint."""
    client = MagicMock(spec=UptogoClient)
    client.get_place_suggestions.return_value = [{"id": "place-1"}, {"id": "place-2"}]
    client.get_place_details.return_value = PLACE_DETAILS
    client.get_directions.return_value = {"Distancia": 5200, "Tempo": 900}
    client.create_delivery_request.return_value = {"Id": "inv-1"}
    client.create_merchandise.return_value = {"Id": "merch-1"}
    client.get_rates.return_value = {
        "results": [
            api_rate("A", 10, 2, modality_id="M1", name="Moto", comment="Fragile goods"),
            api_rate("B", 5, 0, modality_id="M2", name="Bike"),
        ]
    }
    client.get_rate.return_value = {"results": [api_rate("A", 10, 2)]}
    client.create_delivery.return_value = {"sucesso": True, "id": "req-9"}
    client.cancel_delivery.return_value = True
    return client


@pytest.fixture
def package():
    return Package(
        destination_postcode="01310-100",
        contents=[
            PackageItem(name="Book", height=2, length=20, width=14, weight=0.4, price=39.9, quantity=1),
            PackageItem(name="", quantity=3),
        ],
    )


@pytest.fixture
def order():
    return Order(
        order_id="1001",
        shipping_first_name="Ana",
        shipping_last_name="Silva",
        shipping_postcode="01310-100",
        shipping_address_1="Avenida Paulista, 1578B",
        shipping_address_2="Apto 12",
        billing_phone="11999990000",
        billing_email="ana@example.com",
        customer_note="",
    )


@pytest.fixture
def shipping_method():
    return InMemoryShippingMethod(
        "1001-1",
        {"Inventory": "inv-1", "Proposal": "A", "Warning": "Fragile goods"},
    )
