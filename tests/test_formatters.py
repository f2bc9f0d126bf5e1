import pytest

from uptogo_shipping.formatters import (
    DEFAULT_ASSIGNMENT,
    delivery_link,
    extract_number_from_address,
    format_assignment,
    format_contact_name,
    format_delivery_time,
    format_merchandise,
    format_rate_label,
    format_store_location,
    sanitize_value,
)
from uptogo_shipping.models import Order, PackageItem, Rate


@pytest.mark.parametrize("value", ["", "   ", "\t \n", None])
def test_sanitize_value_blank_returns_default(value):
    assert sanitize_value(value, "default") == "default"


def test_sanitize_value_keeps_content():
    assert sanitize_value("x", "default") == "x"
    assert sanitize_value(" x ", "default") == " x "
    assert sanitize_value(0, 1) == 0


def test_extract_number_from_address():
    assert extract_number_from_address("Rua A, 123B") == "123B"
    assert extract_number_from_address("Av. Brasil 45") == "45"
    assert extract_number_from_address("Rua A") is None
    assert extract_number_from_address("") is None


def test_format_delivery_time():
    assert format_delivery_time(0) == "Immediate delivery"
    assert format_delivery_time(1) == "1 day"
    assert format_delivery_time(2) == "2 days"
    assert format_delivery_time(1000) == "1000 days"


def test_format_rate_label():
    rate = Rate(id="A", modality_id="M1", modality_name="Moto", price=10, lead_time_days=2)
    assert format_rate_label(rate) == "Uptogo - Moto (2 days)"


def test_contact_name_joins_shipping_name_and_billing_phone():
    order = Order(order_id="1", shipping_first_name="Ana", shipping_last_name="Silva", billing_phone="119")
    assert format_contact_name(order) == "Ana Silva 119"
    assert format_contact_name(Order(order_id="2")) is None


def test_assignment_defaults_when_note_blank():
    assert format_assignment(Order(order_id="1", customer_note="  ")) == DEFAULT_ASSIGNMENT
    assert format_assignment(Order(order_id="1", customer_note="Ring twice")) == "Ring twice"


def test_store_location_split():
    assert format_store_location("-23.5,-46.6", "lat", "lng") == {"lat": "-23.5", "lng": "-46.6"}


def test_malformed_store_location_is_passed_through():
    assert format_store_location("-23.5", "lat", "lng") == {"lat": "-23.5", "lng": None}
    assert format_store_location("1,2,3", "lat", "lng") == {"lat": "1", "lng": "2"}


def test_merchandise_defaults_missing_fields():
    payload = format_merchandise(PackageItem(name=" ", height="", weight=None))

    assert payload == {
        "Altura": 1,
        "Comprimento": 1,
        "Largura": 1,
        "Nome": "Sem nome",
        "Peso": 1,
        "Preco": 1,
        "Quantidade": 1,
        "TipoCaixa": True,
        "TipoEnvelope": False,
    }


def test_merchandise_keeps_item_values():
    payload = format_merchandise(
        PackageItem(name="Book", height=2, length=20, width=14, weight=0.4, price=39.9, quantity=3)
    )

    assert payload["Nome"] == "Book"
    assert (payload["Altura"], payload["Comprimento"], payload["Largura"]) == (2, 20, 14)
    assert (payload["Peso"], payload["Preco"], payload["Quantidade"]) == (0.4, 39.9, 3)


def test_delivery_link(monkeypatch):
    assert delivery_link("req-9") == (
        '<a href="https://web.uptogo.com.br/acompanhar/lote/req-9">req-9</a>'
    )
    monkeypatch.setenv("UPTOGO_ENV", "dev")
    assert "http://localhost:3000/acompanhar/lote/req-9" in delivery_link("req-9")
