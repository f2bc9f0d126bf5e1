import pytest

from uptogo_shipping.guards import allow_delivery_cancel, allow_delivery_create, is_settings_valid
from uptogo_shipping.models import InMemoryShippingMethod, Settings


@pytest.mark.parametrize("field", ["api_key", "store_id", "store_location"])
@pytest.mark.parametrize("blank", ["", " ", "   \t"])
def test_blank_setting_invalidates(settings, field, blank):
    setattr(settings, field, blank)
    assert is_settings_valid(settings) is False


def test_complete_settings_are_valid(settings):
    assert is_settings_valid(settings) is True
    assert is_settings_valid(None) is False


def test_create_allowed_after_rate_selection(settings, order, shipping_method):
    assert allow_delivery_create(settings, order, shipping_method) is True


def test_create_refused_when_request_exists(settings, order, shipping_method):
    shipping_method.add_meta("Request", "req-9")
    assert allow_delivery_create(settings, order, shipping_method) is False


@pytest.mark.parametrize("missing", ["Inventory", "Proposal"])
def test_create_refused_without_selected_rate(settings, order, shipping_method, missing):
    shipping_method.delete_meta(missing)
    assert allow_delivery_create(settings, order, shipping_method) is False


def test_create_refused_without_postcode_or_method(settings, order, shipping_method):
    assert allow_delivery_create(settings, order, None) is False
    order.shipping_postcode = ""
    assert allow_delivery_create(settings, order, shipping_method) is False
    order.shipping_postcode = "   "
    assert allow_delivery_create(settings, order, shipping_method) is False


def test_create_refused_with_invalid_settings(order, shipping_method):
    assert allow_delivery_create(Settings(api_key="k"), order, shipping_method) is False


def test_cancel_requires_request(settings, shipping_method):
    assert allow_delivery_cancel(settings, shipping_method) is False
    shipping_method.add_meta("Request", "req-9")
    assert allow_delivery_cancel(settings, shipping_method) is True


def test_cancel_refused_without_method_or_settings(settings):
    method = InMemoryShippingMethod("x", {"Request": "req-9"})
    assert allow_delivery_cancel(settings, None) is False
    assert allow_delivery_cancel(Settings(), method) is False
