import pytest
import requests
from unittest.mock import MagicMock
from safescan.models import LookupStatus
from safescan.services.sources.base import ProductLookupError
from safescan.services.sources.openfoodfacts import OpenFoodFactsSource


def make_source(payload=None, get_error=None, json_error=None, http_error=None):
    session = MagicMock()
    session.headers = {}
    response = MagicMock()
    if http_error is not None:
        response.raise_for_status.side_effect = http_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    if get_error is not None:
        session.get.side_effect = get_error
    else:
        session.get.return_value = response
    return OpenFoodFactsSource(session=session), session


def test_found_product_is_parsed():
    source, session = make_source({
        "status": 1,
        "product": {"product_name": "Nutella", "ingredients_text": "Sugar, palm oil, hazelnuts"}
    })

    result = source.lookup("3017620422003")

    assert result.status == LookupStatus.FOUND
    assert result.found
    assert result.product.name == "Nutella"
    assert result.product.ingredients_text == "Sugar, palm oil, hazelnuts"
    session.get.assert_called_once_with(
        "https://world.openfoodfacts.org/api/v0/product/3017620422003.json",
        timeout=None
    )


def test_sends_user_agent():
    source, session = make_source({"status": 0})
    assert session.headers["User-Agent"] == "SafeScan/0.1"


def test_missing_fields_become_none():
    source, _ = make_source({"status": 1, "product": {"product_name": "", "code": "123"}})

    result = source.lookup("123")

    assert result.found
    assert result.product.name is None
    assert result.product.ingredients_text is None


def test_status_other_than_one_is_not_found():
    source, _ = make_source({"status": 0, "status_verbose": "product not found"})

    result = source.lookup("000000000000")

    assert result.status == LookupStatus.NOT_FOUND
    assert result.product is None
    assert result.barcode == "000000000000"


def test_connection_error_raises_lookup_error():
    source, _ = make_source(get_error=requests.ConnectionError("Connection refused"))

    with pytest.raises(ProductLookupError) as exc_info:
        source.lookup("111")

    assert exc_info.value.barcode == "111"
    assert "Connection refused" in exc_info.value.reason


def test_http_error_raises_lookup_error():
    source, _ = make_source({"status": 1}, http_error=requests.HTTPError("503 Server Error"))

    with pytest.raises(ProductLookupError):
        source.lookup("111")


def test_invalid_json_raises_lookup_error():
    source, _ = make_source(json_error=ValueError("Expecting value"))

    with pytest.raises(ProductLookupError) as exc_info:
        source.lookup("111")

    assert "invalid JSON" in exc_info.value.reason


@pytest.mark.parametrize("payload", [["not", "an", "object"], {"status": 1, "product": None}])
def test_malformed_payload_raises_lookup_error(payload):
    source, _ = make_source(payload)

    with pytest.raises(ProductLookupError):
        source.lookup("111")


def test_custom_url_template_and_timeout():
    session = MagicMock()
    session.headers = {}
    session.get.return_value.json.return_value = {"status": 0}
    source = OpenFoodFactsSource(
        url_template="https://example.test/product/{barcode}",
        timeout=4.0,
        session=session
    )

    source.lookup("42")

    session.get.assert_called_once_with("https://example.test/product/42", timeout=4.0)


@pytest.mark.parametrize("product", [
    {"product_name": "X", "ingredients_text": ["peanuts", "milk"]},
    {"product_name": "X", "ingredients_text": 42},
    {"product_name": {"en": "X"}, "ingredients_text": "peanuts"},
])
def test_non_string_fields_raise_lookup_error(product):
    source, _ = make_source({"status": 1, "product": product})

    with pytest.raises(ProductLookupError) as exc_info:
        source.lookup("111")

    assert "is not a string" in exc_info.value.reason


def test_null_fields_become_none():
    source, _ = make_source({"status": 1, "product": {"product_name": None, "ingredients_text": None}})

    result = source.lookup("111")

    assert result.product.name is None
    assert result.product.ingredients_text is None
