from typing import Any, Dict, Optional

import requests

from safescan.core.logging_config import get_logger
from safescan.core.settings import DEFAULT_PRODUCT_API_URL, DEFAULT_USER_AGENT
from safescan.models import LookupResult, LookupStatus, Product
from safescan.services.sources.base import ProductLookupError, ProductSource

logger = get_logger(__name__)

FOUND_STATUS = 1


class OpenFoodFactsSource(ProductSource):
    name = "OpenFoodFacts"

    def __init__(
        self,
        url_template: str = DEFAULT_PRODUCT_API_URL,
        timeout: Optional[float] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None
    ):
        self.url_template = url_template
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})

    def lookup(self, barcode: str) -> LookupResult:
        url = self.url_template.format(barcode=barcode)
        logger.debug(f"Open Food Facts lookup: {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise ProductLookupError(barcode, str(exc)) from exc
        except ValueError as exc:
            raise ProductLookupError(barcode, f"invalid JSON body: {exc}") from exc

        if not isinstance(payload, dict):
            raise ProductLookupError(barcode, "response body is not a JSON object")

        return _parse_payload(barcode, payload)


def _parse_payload(barcode: str, payload: Dict[str, Any]) -> LookupResult:
    if payload.get("status") != FOUND_STATUS:
        return LookupResult(status=LookupStatus.NOT_FOUND, barcode=barcode)

    product = payload.get("product")
    if not isinstance(product, dict):
        raise ProductLookupError(barcode, "found status without a product record")

    return LookupResult(
        status=LookupStatus.FOUND,
        barcode=barcode,
        product=Product(
            name=_as_text(barcode, product, "product_name"),
            ingredients_text=_as_text(barcode, product, "ingredients_text")
        )
    )


def _as_text(barcode: str, product: Dict[str, Any], field: str) -> Optional[str]:
    value = product.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ProductLookupError(barcode, f"{field} is not a string")
    return value if value.strip() else None
