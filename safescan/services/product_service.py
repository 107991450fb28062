import time
from typing import Optional

from safescan.core.logging_config import get_logger
from safescan.core.settings import ScanConfig, load_scan_config
from safescan.models import LookupResult, Profile, ScanResponse
from safescan.services import presenter
from safescan.services.sources.base import ProductLookupError, ProductSource
from safescan.services.sources.openfoodfacts import OpenFoodFactsSource
from safescan.services.verdict_evaluator import VerdictEvaluator

logger = get_logger(__name__)


class ProductService:
    def __init__(
        self,
        source: Optional[ProductSource] = None,
        evaluator: Optional[VerdictEvaluator] = None,
        config: Optional[ScanConfig] = None
    ):
        self.config = config or load_scan_config()
        self.source = source or OpenFoodFactsSource(
            url_template=self.config.product_api_url,
            timeout=self.config.lookup_timeout_seconds,
            user_agent=self.config.user_agent
        )
        self.evaluator = evaluator or VerdictEvaluator(self.config.denylists)

    def lookup(self, barcode: str) -> LookupResult:
        """
        Resolve a barcode through the configured source.
        Every failure, expected or not, surfaces as ProductLookupError.
        """
        start = time.time()
        try:
            result = self.source.lookup(barcode)
        except ProductLookupError as exc:
            logger.error(f"Lookup via {self.source.name} failed for {barcode}: {exc.reason}")
            raise
        except Exception as exc:
            logger.error(f"Unexpected error from {self.source.name} for {barcode}: {exc}")
            raise ProductLookupError(barcode, str(exc)) from exc

        elapsed = time.time() - start
        logger.info(f"⏱️  {self.source.name} lookup for {barcode}: {result.status.value} in {elapsed:.2f}s")
        return result

    def scan(self, barcode: str, profile: Profile) -> ScanResponse:
        """Lookup, verdict and alert in one call, for stateless callers such as the API."""
        result = self.lookup(barcode)
        if not result.found:
            return ScanResponse(
                barcode=barcode,
                profile=profile,
                status=result.status,
                alert=presenter.not_found_alert(barcode)
            )

        verdict = self.evaluator.evaluate(profile, result.product.ingredients_text)
        return ScanResponse(
            barcode=barcode,
            profile=profile,
            status=result.status,
            product_name=result.product.name,
            ingredients_text=result.product.ingredients_text,
            matched=verdict.matched,
            safe=verdict.is_safe,
            alert=presenter.verdict_alert(result.product, verdict)
        )


product_service = ProductService()
