from abc import ABC, abstractmethod
from safescan.models import LookupResult


class ProductLookupError(Exception):
    def __init__(self, barcode: str, reason: str):
        super().__init__(f"Lookup failed for barcode {barcode}: {reason}")
        self.barcode = barcode
        self.reason = reason


class ProductSource(ABC):
    name: str = "Unknown"

    @abstractmethod
    def lookup(self, barcode: str) -> LookupResult:
        """
        Resolve a barcode to a product record.
        Returns a found or not-found `LookupResult`; raises
        `ProductLookupError` on connectivity or parse failures.
        """
        pass
