import pytest
from safescan.core.settings import ScanConfig
from safescan.models import LookupResult, LookupStatus, Product
from safescan.services.product_service import ProductService
from safescan.services.scan_gate import ScanGate
from safescan.services.sources.base import ProductSource
from safescan.services.verdict_evaluator import VerdictEvaluator


class FakeSource(ProductSource):
    """In-memory product source; unknown barcodes are not found."""
    name = "Fake"

    def __init__(self, products=None, error=None):
        self.products = products or {}
        self.error = error
        self.calls = []

    def lookup(self, barcode):
        self.calls.append(barcode)
        if self.error is not None:
            raise self.error
        product = self.products.get(barcode)
        if product is None:
            return LookupResult(status=LookupStatus.NOT_FOUND, barcode=barcode)
        return LookupResult(status=LookupStatus.FOUND, barcode=barcode, product=product)


class RecordingSurface:
    """Acknowledges every alert with its first action, noting whether the gate was busy."""

    def __init__(self, gate=None):
        self.gate = gate
        self.alerts = []
        self.gate_busy_while_shown = []

    async def present(self, alert):
        self.alerts.append(alert)
        if self.gate is not None:
            self.gate_busy_while_shown.append(self.gate.is_busy)
        return alert.actions[0]


class RecordingEventSource:
    def __init__(self):
        self.calls = []

    def pause(self):
        self.calls.append("pause")

    def resume(self):
        self.calls.append("resume")


@pytest.fixture
def evaluator():
    """Fixture for VerdictEvaluator with the default denylists."""
    return VerdictEvaluator()


@pytest.fixture
def gate():
    return ScanGate()


@pytest.fixture
def fake_source():
    return FakeSource(products={
        "3017620422003": Product(name="Hazelnut spread", ingredients_text="Sugar, palm oil, hazelnuts, skimmed MILK powder"),
        "5000112637922": Product(name="Rice drink", ingredients_text="water, rice starch"),
        "012345678905": Product(name="Crackers", ingredients_text="sugar, water, salt"),
    })


@pytest.fixture
def product_service(fake_source, evaluator):
    return ProductService(source=fake_source, evaluator=evaluator, config=ScanConfig())
