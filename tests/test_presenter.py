from safescan.models import Product, Profile, Verdict
from safescan.services import presenter


def test_warning_lists_matches_in_order():
    alert = presenter.verdict_alert(
        Product(name="Crackers", ingredients_text="sugar, water, salt"),
        Verdict(profile=Profile.BABY, matched=["sugar", "salt"])
    )
    assert alert.title == "⚠️ Warning"
    assert alert.message == "Product: Crackers\n\nDoes not match Baby mode: contains sugar, salt"
    assert alert.actions == ["OK"]


def test_safe_product_without_name():
    alert = presenter.verdict_alert(Product(), Verdict(profile=Profile.ALLERGY))
    assert alert.title == "✅ Safe"
    assert alert.message == "Product: unknown\n\nThis product is safe"


def test_not_found_mentions_barcode():
    alert = presenter.not_found_alert("000000000000")
    assert alert.title == "Not Found"
    assert alert.message == "Barcode 000000000000 not in database"
    assert alert.actions == ["Please try again"]


def test_lookup_failed_and_permission_alerts():
    failed = presenter.lookup_failed_alert()
    assert (failed.title, failed.message) == ("Error", "Connection Lost")

    denied = presenter.permission_denied_alert()
    assert denied.message == "No camera permission provided"
