from safescan.core import rules
from safescan.models import Alert, Product, Verdict


def verdict_alert(product: Product, verdict: Verdict) -> Alert:
    """Alert shown for a found product: warning when any token matched, safe otherwise."""
    name = product.name or rules.UNKNOWN_PRODUCT_NAME
    if verdict.is_safe:
        title = rules.SAFE_TITLE
        detail = rules.SAFE_MESSAGE
    else:
        title = rules.WARNING_TITLE
        detail = f"Does not match {verdict.profile.value} mode: contains {', '.join(verdict.matched)}"
    return Alert(
        title=title,
        message=f"Product: {name}\n\n{detail}",
        actions=[rules.ACKNOWLEDGE_ACTION]
    )


def not_found_alert(barcode: str) -> Alert:
    return Alert(
        title=rules.NOT_FOUND_TITLE,
        message=f"Barcode {barcode} not in database",
        actions=[rules.RETRY_ACTION]
    )


def lookup_failed_alert() -> Alert:
    return Alert(
        title=rules.LOOKUP_FAILED_TITLE,
        message=rules.LOOKUP_FAILED_MESSAGE,
        actions=[rules.ACKNOWLEDGE_ACTION]
    )


def permission_denied_alert() -> Alert:
    return Alert(
        title=rules.PERMISSION_TITLE,
        message=rules.PERMISSION_DENIED_MESSAGE,
        actions=[rules.ACKNOWLEDGE_ACTION]
    )
