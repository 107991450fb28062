from typing import Dict, List, Tuple

# --- Denylist Definitions ---
# Ingredient tokens considered unsafe for each profile.
# Order matters: verdicts report matches in this order.
DENYLISTS: Dict[str, List[str]] = {
    "Baby": ["honey", "sugar", "salt", "palm oil"],
    "Allergy": ["peanuts", "milk", "egg", "gluten"],
}

# --- Barcode Symbologies ---
# Retail 1-D formats the camera is allowed to report (pyzbar type names)
SUPPORTED_SYMBOLOGIES: Tuple[str, ...] = ("EAN13", "UPCA", "UPCE")

# --- Alert Texts ---
WARNING_TITLE = "⚠️ Warning"
SAFE_TITLE = "✅ Safe"
SAFE_MESSAGE = "This product is safe"
UNKNOWN_PRODUCT_NAME = "unknown"
ACKNOWLEDGE_ACTION = "OK"

NOT_FOUND_TITLE = "Not Found"
RETRY_ACTION = "Please try again"

LOOKUP_FAILED_TITLE = "Error"
LOOKUP_FAILED_MESSAGE = "Connection Lost"

PERMISSION_TITLE = "Camera Permission Required"
PERMISSION_DENIED_MESSAGE = "No camera permission provided"
