import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from safescan.core.logging_config import get_logger
from safescan.core.rules import DENYLISTS
from safescan.models import Profile

logger = get_logger(__name__)

DEFAULT_PRODUCT_API_URL = "https://world.openfoodfacts.org/api/v0/product/{barcode}.json"
DEFAULT_USER_AGENT = "SafeScan/0.1"


def _default_denylists() -> Dict[Profile, List[str]]:
    return {Profile(name): list(tokens) for name, tokens in DENYLISTS.items()}


@dataclass(frozen=True)
class ScanConfig:
    product_api_url: str = DEFAULT_PRODUCT_API_URL
    # None means the lookup waits forever (no timeout is applied)
    lookup_timeout_seconds: Optional[float] = None
    user_agent: str = DEFAULT_USER_AGENT
    default_profile: Profile = Profile.BABY
    camera_index: int = 0
    denylists: Dict[Profile, List[str]] = field(default_factory=_default_denylists)


def _as_optional_float(value: Any, default: Optional[float]) -> Optional[float]:
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            parsed = float(value.strip())
        except ValueError:
            return default
        return parsed if parsed > 0 else None
    return default


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _as_profile(value: Any, default: Profile) -> Profile:
    if isinstance(value, str):
        for profile in Profile:
            if profile.value.lower() == value.strip().lower():
                return profile
        logger.warning(f"Unknown profile '{value}', using {default.value}")
    return default


def _as_url_template(value: Any, default: str) -> str:
    if isinstance(value, str) and "{barcode}" in value:
        return value.strip()
    if value:
        logger.warning(f"Product API URL must contain '{{barcode}}', ignoring: {value}")
    return default


def _merge_denylists(raw: Any) -> Dict[Profile, List[str]]:
    denylists = _default_denylists()
    if not isinstance(raw, dict):
        return denylists
    for name, tokens in raw.items():
        try:
            profile = Profile(name)
        except ValueError:
            logger.warning(f"Ignoring denylist for unknown profile: {name}")
            continue
        if not isinstance(tokens, list) or not all(isinstance(t, str) for t in tokens):
            logger.warning(f"Denylist for {name} must be a list of strings, keeping defaults")
            continue
        denylists[profile] = [t.strip().lower() for t in tokens if t.strip()]
    return denylists


def _config_path() -> Path:
    override = os.getenv("SAFESCAN_CONFIG")
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[2] / "config" / "scan_config.json"


def load_scan_config(path: Optional[Path] = None) -> ScanConfig:
    """Load scanner settings from JSON, then apply SAFESCAN_* environment overrides."""
    load_dotenv(".env")
    config_path = path or _config_path()
    data: Dict[str, Any] = {}
    try:
        loaded = json.loads(config_path.read_text(encoding="utf-8"))
        if isinstance(loaded, dict):
            data = loaded
        else:
            logger.warning(f"Scan config at {config_path} is not an object, using defaults")
    except FileNotFoundError:
        pass
    except json.JSONDecodeError as exc:
        logger.warning(f"Invalid scan config JSON at {config_path}: {exc}")

    timeout_env = os.getenv("SAFESCAN_LOOKUP_TIMEOUT")
    timeout = _as_optional_float(data.get("lookup_timeout_seconds"), None)
    if timeout_env is not None:
        timeout = _as_optional_float(timeout_env, timeout)

    return ScanConfig(
        product_api_url=_as_url_template(
            os.getenv("SAFESCAN_PRODUCT_API_URL") or data.get("product_api_url"),
            DEFAULT_PRODUCT_API_URL
        ),
        lookup_timeout_seconds=timeout,
        user_agent=str(os.getenv("SAFESCAN_USER_AGENT") or data.get("user_agent") or DEFAULT_USER_AGENT),
        default_profile=_as_profile(
            os.getenv("SAFESCAN_DEFAULT_PROFILE") or data.get("default_profile"),
            Profile.BABY
        ),
        camera_index=_as_int(os.getenv("SAFESCAN_CAMERA_INDEX") or data.get("camera_index"), 0),
        denylists=_merge_denylists(data.get("denylists"))
    )
