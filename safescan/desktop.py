"""
Desktop scanner: webcam frames in, verdicts printed to the console.

Run with ``safescan-desktop`` (or ``python -m safescan.desktop``). While no
alert is open, type ``p`` then Enter to switch profile.
"""
import asyncio
import sys
from typing import List, Optional

from safescan.core.logging_config import get_logger, setup_logging
from safescan.core.settings import load_scan_config
from safescan.models import Alert
from safescan.services import presenter
from safescan.services.camera import CameraPermissionError, WebcamScanner
from safescan.services.product_service import ProductService
from safescan.services.scan_session import ScanSession

logger = get_logger(__name__)


class ConsoleSurface:
    """Prints alerts; console lines fed in through `feed` pick the dismissal action."""

    def __init__(self) -> None:
        self._pending: Optional[asyncio.Future] = None
        self._actions: List[str] = []
        self._lock: Optional[asyncio.Lock] = None

    async def present(self, alert: Alert) -> str:
        # One alert on screen at a time; later alerts wait their turn
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            return await self._show(alert)

    async def _show(self, alert: Alert) -> str:
        print(f"\n=== {alert.title} ===\n{alert.message}\n")
        for index, action in enumerate(alert.actions, 1):
            print(f"  [{index}] {action}")
        self._actions = list(alert.actions)
        self._pending = asyncio.get_running_loop().create_future()
        try:
            return await self._pending
        finally:
            self._pending = None

    def feed(self, line: str) -> bool:
        """Returns True when the line was consumed by an open alert."""
        if self._pending is None or self._pending.done():
            return False
        choice = line.strip()
        if not choice:
            action = self._actions[0]
        elif choice.isdigit() and 1 <= int(choice) <= len(self._actions):
            action = self._actions[int(choice) - 1]
        else:
            print(f"Pick 1-{len(self._actions)}, or press Enter for '{self._actions[0]}'")
            return True
        self._pending.set_result(action)
        return True


async def _read_console(session: ScanSession, surface: ConsoleSurface) -> None:
    while True:
        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            return
        if surface.feed(line):
            continue
        if line.strip().lower() == "p":
            print(f"Current Mode: {session.toggle_profile().value}")


async def run_scanner(device_index: Optional[int] = None) -> int:
    config = load_scan_config()
    service = ProductService(config=config)
    surface = ConsoleSurface()
    session = ScanSession(
        product_service=service,
        evaluator=service.evaluator,
        surface=surface,
        profile=config.default_profile
    )

    loop = asyncio.get_running_loop()
    scanner = WebcamScanner(
        on_decoded=lambda event: loop.call_soon_threadsafe(session.on_decoded, event),
        device_index=config.camera_index if device_index is None else device_index
    )
    session.event_source = scanner

    try:
        scanner.start()
    except CameraPermissionError as exc:
        alert = presenter.permission_denied_alert()
        logger.error(f"{exc}")
        print(f"{alert.title}: {alert.message}")
        return 1

    print(f"Current Mode: {session.profile.value}. Place barcode in front of the camera.")
    try:
        await _read_console(session, surface)
    finally:
        scanner.stop()
    return 0


def main() -> None:
    setup_logging()
    try:
        sys.exit(asyncio.run(run_scanner()))
    except KeyboardInterrupt:
        logger.info("🛑 Scanner stopped")


if __name__ == "__main__":
    main()
