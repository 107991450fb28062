import threading

from safescan.core.logging_config import get_logger

logger = get_logger(__name__)


class ScanGate:
    """Admits at most one scan cycle at a time.

    The busy flag flips inside ``try_admit`` itself, under a lock, so a
    second decode event delivered before the first cycle finishes is
    refused even if it arrives from another thread.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._busy = False

    @property
    def is_busy(self) -> bool:
        return self._busy

    def try_admit(self) -> bool:
        """Mark the gate busy and return True, or return False if a cycle is already running."""
        with self._lock:
            if self._busy:
                return False
            self._busy = True
        logger.debug("Scan gate admitted a cycle")
        return True

    def release(self) -> None:
        """Mark the gate idle. Safe to call when already idle."""
        with self._lock:
            self._busy = False
        logger.debug("Scan gate released")
