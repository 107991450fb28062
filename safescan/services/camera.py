import threading
from typing import Any, Callable, List, Optional

from safescan.core.logging_config import get_logger
from safescan.core.rules import SUPPORTED_SYMBOLOGIES
from safescan.models import ScanEvent

logger = get_logger(__name__)


class CameraPermissionError(Exception):
    """The camera could not be opened (access refused or no device)."""


def decode_frame(frame: Any) -> List[ScanEvent]:
    """
    Decode retail barcodes from an image.

    Args:
        frame: A numpy array (OpenCV frame) or PIL image

    Returns:
        One ScanEvent per EAN-13 / UPC-A / UPC-E barcode found, in pyzbar order
    """
    # Imported lazily: pyzbar needs the native zbar library at import time
    from pyzbar.pyzbar import ZBarSymbol, decode

    symbols = [getattr(ZBarSymbol, name) for name in SUPPORTED_SYMBOLOGIES]
    events = []
    for barcode in decode(frame, symbols=symbols):
        if barcode.type not in SUPPORTED_SYMBOLOGIES:
            continue
        try:
            data = barcode.data.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning(f"Skipping undecodable {barcode.type} payload")
            continue
        events.append(ScanEvent(data=data, format=barcode.type))
    return events


class WebcamScanner:
    """Reads frames from a webcam on a background thread and reports decoded barcodes.

    While paused no frames are decoded and no events are emitted.
    """

    def __init__(
        self,
        on_decoded: Callable[[ScanEvent], None],
        device_index: int = 0,
        frame_interval: float = 0.05
    ):
        self.on_decoded = on_decoded
        self.device_index = device_index
        self.frame_interval = frame_interval
        self._capture = None
        self._thread: Optional[threading.Thread] = None
        self._paused = threading.Event()
        self._stopped = threading.Event()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    def start(self) -> None:
        import cv2

        capture = cv2.VideoCapture(self.device_index)
        if not capture.isOpened():
            capture.release()
            raise CameraPermissionError(f"Cannot open camera device {self.device_index}")

        self._capture = capture
        self._stopped.clear()
        self._thread = threading.Thread(target=self._loop, name="webcam-scanner", daemon=True)
        self._thread.start()
        logger.info(f"📷 Webcam {self.device_index} started")

    def pause(self) -> None:
        self._paused.set()

    def resume(self) -> None:
        self._paused.clear()

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=2)
        if self._capture is not None:
            self._capture.release()
            self._capture = None
        logger.info("Webcam stopped")

    def _loop(self) -> None:
        while not self._stopped.is_set():
            if self._paused.is_set():
                self._stopped.wait(self.frame_interval)
                continue
            ok, frame = self._capture.read()
            if not ok:
                logger.error("Webcam returned no frame, stopping scanner")
                self._stopped.set()
                break
            self._emit(frame)
            self._stopped.wait(self.frame_interval)

    def _emit(self, frame: Any) -> None:
        for event in decode_frame(frame):
            if self._paused.is_set():
                return
            self.on_decoded(event)
