import asyncio
from typing import Optional, Protocol

from safescan.core.logging_config import get_logger
from safescan.models import Alert, OutcomeStatus, Profile, ScanEvent, ScanOutcome
from safescan.services import presenter
from safescan.services.product_service import ProductService
from safescan.services.scan_gate import ScanGate
from safescan.services.sources.base import ProductLookupError
from safescan.services.verdict_evaluator import VerdictEvaluator

logger = get_logger(__name__)


class AcknowledgementSurface(Protocol):
    async def present(self, alert: Alert) -> str:
        """Show the alert and resolve with the action the user picked."""
        ...


class EventSource(Protocol):
    def pause(self) -> None:
        ...

    def resume(self) -> None:
        ...


class ScanSession:
    """Drives scan -> lookup -> verdict -> acknowledge cycles, one at a time.

    Decode events that arrive while a cycle is running are dropped, and the
    event source is paused for the duration of the cycle. The gate is
    released exactly once per admitted cycle:

    * found / not found: after the user acknowledges the alert
    * lookup failure: before the error alert is shown
    * anything unexpected: on the way out, and the error propagates
    """

    def __init__(
        self,
        product_service: ProductService,
        evaluator: VerdictEvaluator,
        surface: AcknowledgementSurface,
        event_source: Optional[EventSource] = None,
        gate: Optional[ScanGate] = None,
        profile: Profile = Profile.BABY
    ):
        self.product_service = product_service
        self.evaluator = evaluator
        self.surface = surface
        self.event_source = event_source
        self.gate = gate or ScanGate()
        self._profile = Profile(profile)

    @property
    def profile(self) -> Profile:
        return self._profile

    def toggle_profile(self) -> Profile:
        self._profile = self._profile.toggled()
        logger.info(f"Profile switched to {self._profile.value}")
        return self._profile

    def on_decoded(self, event: ScanEvent) -> Optional["asyncio.Task[ScanOutcome]"]:
        """Camera callback. Must run on the event loop thread."""
        profile = self._admit(event)
        if profile is None:
            return None
        task = asyncio.ensure_future(self._run_cycle(event, profile))
        task.add_done_callback(_log_cycle_failure)
        return task

    async def process(self, event: ScanEvent) -> Optional[ScanOutcome]:
        """Awaitable variant of on_decoded; returns None when the event is dropped."""
        profile = self._admit(event)
        if profile is None:
            return None
        return await self._run_cycle(event, profile)

    def _admit(self, event: ScanEvent) -> Optional[Profile]:
        if not self.gate.try_admit():
            logger.debug(f"Dropped barcode {event.data}: scan already in progress")
            return None
        logger.info(f"Scanning barcode {event.data} ({event.format or 'unknown format'}) as {self._profile.value}")
        if self.event_source is not None:
            self.event_source.pause()
        return self._profile

    def _release(self) -> None:
        self.gate.release()
        if self.event_source is not None:
            self.event_source.resume()

    async def _run_cycle(self, event: ScanEvent, profile: Profile) -> ScanOutcome:
        released = False
        try:
            try:
                result = await asyncio.to_thread(self.product_service.lookup, event.data)
            except ProductLookupError as exc:
                logger.error(f"Scan of {event.data} failed: {exc.reason}")
                self._release()
                released = True
                alert = presenter.lookup_failed_alert()
                action = await self.surface.present(alert)
                return ScanOutcome(
                    event=event,
                    profile=profile,
                    status=OutcomeStatus.FAILED,
                    alert=alert,
                    acknowledged_with=action
                )

            if result.found:
                verdict = self.evaluator.evaluate(profile, result.product.ingredients_text)
                alert = presenter.verdict_alert(result.product, verdict)
                status = OutcomeStatus.FOUND
                logger.info(f"Verdict for {event.data}: {'safe' if verdict.is_safe else verdict.matched}")
            else:
                verdict = None
                alert = presenter.not_found_alert(event.data)
                status = OutcomeStatus.NOT_FOUND

            action = await self.surface.present(alert)
            return ScanOutcome(
                event=event,
                profile=profile,
                status=status,
                verdict=verdict,
                alert=alert,
                acknowledged_with=action
            )
        finally:
            if not released:
                self._release()


def _log_cycle_failure(task: "asyncio.Task[ScanOutcome]") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Scan cycle crashed: {exc!r}")
