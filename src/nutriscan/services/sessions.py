"""Scan session tying the gate, resolver and scorer together."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from nutriscan.adapters.haptics import Haptics
from nutriscan.domain.products import Found
from nutriscan.domain.scans import AcceptedScan, RawDetectionEvent
from nutriscan.services.products import ProductResolver
from nutriscan.services.scan_gate import ScanGate
from nutriscan.services.scoring import DEFAULT_MODEL, ScoringModel
from nutriscan.services.views import ScanResult, build_failure, build_product_view

_logger = logging.getLogger(__name__)


class Presenter(Protocol):
    """Receives finished scan results."""

    async def show(self, result: ScanResult) -> None:
        """Display a product or a lookup failure."""


@dataclass
class _InFlight:
    scan: AcceptedScan
    alive: bool = True


@dataclass
class ScanSession:
    """Consumer of the scan gate, one per scanning screen.

    Acceptance flips ``listening`` off before any awaiting happens, so the
    capture surface stops feeding events while the lookup runs. ``dismiss``
    re-arms the gate; ``close`` abandons any lookup still in flight.
    """

    gate: ScanGate
    resolver: ProductResolver
    haptics: Haptics
    presenter: Presenter | None = None
    scoring_model: ScoringModel = DEFAULT_MODEL
    clock: Callable[[], float] = time.monotonic
    listening: bool = True
    closed: bool = False
    current: ScanResult | None = None
    _in_flight: _InFlight | None = field(default=None, init=False, repr=False)

    async def handle_event(self, event: RawDetectionEvent) -> ScanResult | None:
        """Feed one detection through the pipeline."""
        if not self.listening or self.closed:
            return None
        accepted = self.gate.offer(event)
        if accepted is None:
            return None
        self.listening = False
        request = _InFlight(scan=accepted)
        self._in_flight = request

        try:
            await self.haptics.pulse()
        except Exception:
            _logger.warning("Haptic pulse failed", exc_info=True)

        if not request.alive:
            _logger.info("Skipping lookup for abandoned scan=%s", accepted.payload)
            return None
        outcome = await self.resolver.resolve(accepted.payload)
        if not request.alive:
            _logger.info("Discarding stale lookup for barcode=%s", accepted.payload)
            return None
        self._in_flight = None

        if isinstance(outcome, Found):
            result = build_product_view(outcome.record, self.scoring_model)
        else:
            result = build_failure(accepted.payload, outcome)
        self.current = result
        if self.presenter is not None:
            await self.presenter.show(result)
        return result

    def detection(self, symbology: str, payload: str) -> RawDetectionEvent:
        """Stamp a decode reported by the capture surface with the session clock."""
        return RawDetectionEvent(
            symbology=symbology, payload=payload, timestamp=self.clock()
        )

    def dismiss(self) -> None:
        """Return from a result to scanning."""
        if self.closed:
            return
        self._abandon_in_flight()
        self.current = None
        self.gate.release()
        self.listening = True

    def close(self) -> None:
        """Tear the session down, dropping any pending lookup result."""
        self._abandon_in_flight()
        self.closed = True
        self.listening = False
        self.current = None

    def _abandon_in_flight(self) -> None:
        if self._in_flight is not None:
            self._in_flight.alive = False
            self._in_flight = None
