"""Gate that turns a noisy detection stream into single accepted scans."""

import logging
import math
import threading
from dataclasses import dataclass, field

from nutriscan.domain.scans import (
    AcceptedScan,
    GateStatus,
    RawDetectionEvent,
    ScanGateState,
)

_logger = logging.getLogger(__name__)


@dataclass
class ScanGate:
    """State machine deciding which detections become an accepted scan.

    The gate accepts at most one scan and then stays locked until ``release``
    is called. Independently of the lock, two accepted scans must be at least
    ``cooldown_seconds`` apart, measured on the event timestamps.
    """

    min_payload_length: int = 6
    cooldown_seconds: float = 1.2
    _status: GateStatus = field(default=GateStatus.IDLE, init=False)
    _last_accepted_at: float | None = field(default=None, init=False)
    _last_accepted_payload: str | None = field(default=None, init=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    @property
    def status(self) -> GateStatus:
        """Current gate status."""
        return self._status

    def snapshot(self) -> ScanGateState:
        """Return a consistent copy of the gate state."""
        with self._lock:
            return ScanGateState(
                status=self._status,
                last_accepted_at=self._last_accepted_at,
                last_accepted_payload=self._last_accepted_payload,
            )

    def offer(self, event: RawDetectionEvent) -> AcceptedScan | None:
        """Run one transition and return the accepted scan, if any."""
        with self._lock:
            rejection = self._rejection_reason(event)
            if rejection is not None:
                _logger.debug(
                    "Scan rejected (%s): symbology=%s payload=%r",
                    rejection,
                    event.symbology,
                    event.payload,
                )
                return None
            self._status = GateStatus.LOCKED
            self._last_accepted_at = event.timestamp
            self._last_accepted_payload = event.payload
        _logger.info(
            "Scan accepted: symbology=%s payload=%s", event.symbology, event.payload
        )
        return AcceptedScan(symbology=event.symbology, payload=event.payload)

    def release(self) -> None:
        """Re-arm the gate, keeping the throttle history."""
        with self._lock:
            self._status = GateStatus.IDLE

    def _rejection_reason(self, event: RawDetectionEvent) -> str | None:
        if self._status is GateStatus.LOCKED:
            return "locked"
        if not math.isfinite(event.timestamp):
            return "invalid timestamp"
        if len(event.payload) < self.min_payload_length:
            return "short payload"
        if (
            self._last_accepted_at is not None
            and event.timestamp - self._last_accepted_at < self.cooldown_seconds
        ):
            return "cooldown"
        return None
