"""Scan domain models."""

import time
from dataclasses import dataclass, field
from enum import Enum


class GateStatus(str, Enum):
    """Scan gate states."""

    IDLE = "idle"
    LOCKED = "locked"


@dataclass(frozen=True)
class RawDetectionEvent:
    """A single decode reported by the capture surface."""

    symbology: str
    payload: str
    timestamp: float = field(default_factory=time.monotonic)


@dataclass(frozen=True)
class AcceptedScan:
    """A barcode read that passed every gate check."""

    symbology: str
    payload: str


@dataclass(frozen=True)
class ScanGateState:
    """Snapshot of a scan gate."""

    status: GateStatus
    last_accepted_at: float | None
    last_accepted_payload: str | None
