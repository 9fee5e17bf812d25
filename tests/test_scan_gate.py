"""Tests for the scan gate state machine."""

from nutriscan.domain.scans import AcceptedScan, GateStatus, RawDetectionEvent
from nutriscan.services.scan_gate import ScanGate


def _event(payload: str, at: float, symbology: str = "ean13") -> RawDetectionEvent:
    return RawDetectionEvent(symbology=symbology, payload=payload, timestamp=at)


def test_accepts_first_valid_event_and_locks() -> None:
    gate = ScanGate()

    accepted = gate.offer(_event("3017620422003", at=10.0))

    assert accepted == AcceptedScan(symbology="ean13", payload="3017620422003")
    snapshot = gate.snapshot()
    assert snapshot.status is GateStatus.LOCKED
    assert snapshot.last_accepted_at == 10.0
    assert snapshot.last_accepted_payload == "3017620422003"


def test_short_and_empty_payloads_never_emit() -> None:
    gate = ScanGate()

    for index, payload in enumerate(["", "1", "12345", "abcde"]):
        assert gate.offer(_event(payload, at=float(index * 5))) is None

    assert gate.status is GateStatus.IDLE
    assert gate.snapshot().last_accepted_at is None


def test_six_character_payload_is_accepted() -> None:
    gate = ScanGate()

    assert gate.offer(_event("123456", at=0.0)) is not None


def test_locked_gate_rejects_everything_until_release() -> None:
    gate = ScanGate()
    assert gate.offer(_event("3017620422003", at=0.0)) is not None

    for step in range(500):
        assert gate.offer(_event(f"40000000{step:05d}", at=2.0 + step)) is None

    gate.release()

    assert gate.offer(_event("5449000000996", at=600.0)) is not None


def test_release_keeps_throttle_history() -> None:
    gate = ScanGate()
    gate.offer(_event("3017620422003", at=1.0))

    gate.release()

    snapshot = gate.snapshot()
    assert snapshot.status is GateStatus.IDLE
    assert snapshot.last_accepted_at == 1.0
    assert snapshot.last_accepted_payload == "3017620422003"


def test_cooldown_blocks_second_scan_within_window() -> None:
    gate = ScanGate()
    assert gate.offer(_event("3017620422003", at=1.0)) is not None
    gate.release()

    assert gate.offer(_event("5449000000996", at=2.1)) is None
    assert gate.status is GateStatus.IDLE
    assert gate.offer(_event("5449000000996", at=2.2)) is not None


def test_rejected_events_do_not_change_state() -> None:
    gate = ScanGate()
    gate.offer(_event("3017620422003", at=1.0))
    gate.release()
    before = gate.snapshot()

    gate.offer(_event("short", at=5.0))
    gate.offer(_event("5449000000996", at=1.5))

    assert gate.snapshot() == before


def test_custom_thresholds() -> None:
    gate = ScanGate(min_payload_length=8, cooldown_seconds=0.5)

    assert gate.offer(_event("1234567", at=0.0)) is None
    assert gate.offer(_event("12345678", at=0.0)) is not None
    gate.release()
    assert gate.offer(_event("87654321", at=0.4)) is None
    assert gate.offer(_event("87654321", at=0.5)) is not None


def test_gates_do_not_share_state() -> None:
    first = ScanGate()
    second = ScanGate()

    first.offer(_event("3017620422003", at=0.0))

    assert second.status is GateStatus.IDLE
    assert second.offer(_event("3017620422003", at=0.1)) is not None


def test_non_finite_timestamps_are_rejected() -> None:
    gate = ScanGate()

    assert gate.offer(_event("3017620422003", at=float("nan"))) is None
    assert gate.offer(_event("3017620422003", at=float("inf"))) is None
    assert gate.snapshot().last_accepted_at is None

    assert gate.offer(_event("3017620422003", at=0.0)) is not None
    gate.release()
    assert gate.offer(_event("5449000000996", at=0.5)) is None
