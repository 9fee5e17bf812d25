"""Request and response models for the HTTP API."""

from typing import Any

from pydantic import BaseModel


class DetectionEventIn(BaseModel):
    """A raw decode forwarded from a capture surface."""

    symbology: str = "unknown"
    payload: str


class ScanEventResponse(BaseModel):
    """Outcome of feeding one detection into the scanner."""

    status: str
    result: dict[str, Any] | None = None


class ScannerState(BaseModel):
    """Current scanner state."""

    status: str
    listening: bool
    last_accepted_payload: str | None = None
    current: dict[str, Any] | None = None
