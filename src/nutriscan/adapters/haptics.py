"""Haptic feedback adapters."""

import logging
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)


class Haptics(Protocol):
    """Interface for device haptic feedback."""

    async def pulse(self) -> None:
        """Trigger a short haptic pulse."""


@dataclass
class NullHaptics(Haptics):
    """Haptics for devices without a vibration motor."""

    async def pulse(self) -> None:
        """Log the pulse instead of vibrating."""
        _logger.debug("Haptic pulse skipped: no device")
