"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutriscan.adapters.haptics import Haptics, NullHaptics
from nutriscan.adapters.off_client import HttpxOpenFoodFactsClient
from nutriscan.config import Settings
from nutriscan.services.products import ProductResolver
from nutriscan.services.scan_gate import ScanGate
from nutriscan.services.scoring import DEFAULT_MODEL, ScoringModel
from nutriscan.services.sessions import ScanSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    product_resolver: ProductResolver
    scoring_model: ScoringModel
    haptics: Haptics
    scan_session: ScanSession
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
        timeout=resolved_settings.off_timeout_seconds,
    )
    product_resolver = ProductResolver(off_client)
    haptics = NullHaptics()
    scan_session = ScanSession(
        gate=build_scan_gate(resolved_settings),
        resolver=product_resolver,
        haptics=haptics,
        scoring_model=DEFAULT_MODEL,
    )

    async def close_resources() -> None:
        scan_session.close()
        await off_client.close()

    return AppContainer(
        settings=resolved_settings,
        product_resolver=product_resolver,
        scoring_model=DEFAULT_MODEL,
        haptics=haptics,
        scan_session=scan_session,
        close_resources=close_resources,
    )


def build_scan_gate(settings: Settings) -> ScanGate:
    """Create a scan gate using configured thresholds."""
    return ScanGate(
        min_payload_length=settings.scan_min_payload_length,
        cooldown_seconds=settings.scan_cooldown_seconds,
    )
