"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from nutriscan.adapters.haptics import Haptics
from nutriscan.adapters.off_client import OpenFoodFactsClient
from nutriscan.config import Settings
from nutriscan.containers import AppContainer, build_scan_gate
from nutriscan.services.products import ProductResolver
from nutriscan.services.scoring import DEFAULT_MODEL
from nutriscan.services.sessions import ScanSession
from nutriscan.services.views import ScanResult


def product_payload(**overrides: object) -> dict[str, object]:
    product: dict[str, object] = {
        "code": "3017620422003",
        "product_name": "Hazelnut spread",
        "brands": "Ferrero",
        "image_url": "https://images.example/nutella.jpg",
        "nutriscore_grade": "e",
        "quantity": "400 g",
        "categories": "Spreads, Sweet spreads",
        "nutriments": {
            "energy-kcal_100g": 539,
            "proteins_100g": 6.3,
            "sugars_100g": 56.3,
            "fat_100g": 30.9,
            "energy-kcal_unit": "kcal",
        },
    }
    product.update(overrides)
    return {"code": "3017620422003", "status": 1, "product": product}


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake Open Food Facts client with in-memory responses."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {"3017620422003": product_payload()}
    )
    error: Exception | None = None
    calls: list[tuple[str, tuple[str, ...]]] = field(default_factory=list)

    async def get_product(
        self, barcode: str, fields: Sequence[str] = ()
    ) -> dict[str, object]:
        self.calls.append((barcode, tuple(fields)))
        if self.error is not None:
            raise self.error
        return self.products.get(
            barcode, {"code": barcode, "status": 0, "status_verbose": "not found"}
        )


@dataclass
class RecordingHaptics(Haptics):
    """Haptics that count pulses, optionally failing."""

    pulses: int = 0
    fail: bool = False

    async def pulse(self) -> None:
        self.pulses += 1
        if self.fail:
            raise RuntimeError("vibrator unavailable")


@dataclass
class RecordingPresenter:
    """Presenter that keeps every shown result."""

    shown: list[ScanResult] = field(default_factory=list)

    async def show(self, result: ScanResult) -> None:
        self.shown.append(result)


@dataclass
class FakeClock:
    """Manually advanced monotonic clock."""

    now: float = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    return Settings(off_base_url="https://off.test", environment="test")


@pytest.fixture
def off_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def haptics() -> RecordingHaptics:
    return RecordingHaptics()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def container(
    settings: Settings,
    off_client: FakeOpenFoodFactsClient,
    haptics: RecordingHaptics,
    clock: FakeClock,
) -> AppContainer:
    resolver = ProductResolver(off_client)
    scan_session = ScanSession(
        gate=build_scan_gate(settings),
        resolver=resolver,
        haptics=haptics,
        clock=clock,
    )

    async def close_resources() -> None:
        scan_session.close()

    return AppContainer(
        settings=settings,
        product_resolver=resolver,
        scoring_model=DEFAULT_MODEL,
        haptics=haptics,
        scan_session=scan_session,
        close_resources=close_resources,
    )
