"""Product lookup domain models."""

from collections.abc import Mapping
from dataclasses import dataclass, field

PRODUCT_FIELDS = (
    "code",
    "product_name",
    "brands",
    "image_url",
    "nutriscore_grade",
    "nutriments",
    "quantity",
    "categories",
)


@dataclass(frozen=True)
class ProductRecord:
    """Normalized product data from Open Food Facts."""

    barcode: str
    name: str | None = None
    brand: str | None = None
    image_url: str | None = None
    nutri_score_grade: str | None = None
    quantity: str | None = None
    categories: str | None = None
    nutrients_per_100g: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Found:
    """Lookup succeeded."""

    record: ProductRecord


@dataclass(frozen=True)
class NotFound:
    """The product database does not know this barcode."""

    barcode: str


@dataclass(frozen=True)
class TransportError:
    """The lookup could not be completed."""

    reason: str


LookupOutcome = Found | NotFound | TransportError
