"""Presentation models for scan results."""

from dataclasses import dataclass

from nutriscan.domain.products import NotFound, ProductRecord, TransportError
from nutriscan.domain.scoring import MISSING, HealthScore, NutritionSummary
from nutriscan.services.scoring import (
    DEFAULT_MODEL,
    ScoringModel,
    score,
    summarize,
)

SCAN_ANOTHER = "Scan another"
GO_BACK = "Go back"


@dataclass(frozen=True)
class ProductView:
    """Everything the details screen shows for a product."""

    barcode: str
    title: str
    subtitle: str
    image_url: str | None
    health_score: HealthScore
    nutri_score: str
    nutrition: NutritionSummary
    categories: str | None
    action: str = SCAN_ANOTHER

    def as_dict(self) -> dict[str, object]:
        """Serialize the view for JSON responses."""
        return {
            "barcode": self.barcode,
            "title": self.title,
            "subtitle": self.subtitle,
            "image_url": self.image_url,
            "health_score": self.health_score.value,
            "score_breakdown": {
                "protein_contribution": self.health_score.breakdown.protein_contribution,
                "sugar_penalty": self.health_score.breakdown.sugar_penalty,
                "fat_penalty": self.health_score.breakdown.fat_penalty,
            },
            "nutri_score": self.nutri_score,
            "per_100g": self.nutrition.display(),
            "categories": self.categories,
            "action": self.action,
        }


@dataclass(frozen=True)
class LookupFailure:
    """A lookup error shown with a way back to scanning."""

    barcode: str
    title: str
    message: str
    action: str = GO_BACK

    def as_dict(self) -> dict[str, object]:
        """Serialize the failure for JSON responses."""
        return {
            "barcode": self.barcode,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


ScanResult = ProductView | LookupFailure


def build_product_view(
    record: ProductRecord, model: ScoringModel | None = None
) -> ProductView:
    """Score a product and lay it out for display."""
    health = score(record.nutrients_per_100g, model or DEFAULT_MODEL)
    subtitle = f"Brand: {record.brand or MISSING}"
    if record.quantity:
        subtitle = f"{subtitle}   •   {record.quantity}"
    return ProductView(
        barcode=record.barcode,
        title=record.name or "Unknown product",
        subtitle=subtitle,
        image_url=record.image_url,
        health_score=health,
        nutri_score=record.nutri_score_grade or MISSING,
        nutrition=summarize(record.nutrients_per_100g),
        categories=record.categories,
    )


def build_failure(barcode: str, outcome: NotFound | TransportError) -> LookupFailure:
    """Describe a failed lookup."""
    if isinstance(outcome, NotFound):
        message = f"No product found for barcode {outcome.barcode}"
    else:
        message = outcome.reason
    return LookupFailure(
        barcode=barcode, title="Couldn't load product", message=message
    )
