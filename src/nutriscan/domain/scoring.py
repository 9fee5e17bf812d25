"""Health score domain models."""

import math
from dataclasses import dataclass

MISSING = "-"


@dataclass(frozen=True)
class ScoreBreakdown:
    """Weighted adjustments applied to the base score."""

    protein_contribution: float
    sugar_penalty: float
    fat_penalty: float


@dataclass(frozen=True)
class HealthScore:
    """Bounded health score for a product."""

    value: int
    breakdown: ScoreBreakdown


@dataclass(frozen=True)
class NutritionSummary:
    """Per-100 g values for the displayed metrics."""

    calories_kcal: float | None
    protein_g: float | None
    sugar_g: float | None
    fat_g: float | None

    def display(self) -> dict[str, str]:
        """Return display strings, using a dash for absent values."""
        return {
            "calories": (
                f"{round_half_up(self.calories_kcal)} kcal"
                if self.calories_kcal is not None
                else MISSING
            ),
            "protein": _grams(self.protein_g),
            "sugar": _grams(self.sugar_g),
            "fat": _grams(self.fat_g),
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + 0.5)


def _grams(value: float | None) -> str:
    if value is None:
        return MISSING
    if value.is_integer():
        return f"{int(value)} g"
    return f"{value!r} g"
