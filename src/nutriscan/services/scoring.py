"""Health scoring for products."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from nutriscan.domain.scoring import (
    HealthScore,
    NutritionSummary,
    ScoreBreakdown,
    round_half_up,
)

PROTEIN_KEY = "proteins_100g"
SUGARS_KEY = "sugars_100g"
FAT_KEY = "fat_100g"
CALORIE_KEYS = ("energy-kcal_100g", "energy-kcal")
# Adjustments are clamped to this magnitude before they are summed.
_ADJUSTMENT_LIMIT = 1e6


class ScoringModel(Protocol):
    """Interface for product scoring models."""

    def score(self, nutrients: Mapping[str, float]) -> HealthScore:
        """Compute a health score from per-100 g nutrients."""


@dataclass(frozen=True)
class PlaceholderScoringModel(ScoringModel):
    """Baseline score with protein reward and sugar/fat penalties.

    The coefficients are a placeholder policy rather than a nutritional claim,
    but existing scores depend on them, so they must not drift.
    """

    base: float = 50
    protein_cap_g: float = 20
    protein_weight: float = 1.5
    sugar_cap_g: float = 20
    sugar_weight: float = 1.2
    fat_threshold_g: float = 10
    fat_weight: float = 0.8

    def score(self, nutrients: Mapping[str, float]) -> HealthScore:
        """Compute a score clamped to [0, 100]."""
        protein = _nutrient(nutrients, PROTEIN_KEY)
        sugars = _nutrient(nutrients, SUGARS_KEY)
        fat = _nutrient(nutrients, FAT_KEY)

        protein_contribution = (
            min(protein, self.protein_cap_g) * self.protein_weight
            if protein is not None
            else 0.0
        )
        sugar_penalty = (
            min(sugars, self.sugar_cap_g) * self.sugar_weight
            if sugars is not None
            else 0.0
        )
        fat_penalty = (
            max(0.0, fat - self.fat_threshold_g) * self.fat_weight
            if fat is not None
            else 0.0
        )
        protein_contribution = _bounded(protein_contribution)
        sugar_penalty = _bounded(sugar_penalty)
        fat_penalty = _bounded(fat_penalty)
        raw = self.base + protein_contribution - sugar_penalty - fat_penalty
        return HealthScore(
            value=max(0, min(100, round_half_up(raw))),
            breakdown=ScoreBreakdown(
                protein_contribution=protein_contribution,
                sugar_penalty=sugar_penalty,
                fat_penalty=fat_penalty,
            ),
        )


DEFAULT_MODEL = PlaceholderScoringModel()


def score(
    nutrients: Mapping[str, float], model: ScoringModel = DEFAULT_MODEL
) -> HealthScore:
    """Score a product's per-100 g nutrients."""
    return model.score(nutrients)


def summarize(nutrients: Mapping[str, float]) -> NutritionSummary:
    """Pick the displayed per-100 g metrics out of a nutrient map."""
    calories = None
    for key in CALORIE_KEYS:
        calories = _nutrient(nutrients, key)
        if calories is not None:
            break
    return NutritionSummary(
        calories_kcal=calories,
        protein_g=_nutrient(nutrients, PROTEIN_KEY),
        sugar_g=_nutrient(nutrients, SUGARS_KEY),
        fat_g=_nutrient(nutrients, FAT_KEY),
    )


def _bounded(value: float) -> float:
    return max(-_ADJUSTMENT_LIMIT, min(_ADJUSTMENT_LIMIT, value))


def _nutrient(nutrients: Mapping[str, float], key: str) -> float | None:
    """Return a finite nutrient value, or None when absent or unusable."""
    value = nutrients.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if not math.isfinite(value):
        return None
    return float(value)
