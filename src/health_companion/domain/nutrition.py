"""Nutrition domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NutritionProfile:
    """Per-100g nutrient snapshot shared by every food source.

    Every numeric field is either a finite float or None.
    """

    calories: float | None = None
    fat: float | None = None
    healthy_fats: float | None = None
    unhealthy_fats: float | None = None
    carbs: float | None = None
    sugar: float | None = None
    protein: float | None = None
    fiber: float | None = None
    source_name: str | None = None

    def scaled(self, grams: float) -> dict[str, float]:
        """Return nutrient amounts for a portion, treating absent values as 0."""
        factor = grams / 100
        return {
            "calories": (self.calories or 0.0) * factor,
            "fat": (self.fat or 0.0) * factor,
            "healthy_fats": (self.healthy_fats or 0.0) * factor,
            "unhealthy_fats": (self.unhealthy_fats or 0.0) * factor,
            "carbs": (self.carbs or 0.0) * factor,
            "sugar": (self.sugar or 0.0) * factor,
            "protein": (self.protein or 0.0) * factor,
            "fiber": (self.fiber or 0.0) * factor,
        }


@dataclass(frozen=True)
class ProductCandidate:
    """Search candidate carrying the internal sort keys."""

    id: str
    display_name: str
    nutrition: NutritionProfile
    relevance_rank: int
    source_order: int

    def sort_key(self) -> tuple[int, int]:
        return (self.relevance_rank, self.source_order)

    def to_result(self) -> "ProductResult":
        return ProductResult(
            id=self.id, display_name=self.display_name, nutrition=self.nutrition
        )


@dataclass(frozen=True)
class ProductResult:
    """Food product returned to callers."""

    id: str
    display_name: str
    nutrition: NutritionProfile


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a single food search call."""

    products: list[ProductResult] = field(default_factory=list)
    error: str | None = None
    api_fetch_duration_ms: float | None = None
    json_parse_duration_ms: float | None = None
    processing_duration_ms: float | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
