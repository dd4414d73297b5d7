"""Raw food records as returned by each upstream food database."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal


class FoodSource(StrEnum):
    """Supported food database integrations."""

    EDAMAM = "edamam"
    OPEN_FOOD_FACTS = "openfoodfacts"
    USDA = "usda"

    @property
    def label(self) -> str:
        return _SOURCE_LABELS[self]


_SOURCE_LABELS = {
    FoodSource.EDAMAM: "Edamam",
    FoodSource.OPEN_FOOD_FACTS: "Open Food Facts",
    FoodSource.USDA: "USDA FoodData Central",
}


def _as_mapping(value: object) -> Mapping[str, object]:
    return value if isinstance(value, Mapping) else {}


def _as_text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


@dataclass(frozen=True)
class EdamamRecord:
    """A `hints[].food` entry from the Edamam parser endpoint."""

    food_id: str | None
    label: str | None
    nutrients: Mapping[str, object] = field(default_factory=dict)
    source: Literal[FoodSource.EDAMAM] = FoodSource.EDAMAM

    @classmethod
    def from_payload(cls, hint: object) -> "EdamamRecord":
        food = _as_mapping(_as_mapping(hint).get("food"))
        return cls(
            food_id=_as_text(food.get("foodId")),
            label=_as_text(food.get("label")),
            nutrients=_as_mapping(food.get("nutrients")),
        )


@dataclass(frozen=True)
class OpenFoodFactsRecord:
    """A `products[]` entry from the Open Food Facts search API."""

    code: str | None
    product_name: str | None
    brands: str | None
    ingredients_count: int | None
    nutriments: Mapping[str, object] = field(default_factory=dict)
    source: Literal[FoodSource.OPEN_FOOD_FACTS] = FoodSource.OPEN_FOOD_FACTS

    @classmethod
    def from_payload(cls, product: object) -> "OpenFoodFactsRecord":
        data = _as_mapping(product)
        name = (
            _as_text(data.get("product_name"))
            or _as_text(data.get("product_name_en"))
            or _as_text(data.get("generic_name"))
        )
        ingredients_n = data.get("ingredients_n")
        if isinstance(ingredients_n, str) and ingredients_n.isdigit():
            ingredients_n = int(ingredients_n)
        if isinstance(ingredients_n, bool) or not isinstance(ingredients_n, int):
            ingredients_n = None
        return cls(
            code=_as_text(data.get("code")),
            product_name=name,
            brands=_as_text(data.get("brands")),
            ingredients_count=ingredients_n,
            nutriments=_as_mapping(data.get("nutriments")),
        )


@dataclass(frozen=True)
class FdcRecord:
    """A `foods[]` entry from the FoodData Central search endpoint.

    `nutrients` is keyed by FDC nutrient id, each value wrapping the
    amount with its unit so energy can be reconciled to kcal.
    """

    fdc_id: str | None
    description: str | None
    brand_owner: str | None
    nutrients: Mapping[int, Mapping[str, object]] = field(default_factory=dict)
    source: Literal[FoodSource.USDA] = FoodSource.USDA

    @classmethod
    def from_payload(cls, food: object) -> "FdcRecord":
        data = _as_mapping(food)
        nutrients: dict[int, Mapping[str, object]] = {}
        raw_nutrients = data.get("foodNutrients")
        for entry in raw_nutrients if isinstance(raw_nutrients, list) else []:
            item = _as_mapping(entry)
            nutrient_info = _as_mapping(item.get("nutrient"))
            nutrient_id = item.get("nutrientId") or nutrient_info.get("id")
            if not isinstance(nutrient_id, int) or nutrient_id in nutrients:
                continue
            value = item.get("value")
            if value is None:
                value = item.get("amount")
            nutrients[nutrient_id] = {
                "value": value,
                "unit": item.get("unitName") or nutrient_info.get("unitName"),
            }
        return cls(
            fdc_id=_as_text(data.get("fdcId")),
            description=_as_text(data.get("description")),
            brand_owner=_as_text(data.get("brandOwner")),
            nutrients=nutrients,
        )


RawFoodRecord = EdamamRecord | OpenFoodFactsRecord | FdcRecord
