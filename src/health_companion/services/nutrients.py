"""Nutrient extraction and normalization for raw food records."""

import math
from collections.abc import Mapping

from health_companion.domain.nutrition import NutritionProfile
from health_companion.domain.sources import (
    EdamamRecord,
    FdcRecord,
    OpenFoodFactsRecord,
    RawFoodRecord,
)

KJ_PER_KCAL = 4.184
_KILOJOULE_UNITS = {"kj", "kilojoule", "kilojoules"}

_EDAMAM_KEYS = {
    "calories": "ENERC_KCAL",
    "fat": "FAT",
    "saturated": "FASAT",
    "trans": "FATRN",
    "monounsaturated": "FAMS",
    "polyunsaturated": "FAPU",
    "carbs": "CHOCDF",
    "sugar": "SUGAR",
    "protein": "PROCNT",
    "fiber": "FIBTG",
}

_OFF_KEYS = {
    "calories": "energy-kcal_100g",
    "fat": "fat_100g",
    "saturated": "saturated-fat_100g",
    "trans": "trans-fat_100g",
    "monounsaturated": "monounsaturated-fat_100g",
    "polyunsaturated": "polyunsaturated-fat_100g",
    "carbs": "carbohydrates_100g",
    "sugar": "sugars_100g",
    "protein": "proteins_100g",
    "fiber": "fiber_100g",
}

_FDC_NUTRIENT_IDS = {
    "calories": 1008,
    "fat": 1004,
    "saturated": 1258,
    "trans": 1257,
    "monounsaturated": 1292,
    "polyunsaturated": 1293,
    "carbs": 1005,
    "sugar": 2000,
    "protein": 1003,
    "fiber": 1079,
}

# Atwater specific, Atwater general, then energy in kJ.
_FDC_ENERGY_FALLBACK_IDS = (2048, 2047, 1062)


def parse_number(value: object) -> float | None:
    """Parse a bare number or a numeric string using `.` or `,` decimals.

    Returns None for anything unparsable or non-finite.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", ".")
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _is_kilojoules(unit: object) -> bool:
    return isinstance(unit, str) and unit.strip().lower() in _KILOJOULE_UNITS


def read_quantity(value: object) -> float | None:
    """Read a nutrient value, unwrapping `{value|amount, unit}` structures.

    Energy reported in kilojoules is converted to kilocalories.
    """
    if isinstance(value, Mapping):
        raw = value.get("value")
        if raw is None:
            raw = value.get("amount")
        number = parse_number(raw)
        if number is not None and _is_kilojoules(value.get("unit")):
            return number / KJ_PER_KCAL
        return number
    return parse_number(value)


def extract_nutrient(container: Mapping, key: object) -> float | None:
    """Return the finite value stored under `key`, or None."""
    if key not in container:
        return None
    return read_quantity(container[key])


def aggregate_fats(
    saturated: float | None,
    trans: float | None,
    monounsaturated: float | None,
    polyunsaturated: float | None,
) -> tuple[float | None, float | None]:
    """Return (healthy_fats, unhealthy_fats).

    Each aggregate is defined when at least one of its operands is present;
    an absent operand contributes 0.
    """
    healthy = None
    if monounsaturated is not None or polyunsaturated is not None:
        healthy = (monounsaturated or 0.0) + (polyunsaturated or 0.0)
    unhealthy = None
    if saturated is not None or trans is not None:
        unhealthy = (saturated or 0.0) + (trans or 0.0)
    return healthy, unhealthy


def _profile_from_values(
    values: Mapping[str, float | None], source_name: str | None
) -> NutritionProfile:
    healthy, unhealthy = aggregate_fats(
        values.get("saturated"),
        values.get("trans"),
        values.get("monounsaturated"),
        values.get("polyunsaturated"),
    )
    return NutritionProfile(
        calories=values.get("calories"),
        fat=values.get("fat"),
        healthy_fats=healthy,
        unhealthy_fats=unhealthy,
        carbs=values.get("carbs"),
        sugar=values.get("sugar"),
        protein=values.get("protein"),
        fiber=values.get("fiber"),
        source_name=source_name,
    )


def edamam_profile(record: EdamamRecord) -> NutritionProfile:
    """Map Edamam nutrient codes into a profile."""
    values = {
        field: extract_nutrient(record.nutrients, key)
        for field, key in _EDAMAM_KEYS.items()
    }
    return _profile_from_values(values, record.label)


def open_food_facts_profile(record: OpenFoodFactsRecord) -> NutritionProfile:
    """Map Open Food Facts `*_100g` nutriments into a profile."""
    nutriments = record.nutriments
    values = {
        field: extract_nutrient(nutriments, key) for field, key in _OFF_KEYS.items()
    }
    if values["calories"] is None and "energy_100g" in nutriments:
        # energy_100g is always kJ; energy_unit is only the unit as entered.
        values["calories"] = read_quantity(
            {"value": nutriments["energy_100g"], "unit": "kJ"}
        )
    return _profile_from_values(values, record.product_name)


def fdc_profile(record: FdcRecord) -> NutritionProfile:
    """Map FDC nutrient ids into a profile."""
    values = {
        field: extract_nutrient(record.nutrients, nutrient_id)
        for field, nutrient_id in _FDC_NUTRIENT_IDS.items()
    }
    for nutrient_id in _FDC_ENERGY_FALLBACK_IDS:
        if values["calories"] is not None:
            break
        values["calories"] = extract_nutrient(record.nutrients, nutrient_id)
    return _profile_from_values(values, record.description)


def build_profile(record: RawFoodRecord) -> NutritionProfile:
    """Dispatch a raw record to its source-specific mapping."""
    if isinstance(record, EdamamRecord):
        return edamam_profile(record)
    if isinstance(record, OpenFoodFactsRecord):
        return open_food_facts_profile(record)
    if isinstance(record, FdcRecord):
        return fdc_profile(record)
    raise TypeError(f"Unsupported food record: {type(record).__name__}")


def record_identity(record: RawFoodRecord, index: int) -> tuple[str, str | None]:
    """Return (id, name) for a record, with a deterministic id placeholder."""
    if isinstance(record, EdamamRecord):
        food_id, name = record.food_id, record.label
    elif isinstance(record, OpenFoodFactsRecord):
        food_id, name = record.code, record.product_name
    else:
        food_id, name = record.fdc_id, record.description
    return food_id or f"{record.source.value}-{index}", name
