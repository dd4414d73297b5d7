"""Tests for intake tracking."""

from datetime import date

import pytest

from health_companion.adapters.memory_tracking_repository import (
    InMemoryTrackingRepository,
)
from health_companion.domain.nutrition import NutritionProfile, ProductResult
from health_companion.domain.tracking import MealType
from health_companion.services.tracking import TrackingService

DAY = date(2024, 5, 15)


def _apple() -> ProductResult:
    return ProductResult(
        id="food_apple",
        display_name="Apple",
        nutrition=NutritionProfile(
            calories=52, protein=0.3, fiber=2.4, fat=0.2, unhealthy_fats=None
        ),
    )


def test_log_product_scales_per_100g() -> None:
    service = TrackingService(InMemoryTrackingRepository())

    log = service.log_product(DAY, _apple(), 150, "Breakfast")

    entry = log.entries[0]
    assert entry.food_item_name == "Apple"
    assert entry.meal_type is MealType.BREAKFAST
    assert entry.quantity_g == 150
    assert entry.calories == pytest.approx(78)
    assert entry.fiber == pytest.approx(3.6)
    assert entry.unhealthy_fats == 0
    assert log.total_calories == pytest.approx(78)


def test_log_product_rejects_non_positive_grams() -> None:
    service = TrackingService(InMemoryTrackingRepository())

    with pytest.raises(ValueError):
        service.log_product(DAY, _apple(), 0, MealType.LUNCH)


def test_log_product_rejects_unknown_meal_type() -> None:
    service = TrackingService(InMemoryTrackingRepository())

    with pytest.raises(ValueError):
        service.log_product(DAY, _apple(), 100, "Brunch")


def test_totals_accumulate_and_remove_entry() -> None:
    repository = InMemoryTrackingRepository()
    service = TrackingService(repository)

    service.log_product(DAY, _apple(), 100, MealType.LUNCH)
    log = service.log_quick_calories(DAY, 250)

    assert len(log.entries) == 2
    assert log.total_calories == pytest.approx(302)
    assert log.entries[1].meal_type is MealType.LATE_SNACK
    assert log.entries[1].quantity_g is None

    updated = service.remove_entry(DAY, log.entries[0].id)

    assert updated is not None
    assert updated.total_calories == pytest.approx(250)
    assert repository.get_daily_log(DAY) == updated


def test_remove_missing_entry_returns_none() -> None:
    service = TrackingService(InMemoryTrackingRepository())

    assert service.remove_entry(DAY, "missing") is None
    service.log_quick_calories(DAY, 100)
    assert service.remove_entry(DAY, "missing") is None


def test_get_daily_log_defaults_to_empty() -> None:
    log = TrackingService(InMemoryTrackingRepository()).get_daily_log(DAY)

    assert log.day == DAY
    assert log.entries == []
    assert log.total_calories == 0


def test_log_weight_and_waist_replace_same_day() -> None:
    repository = InMemoryTrackingRepository()
    service = TrackingService(repository)

    service.log_weight(DAY, 80.5)
    service.log_weight(DAY, 80.1)
    service.log_waist(DAY, 90)

    assert [log.weight_kg for log in repository.list_weights()] == [80.1]
    assert repository.list_measurements()[0].waist_size_cm == 90
    with pytest.raises(ValueError):
        service.log_weight(DAY, 0)
    with pytest.raises(ValueError):
        service.log_waist(DAY, -1)


def test_update_targets_partial_and_validated() -> None:
    service = TrackingService(InMemoryTrackingRepository())

    targets = service.update_targets(daily_calorie_target=1800, name="Sam")

    assert targets.daily_calorie_target == 1800
    assert targets.daily_protein_target == 75
    assert service.get_targets().name == "Sam"
    with pytest.raises(ValueError):
        service.update_targets(daily_fiber_target=0)
    assert service.get_targets().daily_fiber_target == 30
