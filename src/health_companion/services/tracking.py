"""Intake, weight and measurement logging service."""

from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import uuid4

from health_companion.domain.nutrition import ProductResult
from health_companion.domain.tracking import (
    BodyMeasurementLog,
    DailyLog,
    LoggedEntry,
    MealType,
    UserTargets,
    WeightLog,
)


_POSITIVE_TARGETS = (
    "daily_calorie_target",
    "daily_protein_target",
    "daily_fiber_target",
)


class TrackingRepository(Protocol):
    """Persistence interface keyed by calendar date."""

    def get_daily_log(self, day: date) -> DailyLog | None:
        """Return the log for a day if one exists."""

    def save_daily_log(self, log: DailyLog) -> None:
        """Insert or replace the log for its day."""

    def list_daily_logs(self, start: date, end: date) -> list[DailyLog]:
        """Return logs with start <= day <= end."""

    def save_weight(self, log: WeightLog) -> None:
        """Insert or replace the weight for its day."""

    def list_weights(self) -> list[WeightLog]:
        """Return all weight logs."""

    def save_measurement(self, log: BodyMeasurementLog) -> None:
        """Insert or replace the measurement for its day."""

    def list_measurements(self) -> list[BodyMeasurementLog]:
        """Return all measurement logs."""

    def get_targets(self) -> UserTargets | None:
        """Return stored targets if set."""

    def save_targets(self, targets: UserTargets) -> None:
        """Persist targets."""


@dataclass
class TrackingService:
    """Service that records intake and recomputes daily totals."""

    repository: TrackingRepository

    def get_daily_log(self, day: date) -> DailyLog:
        """Return the day's log, or an empty one."""
        return self.repository.get_daily_log(day) or DailyLog(day=day)

    def log_product(
        self,
        day: date,
        product: ProductResult,
        grams: float,
        meal_type: MealType | str,
    ) -> DailyLog:
        """Log a portion of a searched product; nutrients are per 100g."""
        if grams <= 0:
            raise ValueError("Quantity must be a positive number of grams")
        amounts = product.nutrition.scaled(grams)
        entry = LoggedEntry(
            id=uuid4().hex,
            food_item_name=product.display_name,
            meal_type=MealType(meal_type),
            quantity_g=grams,
            calories=amounts["calories"],
            protein=amounts["protein"],
            fiber=amounts["fiber"],
            fat=amounts["fat"],
            healthy_fats=amounts["healthy_fats"],
            unhealthy_fats=amounts["unhealthy_fats"],
            carbs=amounts["carbs"],
            sugar=amounts["sugar"],
        )
        return self._append(day, entry)

    def log_quick_calories(
        self,
        day: date,
        calories: float,
        meal_type: MealType | str = MealType.LATE_SNACK,
    ) -> DailyLog:
        """Log a calories-only entry."""
        if calories <= 0:
            raise ValueError("Calories must be a positive number")
        entry = LoggedEntry(
            id=uuid4().hex,
            food_item_name="Quick calorie entry",
            meal_type=MealType(meal_type),
            quantity_g=None,
            calories=calories,
            protein=0.0,
            fiber=0.0,
        )
        return self._append(day, entry)

    def remove_entry(self, day: date, entry_id: str) -> DailyLog | None:
        """Remove an entry; returns None when it does not exist."""
        log = self.repository.get_daily_log(day)
        if log is None:
            return None
        remaining = [entry for entry in log.entries if entry.id != entry_id]
        if len(remaining) == len(log.entries):
            return None
        updated = _with_totals(day, remaining)
        self.repository.save_daily_log(updated)
        return updated

    def log_weight(self, day: date, weight_kg: float) -> WeightLog:
        """Record body weight for a day, replacing any earlier value."""
        if weight_kg <= 0:
            raise ValueError("Weight must be a positive number")
        log = WeightLog(day=day, weight_kg=weight_kg)
        self.repository.save_weight(log)
        return log

    def log_waist(self, day: date, waist_size_cm: float) -> BodyMeasurementLog:
        """Record waist size for a day, replacing any earlier value."""
        if waist_size_cm <= 0:
            raise ValueError("Waist size must be a positive number")
        log = BodyMeasurementLog(day=day, waist_size_cm=waist_size_cm)
        self.repository.save_measurement(log)
        return log

    def get_targets(self) -> UserTargets:
        """Return the stored targets or defaults."""
        return self.repository.get_targets() or UserTargets()

    def update_targets(self, **changes: object) -> UserTargets:
        """Apply partial target changes and persist them."""
        updated = replace(self.get_targets(), **changes)
        for name in _POSITIVE_TARGETS:
            if getattr(updated, name) <= 0:
                raise ValueError(f"{name} must be positive")
        self.repository.save_targets(updated)
        return updated

    def _append(self, day: date, entry: LoggedEntry) -> DailyLog:
        current = self.get_daily_log(day)
        updated = _with_totals(day, [*current.entries, entry])
        self.repository.save_daily_log(updated)
        return updated


def _with_totals(day: date, entries: list[LoggedEntry]) -> DailyLog:
    return DailyLog(
        day=day,
        entries=entries,
        total_calories=sum(entry.calories for entry in entries),
        total_protein=sum(entry.protein for entry in entries),
        total_fiber=sum(entry.fiber for entry in entries),
        total_fat=sum(entry.fat for entry in entries),
        total_healthy_fats=sum(entry.healthy_fats for entry in entries),
        total_unhealthy_fats=sum(entry.unhealthy_fats for entry in entries),
        total_carbs=sum(entry.carbs for entry in entries),
        total_sugar=sum(entry.sugar for entry in entries),
    )
