"""Domain models for intake, weight and measurement tracking."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class MealType(StrEnum):
    """Meal slots a logged entry can belong to."""

    BREAKFAST = "Breakfast"
    MORNING_SNACK = "Morning Snack"
    LUNCH = "Lunch"
    AFTERNOON_SNACK = "Afternoon Snack"
    DINNER = "Dinner"
    LATE_SNACK = "Late Snack"


@dataclass(frozen=True)
class UserTargets:
    """Daily nutrition targets and reminder preferences."""

    name: str = "User"
    daily_calorie_target: float = 2000
    daily_protein_target: float = 75
    daily_fiber_target: float = 30
    reminder_time: str = "09:00"
    reminders_enabled: bool = False


@dataclass(frozen=True)
class LoggedEntry:
    """One food item logged for a day."""

    id: str
    food_item_name: str
    meal_type: MealType
    quantity_g: float | None
    calories: float
    protein: float
    fiber: float
    fat: float = 0.0
    healthy_fats: float = 0.0
    unhealthy_fats: float = 0.0
    carbs: float = 0.0
    sugar: float = 0.0


@dataclass(frozen=True)
class DailyLog:
    """Entries and aggregated totals for a calendar day."""

    day: date
    entries: list[LoggedEntry] = field(default_factory=list)
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_fiber: float = 0.0
    total_fat: float = 0.0
    total_healthy_fats: float = 0.0
    total_unhealthy_fats: float = 0.0
    total_carbs: float = 0.0
    total_sugar: float = 0.0


@dataclass(frozen=True)
class WeightLog:
    """Body weight in kilograms for a day."""

    day: date
    weight_kg: float


@dataclass(frozen=True)
class BodyMeasurementLog:
    """Body measurements for a day."""

    day: date
    waist_size_cm: float | None = None


@dataclass(frozen=True)
class TargetProgress:
    """Consumption against one daily target."""

    consumed: float
    target: float

    @property
    def remaining(self) -> float:
        return self.target - self.consumed

    @property
    def percent(self) -> float:
        if self.target <= 0:
            return 0.0
        return self.consumed / self.target * 100


@dataclass(frozen=True)
class DailyProgress:
    """Progress for a day against the user's targets."""

    day: date
    calories: TargetProgress
    protein: TargetProgress
    fiber: TargetProgress


@dataclass(frozen=True)
class WeeklyBudget:
    """Calorie budget for a Monday-start week."""

    week_start: date
    week_end: date
    budget: float
    consumed: float

    @property
    def remaining(self) -> float:
        return self.budget - self.consumed

    @property
    def percent(self) -> float:
        if self.budget <= 0:
            return 0.0
        return self.consumed / self.budget * 100


@dataclass(frozen=True)
class CaloriesSummary:
    """Calories over a trailing window of days.

    The average only counts days with calories logged.
    """

    days: int
    total: float
    days_with_logs: int
    daily_calorie_target: float

    @property
    def average(self) -> float:
        if self.days_with_logs == 0:
            return 0.0
        return self.total / self.days_with_logs

    @property
    def target_percent(self) -> float:
        if self.daily_calorie_target <= 0 or self.days_with_logs == 0:
            return 0.0
        return self.average / self.daily_calorie_target * 100
