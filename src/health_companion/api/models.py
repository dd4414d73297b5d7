"""Wire models for the HTTP API (camelCase JSON)."""

import datetime as dt
from dataclasses import asdict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from health_companion.domain.nutrition import (
    NutritionProfile,
    ProductResult,
    SearchResult,
)
from health_companion.domain.tracking import (
    BodyMeasurementLog,
    CaloriesSummary,
    DailyLog,
    DailyProgress,
    LoggedEntry,
    MealType,
    TargetProgress,
    UserTargets,
    WeeklyBudget,
    WeightLog,
)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NutritionDataModel(ApiModel):
    calories: float | None = None
    fat: float | None = None
    healthy_fats: float | None = None
    unhealthy_fats: float | None = None
    carbs: float | None = None
    sugar: float | None = None
    protein: float | None = None
    fiber: float | None = None
    source_name: str | None = None

    @classmethod
    def from_domain(cls, profile: NutritionProfile) -> "NutritionDataModel":
        return cls(
            calories=profile.calories,
            fat=profile.fat,
            healthy_fats=profile.healthy_fats,
            unhealthy_fats=profile.unhealthy_fats,
            carbs=profile.carbs,
            sugar=profile.sugar,
            protein=profile.protein,
            fiber=profile.fiber,
            source_name=profile.source_name,
        )

    def to_domain(self) -> NutritionProfile:
        return NutritionProfile(**self.model_dump())


class ProductResultModel(ApiModel):
    id: str
    display_name: str
    nutrition_data: NutritionDataModel

    @classmethod
    def from_domain(cls, product: ProductResult) -> "ProductResultModel":
        return cls(
            id=product.id,
            display_name=product.display_name,
            nutrition_data=NutritionDataModel.from_domain(product.nutrition),
        )

    def to_domain(self) -> ProductResult:
        return ProductResult(
            id=self.id,
            display_name=self.display_name,
            nutrition=self.nutrition_data.to_domain(),
        )


class SearchResultModel(ApiModel):
    products: list[ProductResultModel]
    error: str | None = None
    api_fetch_duration_ms: float | None = None
    json_parse_duration_ms: float | None = None
    processing_duration_ms: float | None = None

    @classmethod
    def from_domain(cls, result: SearchResult) -> "SearchResultModel":
        return cls(
            products=[ProductResultModel.from_domain(p) for p in result.products],
            error=result.error,
            api_fetch_duration_ms=result.api_fetch_duration_ms,
            json_parse_duration_ms=result.json_parse_duration_ms,
            processing_duration_ms=result.processing_duration_ms,
        )

    def to_payload(self) -> dict[str, object]:
        """Serialize, omitting the optional top-level keys that are unset."""
        payload = self.model_dump(mode="json", by_alias=True)
        return {
            key: value
            for key, value in payload.items()
            if key == "products" or value is not None
        }


class LogProductRequest(ApiModel):
    product: ProductResultModel
    grams: float = Field(gt=0)
    meal_type: MealType


class QuickCaloriesRequest(ApiModel):
    calories: float = Field(gt=0)
    meal_type: MealType = MealType.LATE_SNACK


class LoggedEntryModel(ApiModel):
    id: str
    food_item_name: str
    meal_type: MealType
    quantity_g: float | None
    calories: float
    protein: float
    fiber: float
    fat: float
    healthy_fats: float
    unhealthy_fats: float
    carbs: float
    sugar: float

    @classmethod
    def from_domain(cls, entry: LoggedEntry) -> "LoggedEntryModel":
        return cls.model_validate(asdict(entry))


class DailyLogModel(ApiModel):
    date: dt.date
    entries: list[LoggedEntryModel]
    total_calories: float
    total_protein: float
    total_fiber: float
    total_fat: float
    total_healthy_fats: float
    total_unhealthy_fats: float
    total_carbs: float
    total_sugar: float

    @classmethod
    def from_domain(cls, log: DailyLog) -> "DailyLogModel":
        return cls(
            date=log.day,
            entries=[LoggedEntryModel.from_domain(entry) for entry in log.entries],
            total_calories=log.total_calories,
            total_protein=log.total_protein,
            total_fiber=log.total_fiber,
            total_fat=log.total_fat,
            total_healthy_fats=log.total_healthy_fats,
            total_unhealthy_fats=log.total_unhealthy_fats,
            total_carbs=log.total_carbs,
            total_sugar=log.total_sugar,
        )


class TargetsModel(ApiModel):
    name: str = "User"
    daily_calorie_target: float = Field(default=2000, gt=0)
    daily_protein_target: float = Field(default=75, gt=0)
    daily_fiber_target: float = Field(default=30, gt=0)
    reminder_time: str = Field(default="09:00", pattern=r"^\d{2}:\d{2}$")
    reminders_enabled: bool = False

    @classmethod
    def from_domain(cls, targets: UserTargets) -> "TargetsModel":
        return cls.model_validate(asdict(targets))


class TargetsUpdate(ApiModel):
    name: str | None = None
    daily_calorie_target: float | None = Field(default=None, gt=0)
    daily_protein_target: float | None = Field(default=None, gt=0)
    daily_fiber_target: float | None = Field(default=None, gt=0)
    reminder_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    reminders_enabled: bool | None = None


class ProgressModel(ApiModel):
    consumed: float
    target: float
    remaining: float
    percent: float

    @classmethod
    def from_domain(cls, progress: TargetProgress) -> "ProgressModel":
        return cls(
            consumed=progress.consumed,
            target=progress.target,
            remaining=progress.remaining,
            percent=progress.percent,
        )


class DailyProgressModel(ApiModel):
    date: dt.date
    calories: ProgressModel
    protein: ProgressModel
    fiber: ProgressModel

    @classmethod
    def from_domain(cls, progress: DailyProgress) -> "DailyProgressModel":
        return cls(
            date=progress.day,
            calories=ProgressModel.from_domain(progress.calories),
            protein=ProgressModel.from_domain(progress.protein),
            fiber=ProgressModel.from_domain(progress.fiber),
        )


class WeeklyBudgetModel(ApiModel):
    week_start: dt.date
    week_end: dt.date
    budget: float
    consumed: float
    remaining: float
    percent: float

    @classmethod
    def from_domain(cls, budget: WeeklyBudget) -> "WeeklyBudgetModel":
        return cls(
            week_start=budget.week_start,
            week_end=budget.week_end,
            budget=budget.budget,
            consumed=budget.consumed,
            remaining=budget.remaining,
            percent=budget.percent,
        )


class DayCaloriesModel(ApiModel):
    date: dt.date
    calories: float


class CaloriesSummaryModel(ApiModel):
    days: int
    total: float
    days_with_logs: int
    average: float
    daily_calorie_target: float
    target_percent: float

    @classmethod
    def from_domain(cls, summary: CaloriesSummary) -> "CaloriesSummaryModel":
        return cls(
            days=summary.days,
            total=summary.total,
            days_with_logs=summary.days_with_logs,
            average=summary.average,
            daily_calorie_target=summary.daily_calorie_target,
            target_percent=summary.target_percent,
        )


class WeightModel(ApiModel):
    date: dt.date
    weight_kg: float = Field(gt=0)

    @classmethod
    def from_domain(cls, log: WeightLog) -> "WeightModel":
        return cls(date=log.day, weight_kg=log.weight_kg)


class WaistModel(ApiModel):
    date: dt.date
    waist_size_cm: float = Field(gt=0)

    @classmethod
    def from_domain(cls, log: BodyMeasurementLog) -> "WaistModel":
        return cls(date=log.day, waist_size_cm=log.waist_size_cm)
