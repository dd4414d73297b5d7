"""Progress and trend statistics over logged intake."""

from dataclasses import dataclass
from datetime import date, timedelta

from health_companion.domain.tracking import (
    BodyMeasurementLog,
    CaloriesSummary,
    DailyProgress,
    TargetProgress,
    UserTargets,
    WeeklyBudget,
    WeightLog,
)
from health_companion.services.tracking import TrackingRepository

DAYS_PER_WEEK = 7


@dataclass
class StatsService:
    """Service for computing progress against targets."""

    repository: TrackingRepository

    def daily_progress(self, day: date) -> DailyProgress:
        """Return the day's consumption against daily targets."""
        targets = self.repository.get_targets() or UserTargets()
        log = self.repository.get_daily_log(day)
        calories = log.total_calories if log else 0.0
        protein = log.total_protein if log else 0.0
        fiber = log.total_fiber if log else 0.0
        return DailyProgress(
            day=day,
            calories=TargetProgress(calories, targets.daily_calorie_target),
            protein=TargetProgress(protein, targets.daily_protein_target),
            fiber=TargetProgress(fiber, targets.daily_fiber_target),
        )

    def weekly_budget(self, day: date) -> WeeklyBudget:
        """Return the calorie budget for the Monday-start week containing `day`."""
        start, end = week_range(day)
        targets = self.repository.get_targets() or UserTargets()
        logs = self.repository.list_daily_logs(start, end)
        return WeeklyBudget(
            week_start=start,
            week_end=end,
            budget=targets.daily_calorie_target * DAYS_PER_WEEK,
            consumed=sum(log.total_calories for log in logs),
        )

    def last_days_calories(self, days: int, today: date) -> list[tuple[date, float]]:
        """Return (day, calories) for the last `days` days, oldest first."""
        start = today - timedelta(days=days - 1)
        totals = {
            log.day: log.total_calories
            for log in self.repository.list_daily_logs(start, today)
        }
        return [
            (day, totals.get(day, 0.0))
            for day in (start + timedelta(days=offset) for offset in range(days))
        ]

    def last_days_summary(self, days: int, today: date) -> CaloriesSummary:
        """Summarize the last `days` days of calories."""
        series = self.last_days_calories(days, today)
        targets = self.repository.get_targets() or UserTargets()
        return CaloriesSummary(
            days=days,
            total=sum(calories for _, calories in series),
            days_with_logs=sum(1 for _, calories in series if calories > 0),
            daily_calorie_target=targets.daily_calorie_target,
        )

    def weight_trend(self) -> list[WeightLog]:
        """Return weight logs ordered by day."""
        return sorted(self.repository.list_weights(), key=lambda log: log.day)

    def waist_trend(self) -> list[BodyMeasurementLog]:
        """Return waist measurements ordered by day, skipping empty ones."""
        return sorted(
            (log for log in self.repository.list_measurements() if log.waist_size_cm),
            key=lambda log: log.day,
        )


def week_range(day: date) -> tuple[date, date]:
    """Return the Monday and Sunday bounding `day`."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=DAYS_PER_WEEK - 1)
