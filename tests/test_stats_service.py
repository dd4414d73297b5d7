"""Tests for stats service."""

from datetime import date

import pytest

from health_companion.adapters.memory_tracking_repository import (
    InMemoryTrackingRepository,
)
from health_companion.domain.tracking import UserTargets
from health_companion.services.stats import StatsService, week_range
from health_companion.services.tracking import TrackingService


def _services() -> tuple[TrackingService, StatsService]:
    repository = InMemoryTrackingRepository()
    return TrackingService(repository), StatsService(repository)


def test_week_range_is_monday_to_sunday() -> None:
    assert week_range(date(2024, 5, 15)) == (date(2024, 5, 13), date(2024, 5, 19))
    assert week_range(date(2024, 5, 13)) == (date(2024, 5, 13), date(2024, 5, 19))
    assert week_range(date(2024, 5, 19)) == (date(2024, 5, 13), date(2024, 5, 19))


def test_daily_progress_against_targets() -> None:
    tracking, stats = _services()
    tracking.log_quick_calories(date(2024, 5, 15), 500)

    progress = stats.daily_progress(date(2024, 5, 15))

    assert progress.calories.consumed == 500
    assert progress.calories.remaining == 1500
    assert progress.calories.percent == pytest.approx(25)
    assert progress.protein.consumed == 0


def test_daily_progress_without_log() -> None:
    _, stats = _services()

    progress = stats.daily_progress(date(2024, 5, 15))

    assert progress.calories.consumed == 0
    assert progress.fiber.target == 30


def test_weekly_budget_sums_only_current_week() -> None:
    tracking, stats = _services()
    tracking.update_targets(daily_calorie_target=2000)
    tracking.log_quick_calories(date(2024, 5, 12), 900)
    tracking.log_quick_calories(date(2024, 5, 13), 1800)
    tracking.log_quick_calories(date(2024, 5, 19), 2200)
    tracking.log_quick_calories(date(2024, 5, 20), 700)

    budget = stats.weekly_budget(date(2024, 5, 15))

    assert budget.week_start == date(2024, 5, 13)
    assert budget.week_end == date(2024, 5, 19)
    assert budget.budget == 14000
    assert budget.consumed == 4000
    assert budget.remaining == 10000


def test_last_days_fills_gaps_oldest_first() -> None:
    tracking, stats = _services()
    tracking.log_quick_calories(date(2024, 5, 13), 1200)
    tracking.log_quick_calories(date(2024, 5, 15), 1600)

    series = stats.last_days_calories(3, date(2024, 5, 15))

    assert series == [
        (date(2024, 5, 13), 1200),
        (date(2024, 5, 14), 0.0),
        (date(2024, 5, 15), 1600),
    ]


def test_trends_are_sorted_by_day() -> None:
    repository = InMemoryTrackingRepository()
    tracking = TrackingService(repository)
    stats = StatsService(repository)
    tracking.log_weight(date(2024, 5, 15), 80)
    tracking.log_weight(date(2024, 5, 1), 82)
    tracking.log_waist(date(2024, 5, 10), 91)
    tracking.log_waist(date(2024, 5, 2), 92)

    assert [log.weight_kg for log in stats.weight_trend()] == [82, 80]
    assert [log.waist_size_cm for log in stats.waist_trend()] == [92, 91]


def test_progress_percent_with_zero_target() -> None:
    repository = InMemoryTrackingRepository(
        targets=UserTargets(daily_calorie_target=0)
    )

    progress = StatsService(repository).daily_progress(date(2024, 5, 15))

    assert progress.calories.percent == 0


def test_last_days_summary_averages_over_logged_days() -> None:
    tracking, stats = _services()
    tracking.update_targets(daily_calorie_target=2000)
    tracking.log_quick_calories(date(2024, 5, 10), 5000)
    tracking.log_quick_calories(date(2024, 5, 13), 1200)
    tracking.log_quick_calories(date(2024, 5, 15), 1800)

    summary = stats.last_days_summary(7, date(2024, 5, 16))

    assert summary.total == 3000
    assert summary.days_with_logs == 2
    assert summary.average == 1500
    assert summary.target_percent == pytest.approx(75)


def test_last_days_summary_without_logs() -> None:
    _, stats = _services()

    summary = stats.last_days_summary(7, date(2024, 5, 16))

    assert summary.total == 0
    assert summary.days_with_logs == 0
    assert summary.average == 0
    assert summary.target_percent == 0
