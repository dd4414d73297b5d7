"""Intake tracking and progress endpoints."""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Query, Request, status

from health_companion.api.models import (
    CaloriesSummaryModel,
    DailyLogModel,
    DailyProgressModel,
    DayCaloriesModel,
    LogProductRequest,
    QuickCaloriesRequest,
    TargetsModel,
    TargetsUpdate,
    WaistModel,
    WeeklyBudgetModel,
    WeightModel,
)

if TYPE_CHECKING:
    from health_companion.containers import AppContainer

router = APIRouter(tags=["tracking"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _unprocessable(exc: ValueError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
    )


@router.get("/log/{day}", response_model=DailyLogModel)
async def get_daily_log(day: dt.date, request: Request) -> DailyLogModel:
    """Return the entries and totals logged for a day."""
    log = _container(request).tracking_service.get_daily_log(day)
    return DailyLogModel.from_domain(log)


@router.post(
    "/log/{day}/entries",
    response_model=DailyLogModel,
    status_code=status.HTTP_201_CREATED,
)
async def log_product(
    day: dt.date, payload: LogProductRequest, request: Request
) -> DailyLogModel:
    """Log a portion of a searched product."""
    try:
        log = _container(request).tracking_service.log_product(
            day, payload.product.to_domain(), payload.grams, payload.meal_type
        )
    except ValueError as exc:
        raise _unprocessable(exc) from exc
    return DailyLogModel.from_domain(log)


@router.post(
    "/log/{day}/quick",
    response_model=DailyLogModel,
    status_code=status.HTTP_201_CREATED,
)
async def log_quick_calories(
    day: dt.date, payload: QuickCaloriesRequest, request: Request
) -> DailyLogModel:
    """Log a calories-only entry."""
    try:
        log = _container(request).tracking_service.log_quick_calories(
            day, payload.calories, payload.meal_type
        )
    except ValueError as exc:
        raise _unprocessable(exc) from exc
    return DailyLogModel.from_domain(log)


@router.delete("/log/{day}/entries/{entry_id}", response_model=DailyLogModel)
async def remove_entry(day: dt.date, entry_id: str, request: Request) -> DailyLogModel:
    """Remove a logged entry."""
    log = _container(request).tracking_service.remove_entry(day, entry_id)
    if log is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return DailyLogModel.from_domain(log)


@router.get("/stats/daily/{day}", response_model=DailyProgressModel)
async def daily_progress(day: dt.date, request: Request) -> DailyProgressModel:
    """Return progress against daily targets."""
    progress = _container(request).stats_service.daily_progress(day)
    return DailyProgressModel.from_domain(progress)


@router.get("/stats/weekly/{day}", response_model=WeeklyBudgetModel)
async def weekly_budget(day: dt.date, request: Request) -> WeeklyBudgetModel:
    """Return the weekly calorie budget for the week containing a day."""
    budget = _container(request).stats_service.weekly_budget(day)
    return WeeklyBudgetModel.from_domain(budget)


@router.get("/stats/last-days", response_model=list[DayCaloriesModel])
async def last_days_calories(
    request: Request,
    days: int = Query(default=7, ge=1, le=90),
    today: dt.date | None = None,
) -> list[DayCaloriesModel]:
    """Return calories per day for the trailing window, oldest first."""
    resolved_today = today or dt.date.today()
    series = _container(request).stats_service.last_days_calories(days, resolved_today)
    return [DayCaloriesModel(date=day, calories=calories) for day, calories in series]


@router.get("/stats/last-days/summary", response_model=CaloriesSummaryModel)
async def last_days_summary(
    request: Request,
    days: int = Query(default=7, ge=1, le=90),
    today: dt.date | None = None,
) -> CaloriesSummaryModel:
    """Return total and average calories over the trailing window."""
    resolved_today = today or dt.date.today()
    summary = _container(request).stats_service.last_days_summary(days, resolved_today)
    return CaloriesSummaryModel.from_domain(summary)


@router.get("/targets", response_model=TargetsModel)
async def get_targets(request: Request) -> TargetsModel:
    """Return the user's daily targets."""
    return TargetsModel.from_domain(_container(request).tracking_service.get_targets())


@router.put("/targets", response_model=TargetsModel)
async def update_targets(payload: TargetsUpdate, request: Request) -> TargetsModel:
    """Update some or all of the user's daily targets."""
    changes = payload.model_dump(exclude_none=True)
    try:
        targets = _container(request).tracking_service.update_targets(**changes)
    except ValueError as exc:
        raise _unprocessable(exc) from exc
    return TargetsModel.from_domain(targets)


@router.post("/weight", response_model=WeightModel, status_code=status.HTTP_201_CREATED)
async def log_weight(payload: WeightModel, request: Request) -> WeightModel:
    """Record body weight for a day."""
    log = _container(request).tracking_service.log_weight(
        payload.date, payload.weight_kg
    )
    return WeightModel.from_domain(log)


@router.get("/weight", response_model=list[WeightModel])
async def weight_trend(request: Request) -> list[WeightModel]:
    """Return weight logs ordered by day."""
    logs = _container(request).stats_service.weight_trend()
    return [WeightModel.from_domain(log) for log in logs]


@router.post("/waist", response_model=WaistModel, status_code=status.HTTP_201_CREATED)
async def log_waist(payload: WaistModel, request: Request) -> WaistModel:
    """Record waist size for a day."""
    log = _container(request).tracking_service.log_waist(
        payload.date, payload.waist_size_cm
    )
    return WaistModel.from_domain(log)


@router.get("/waist", response_model=list[WaistModel])
async def waist_trend(request: Request) -> list[WaistModel]:
    """Return waist measurements ordered by day."""
    logs = _container(request).stats_service.waist_trend()
    return [WaistModel.from_domain(log) for log in logs]
