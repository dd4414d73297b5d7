"""Process-local tracking repository keyed by calendar date."""

from dataclasses import dataclass, field
from datetime import date

from health_companion.domain.tracking import (
    BodyMeasurementLog,
    DailyLog,
    UserTargets,
    WeightLog,
)
from health_companion.services.tracking import TrackingRepository


@dataclass
class InMemoryTrackingRepository(TrackingRepository):
    """Keeps logs in dictionaries for the lifetime of the process."""

    daily_logs: dict[date, DailyLog] = field(default_factory=dict)
    weights: dict[date, WeightLog] = field(default_factory=dict)
    measurements: dict[date, BodyMeasurementLog] = field(default_factory=dict)
    targets: UserTargets | None = None

    def get_daily_log(self, day: date) -> DailyLog | None:
        return self.daily_logs.get(day)

    def save_daily_log(self, log: DailyLog) -> None:
        self.daily_logs[log.day] = log

    def list_daily_logs(self, start: date, end: date) -> list[DailyLog]:
        return [
            log
            for day, log in sorted(self.daily_logs.items())
            if start <= day <= end
        ]

    def save_weight(self, log: WeightLog) -> None:
        self.weights[log.day] = log

    def list_weights(self) -> list[WeightLog]:
        return list(self.weights.values())

    def save_measurement(self, log: BodyMeasurementLog) -> None:
        self.measurements[log.day] = log

    def list_measurements(self) -> list[BodyMeasurementLog]:
        return list(self.measurements.values())

    def get_targets(self) -> UserTargets | None:
        return self.targets

    def save_targets(self, targets: UserTargets) -> None:
        self.targets = targets
