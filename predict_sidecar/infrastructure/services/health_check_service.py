"""Infrastructure implementation for system health checks."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from predict_sidecar.domain.entities.health import (
    ComponentStatus,
    ServiceStatus,
    SystemHealth,
)
from predict_sidecar.domain.entities.model import Model
from predict_sidecar.domain.ports.health_check import IHealthCheckService
from predict_sidecar.domain.services.series_buffer_store import SeriesBufferStore
from predict_sidecar.infrastructure.services.scoring_scheduler import ScoringScheduler


class HealthCheckService(IHealthCheckService):
    """Reports on loaded models, buffered series and the scoring loop."""

    def __init__(
        self,
        models: Sequence[Model],
        store: SeriesBufferStore,
        scheduler: Optional[ScoringScheduler] = None,
        *,
        stale_after_intervals: float = 3.0,
    ) -> None:
        self._models = list(models)
        self._store = store
        self._scheduler = scheduler
        self._stale_after_intervals = stale_after_intervals

    async def evaluate(self) -> SystemHealth:
        components = [
            self._check_models(),
            self._check_buffers(),
            self._check_scheduler(),
        ]
        return SystemHealth(
            status=self._aggregate_status(components), components=components
        )

    def _aggregate_status(self, statuses: Iterable[ComponentStatus]) -> ServiceStatus:
        has_unknown = False
        has_degraded = False

        for status in statuses:
            if status.status == ServiceStatus.DOWN:
                return ServiceStatus.DOWN
            if status.status == ServiceStatus.DEGRADED:
                has_degraded = True
            if status.status == ServiceStatus.UNKNOWN:
                has_unknown = True

        if has_degraded:
            return ServiceStatus.DEGRADED
        if has_unknown:
            return ServiceStatus.UNKNOWN
        return ServiceStatus.UP

    def _check_models(self) -> ComponentStatus:
        keys: List[str] = [model.key for model in self._models]
        if not keys:
            return ComponentStatus(
                name="models",
                status=ServiceStatus.DEGRADED,
                message="No models configured; nothing will be scored.",
            )
        return ComponentStatus(
            name="models",
            status=ServiceStatus.UP,
            message=f"{len(keys)} models loaded",
            details={"model_keys": keys},
        )

    def _check_buffers(self) -> ComponentStatus:
        targets = {model.metadata.target for model in self._models}
        buffered = set(self._store.keys())
        missing = sorted(targets - buffered)
        return ComponentStatus(
            name="series_buffers",
            status=ServiceStatus.UP,
            message=f"{len(buffered)} series buffered",
            details={
                "max_points": self._store.max_points,
                "missing_targets": missing,
            },
        )

    def _check_scheduler(self) -> ComponentStatus:
        scheduler = self._scheduler
        if scheduler is None:
            return ComponentStatus(
                name="scoring_scheduler",
                status=ServiceStatus.UNKNOWN,
                message="Scoring scheduler disabled.",
            )
        if not scheduler.running:
            return ComponentStatus(
                name="scoring_scheduler",
                status=ServiceStatus.DOWN,
                message="Scoring scheduler is not running.",
                details={"cycles": scheduler.cycles},
            )

        details = {
            "cycles": scheduler.cycles,
            "interval_seconds": scheduler.interval_seconds,
            "last_run_at": scheduler.last_run_at.isoformat()
            if scheduler.last_run_at
            else None,
        }
        if scheduler.last_run_at is not None:
            elapsed = (datetime.now(timezone.utc) - scheduler.last_run_at).total_seconds()
            if elapsed > scheduler.interval_seconds * self._stale_after_intervals:
                return ComponentStatus(
                    name="scoring_scheduler",
                    status=ServiceStatus.DEGRADED,
                    message=f"Last scoring cycle ran {elapsed:.0f}s ago.",
                    details=details,
                )
        return ComponentStatus(
            name="scoring_scheduler",
            status=ServiceStatus.UP,
            message="Scoring scheduler running.",
            details=details,
        )
