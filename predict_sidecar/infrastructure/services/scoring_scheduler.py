"""
Infrastructure Services - Scoring scheduler

Periodic trigger of the scoring cycle. Buffers live in this process, so the
loop runs as an asyncio task next to the HTTP server instead of in a
separate worker.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

import structlog

from predict_sidecar.application.use_cases.scoring_use_case import ScoreModelsUseCase

logger = structlog.get_logger(__name__)


class ScoringScheduler:
    """Runs ``ScoreModelsUseCase`` every ``interval_seconds``."""

    def __init__(
        self,
        score_models_use_case: ScoreModelsUseCase,
        interval_seconds: float = 60.0,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        self._score_models = score_models_use_case
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self.cycles = 0
        self.last_run_at: Optional[datetime] = None

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="scoring-scheduler"
        )
        logger.info("scheduler.started", interval_seconds=self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("scheduler.stopped", cycles=self.cycles)

    async def run_once(self) -> None:
        try:
            await self._score_models.execute()
        except Exception as exc:
            logger.error("scheduler.cycle.failed", error=str(exc), exc_info=exc)
        finally:
            self.cycles += 1
            self.last_run_at = datetime.now(timezone.utc)

    async def _run(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self._interval)
