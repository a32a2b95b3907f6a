import asyncio

import pytest

from predict_sidecar.application.use_cases.scoring_use_case import (
    ScoreModelsUseCase,
    ScoringCycleReport,
)
from predict_sidecar.infrastructure.services import ScoringScheduler


class _CountingScoring(ScoreModelsUseCase):
    def __init__(self, error=None):
        self.calls = 0
        self.error = error

    async def execute(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return ScoringCycleReport()


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        ScoringScheduler(_CountingScoring(), interval_seconds=0)


@pytest.mark.asyncio
async def test_run_once_records_cycle():
    scoring = _CountingScoring()
    scheduler = ScoringScheduler(scoring, interval_seconds=60)

    await scheduler.run_once()

    assert scoring.calls == 1
    assert scheduler.cycles == 1
    assert scheduler.last_run_at is not None


@pytest.mark.asyncio
async def test_run_once_survives_unexpected_errors():
    scheduler = ScoringScheduler(_CountingScoring(RuntimeError("boom")))

    await scheduler.run_once()

    assert scheduler.cycles == 1


@pytest.mark.asyncio
async def test_start_runs_cycles_until_stopped():
    scoring = _CountingScoring()
    scheduler = ScoringScheduler(scoring, interval_seconds=0.01)

    scheduler.start()
    assert scheduler.running
    await asyncio.sleep(0.1)
    await scheduler.stop()

    assert not scheduler.running
    assert scoring.calls >= 2


@pytest.mark.asyncio
async def test_start_is_idempotent_and_stop_without_start_is_noop():
    scheduler = ScoringScheduler(_CountingScoring(), interval_seconds=60)

    await scheduler.stop()
    scheduler.start()
    task = scheduler._task
    scheduler.start()

    assert scheduler._task is task
    await scheduler.stop()
