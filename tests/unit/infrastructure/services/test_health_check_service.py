from datetime import datetime, timedelta, timezone

import pytest

from predict_sidecar.domain.entities.health import ServiceStatus
from predict_sidecar.domain.entities.model import Model
from predict_sidecar.infrastructure.services import HealthCheckService, ScoringScheduler
from tests.conftest import StubRuntime, make_metadata, make_points


class _StubScheduler(ScoringScheduler):
    def __init__(self, running=True, last_run_at=None, interval_seconds=60.0):
        self._running = running
        self._interval = interval_seconds
        self.cycles = 3
        self.last_run_at = last_run_at

    @property
    def running(self) -> bool:
        return self._running


def _components(health):
    return {component.name: component for component in health.components}


@pytest.mark.asyncio
async def test_all_components_up(store, model):
    store.append("btc_usd", make_points([1, 2]))
    scheduler = _StubScheduler(last_run_at=datetime.now(timezone.utc))

    health = await HealthCheckService([model], store, scheduler).evaluate()

    assert health.status == ServiceStatus.UP
    components = _components(health)
    assert components["models"].details == {"model_keys": [model.key]}
    assert components["series_buffers"].details["missing_targets"] == []
    assert components["scoring_scheduler"].details["cycles"] == 3


@pytest.mark.asyncio
async def test_no_models_is_degraded(store):
    health = await HealthCheckService([], store, _StubScheduler()).evaluate()

    assert health.status == ServiceStatus.DEGRADED
    assert _components(health)["models"].status == ServiceStatus.DEGRADED


@pytest.mark.asyncio
async def test_missing_targets_are_reported(store):
    models = [
        Model(runtime=StubRuntime(), metadata=make_metadata(model_key="a")),
        Model(
            runtime=StubRuntime(),
            metadata=make_metadata(model_key="b", target="eth_usd"),
        ),
    ]
    store.append("btc_usd", make_points([1]))

    health = await HealthCheckService(models, store, _StubScheduler()).evaluate()

    buffers = _components(health)["series_buffers"]
    assert buffers.status == ServiceStatus.UP
    assert buffers.details["missing_targets"] == ["eth_usd"]


@pytest.mark.asyncio
async def test_disabled_scheduler_is_unknown(store, model):
    health = await HealthCheckService([model], store, None).evaluate()

    assert _components(health)["scoring_scheduler"].status == ServiceStatus.UNKNOWN
    assert health.status == ServiceStatus.UNKNOWN


@pytest.mark.asyncio
async def test_stopped_scheduler_is_down(store, model):
    health = await HealthCheckService(
        [model], store, _StubScheduler(running=False)
    ).evaluate()

    assert health.status == ServiceStatus.DOWN


@pytest.mark.asyncio
async def test_stale_scheduler_is_degraded(store, model):
    last_run = datetime.now(timezone.utc) - timedelta(seconds=600)
    scheduler = _StubScheduler(last_run_at=last_run, interval_seconds=60.0)

    health = await HealthCheckService([model], store, scheduler).evaluate()

    assert _components(health)["scoring_scheduler"].status == ServiceStatus.DEGRADED
    assert health.status == ServiceStatus.DEGRADED
