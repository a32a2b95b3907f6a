"""
Dependency container injection module - Main Layer

Composition root wiring the series store, the models, the recorder and the
scoring loop together with dependency-injector.
"""

from contextlib import asynccontextmanager
from typing import List, Optional

from dependency_injector import containers, providers

from predict_sidecar.application.models import SystemInfo
from predict_sidecar.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from predict_sidecar.application.use_cases.ingestion_use_case import (
    AppendSeriesUseCase,
    GetSeriesUseCase,
)
from predict_sidecar.application.use_cases.prediction_use_cases import (
    GetRecordedPredictionsUseCase,
    RunScoringCycleUseCase,
)
from predict_sidecar.application.use_cases.scoring_use_case import ScoreModelsUseCase
from predict_sidecar.domain.entities.model import Model
from predict_sidecar.domain.repositories.model_registry import IModelRegistry
from predict_sidecar.domain.services.series_buffer_store import SeriesBufferStore
from predict_sidecar.infrastructure.recorders import InMemoryRecorder
from predict_sidecar.infrastructure.repositories import FilesystemModelRegistry
from predict_sidecar.infrastructure.services import (
    HealthCheckService,
    ScoringScheduler,
)
from predict_sidecar.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _load_models(registry: IModelRegistry, path_spec: str) -> List[Model]:
    return registry.load_models(path_spec)


def _scheduler_if_enabled(
    enabled: bool, scheduler: ScoringScheduler
) -> Optional[ScoringScheduler]:
    return scheduler if enabled else None


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Domain services and infrastructure
    series_store = providers.Singleton(
        SeriesBufferStore,
        max_points=config.scoring.max_points,
    )

    recorder = providers.Singleton(InMemoryRecorder)

    model_registry = providers.Singleton(FilesystemModelRegistry)

    models = providers.Singleton(
        _load_models,
        registry=model_registry,
        path_spec=config.scoring.model_paths,
    )

    score_models_use_case = providers.Singleton(
        ScoreModelsUseCase,
        store=series_store,
        models=models,
        recorder=recorder,
        inference_timeout_seconds=config.scoring.inference_timeout_seconds,
    )

    scoring_scheduler = providers.Singleton(
        ScoringScheduler,
        score_models_use_case=score_models_use_case,
        interval_seconds=config.scoring.interval_seconds,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        models=models,
        store=series_store,
        scheduler=providers.Callable(
            _scheduler_if_enabled, config.scoring.enabled, scoring_scheduler
        ),
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.sidecar.title,
        description=config.sidecar.description,
        version=config.sidecar.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.sidecar.git_commit,
        build_time=config.sidecar.build_time,
        model_paths=config.scoring.model_paths,
        max_points=config.scoring.max_points,
        scoring_interval_seconds=config.scoring.interval_seconds,
        inference_timeout_seconds=config.scoring.inference_timeout_seconds,
    )

    # Application (use cases)
    append_series_use_case = providers.Factory(
        AppendSeriesUseCase,
        store=series_store,
    )

    get_series_use_case = providers.Factory(
        GetSeriesUseCase,
        store=series_store,
    )

    get_recorded_predictions_use_case = providers.Factory(
        GetRecordedPredictionsUseCase,
        reader=recorder,
    )

    run_scoring_cycle_use_case = providers.Factory(
        RunScoringCycleUseCase,
        score_models_use_case=score_models_use_case,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Startup and shutdown of the scoring resources.

    Models are loaded eagerly: a registry error aborts startup. The scoring
    scheduler is started when enabled and stopped before the runtimes are
    closed.
    """
    container = get_container()

    models = container.models()
    logger.info("container.models.loaded", count=len(models))

    scheduler: Optional[ScoringScheduler] = None
    if container.config.scoring.enabled():
        scheduler = container.scoring_scheduler()
        scheduler.start()

    try:
        yield container
    finally:
        if scheduler is not None:
            await scheduler.stop()
        for model in models:
            model.runtime.close()
        logger.info("container.resources.shutdown")
