"""System endpoints exposing health and info."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from predict_sidecar.application.dtos.health_dto import (
    ApplicationInfoDTO,
    SystemHealthDTO,
)
from predict_sidecar.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from predict_sidecar.domain.entities.health import ServiceStatus
from predict_sidecar.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=SystemHealthDTO)
@inject
async def health(
    response: Response,
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> SystemHealthDTO:
    """
    Return the health status of the sidecar components.

    Answers 503 when the overall status is down; degraded and unknown
    statuses still answer 200.
    """
    try:
        health_status = await get_health_status_use_case.execute()
    except Exception as exc:
        logger.error("health.check.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system health status",
        ) from exc

    logger.debug(
        "health.retrieved",
        status=health_status.status.value,
        components={c.name: c.status.value for c in health_status.components},
    )
    if health_status.status == ServiceStatus.DOWN:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return health_status


@router.get("/info", response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide["get_application_info_use_case"]
    ),
) -> ApplicationInfoDTO:
    """Return build, configuration and status information."""
    started_at = getattr(request.app.state, "started_at", None)
    try:
        app_info = await get_application_info_use_case.execute(started_at)
    except Exception as exc:
        logger.error("info.fetch.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to retrieve application info",
        ) from exc

    logger.debug(
        "info.retrieved",
        status=app_info.status.value,
        uptime_seconds=app_info.uptime_seconds,
        model_paths=app_info.extras.get("scoring", {}).get("model_paths", []),
    )
    return app_info
