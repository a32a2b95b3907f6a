"""
Presentation Layer - Predictions Controller

Exposes the predictions recorded by the scoring cycle and lets operators
trigger a cycle on demand.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from predict_sidecar.application.dtos.prediction_dto import (
    PredictionsResponseDTO,
    ScoringCycleResponseDTO,
)
from predict_sidecar.application.use_cases.prediction_use_cases import (
    GetRecordedPredictionsUseCase,
    RunScoringCycleUseCase,
)
from predict_sidecar.main.container import AppContainer
from predict_sidecar.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/predictions", tags=["Predictions"])


@router.get(
    "",
    response_model=PredictionsResponseDTO,
    summary="Latest recorded predictions",
)
@inject
async def list_predictions(
    predictions_use_case: GetRecordedPredictionsUseCase = Depends(
        Provide[AppContainer.get_recorded_predictions_use_case]
    ),
) -> PredictionsResponseDTO:
    return predictions_use_case.execute()


@router.post(
    "/score",
    response_model=ScoringCycleResponseDTO,
    summary="Run a scoring cycle now",
    description="""
    Score every configured model once, exactly like a scheduled cycle. Models
    that are not ready or fail are reported, not raised.
    """,
)
@inject
async def run_scoring_cycle(
    scoring_use_case: RunScoringCycleUseCase = Depends(
        Provide[AppContainer.run_scoring_cycle_use_case]
    ),
) -> ScoringCycleResponseDTO:
    try:
        return await scoring_use_case.execute()
    except Exception as exc:
        logger.error("predictions.score.unexpected_error", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from exc
