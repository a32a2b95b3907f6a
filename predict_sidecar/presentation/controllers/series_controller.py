"""
Presentation Layer - Series Controller

Ingestion boundary and read access to the series buffers.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from predict_sidecar.application.dtos.series_dto import (
    DataPointDTO,
    SeriesAppendRequestDTO,
    SeriesAppendResponseDTO,
    SeriesDetailResponseDTO,
    SeriesListResponseDTO,
    SeriesSummaryDTO,
)
from predict_sidecar.application.use_cases.ingestion_use_case import (
    AppendSeriesUseCase,
    GetSeriesUseCase,
)
from predict_sidecar.main.container import AppContainer
from predict_sidecar.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/series", tags=["Series"])


@router.post(
    "",
    response_model=SeriesAppendResponseDTO,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Append points to a series",
    description="""
    Append chronologically ordered points to the buffer of the series named by
    the `__name__` label. A batch at least as large as the buffer capacity
    replaces the buffered history; smaller batches push out the oldest points.
    """,
)
@inject
async def append_series(
    payload: SeriesAppendRequestDTO,
    append_use_case: AppendSeriesUseCase = Depends(
        Provide[AppContainer.append_series_use_case]
    ),
) -> SeriesAppendResponseDTO:
    points = [point.to_domain() for point in payload.points]
    series_key, buffered = append_use_case.execute(payload.labels, points)
    return SeriesAppendResponseDTO(
        series_key=series_key, received=len(points), buffered=buffered
    )


@router.get(
    "",
    response_model=SeriesListResponseDTO,
    summary="List buffered series",
)
@inject
async def list_series(
    series_use_case: GetSeriesUseCase = Depends(
        Provide[AppContainer.get_series_use_case]
    ),
) -> SeriesListResponseDTO:
    return SeriesListResponseDTO(
        max_points=series_use_case.max_points,
        series=[
            SeriesSummaryDTO(series_key=key, buffered=size)
            for key, size in series_use_case.sizes().items()
        ],
    )


@router.get(
    "/{series_key}",
    response_model=SeriesDetailResponseDTO,
    summary="Read the buffer of one series",
)
@inject
async def get_series(
    series_key: str,
    series_use_case: GetSeriesUseCase = Depends(
        Provide[AppContainer.get_series_use_case]
    ),
) -> SeriesDetailResponseDTO:
    points = series_use_case.get(series_key)
    if points is None:
        logger.debug("series.not_found", series_key=series_key)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Series {series_key} is not buffered",
        )
    return SeriesDetailResponseDTO(
        series_key=series_key,
        points=[DataPointDTO.from_domain(point) for point in points],
    )
