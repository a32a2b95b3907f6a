"""
DTOs Package - Application Layer

Pydantic models exchanged between the application and presentation layers.
"""

from .health_dto import ApplicationInfoDTO, ComponentStatusDTO, SystemHealthDTO
from .prediction_dto import (
    PredictionsResponseDTO,
    RecordedPredictionDTO,
    ScoringCycleResponseDTO,
)
from .series_dto import (
    DataPointDTO,
    SeriesAppendRequestDTO,
    SeriesAppendResponseDTO,
    SeriesDetailResponseDTO,
    SeriesListResponseDTO,
    SeriesSummaryDTO,
)

__all__ = [
    "ApplicationInfoDTO",
    "ComponentStatusDTO",
    "SystemHealthDTO",
    "PredictionsResponseDTO",
    "RecordedPredictionDTO",
    "ScoringCycleResponseDTO",
    "DataPointDTO",
    "SeriesAppendRequestDTO",
    "SeriesAppendResponseDTO",
    "SeriesDetailResponseDTO",
    "SeriesListResponseDTO",
    "SeriesSummaryDTO",
]
