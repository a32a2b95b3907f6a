"""
Use Cases Package - Application Layer

Input assembly, the scoring cycle, ingestion and read-side use cases.
"""

from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .ingestion_use_case import AppendSeriesUseCase, GetSeriesUseCase
from .input_assembler import AssembledInput, InputAssembler
from .prediction_use_cases import GetRecordedPredictionsUseCase, RunScoringCycleUseCase
from .scoring_use_case import ScoreModelsUseCase, ScoringCycleReport

__all__ = [
    "AppendSeriesUseCase",
    "AssembledInput",
    "GetApplicationInfoUseCase",
    "GetHealthStatusUseCase",
    "GetRecordedPredictionsUseCase",
    "GetSeriesUseCase",
    "InputAssembler",
    "RunScoringCycleUseCase",
    "ScoreModelsUseCase",
    "ScoringCycleReport",
]
