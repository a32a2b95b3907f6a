"""Use cases exposing scoring results."""

from __future__ import annotations

from predict_sidecar.application.dtos.prediction_dto import (
    PredictionsResponseDTO,
    RecordedPredictionDTO,
    ScoringCycleResponseDTO,
)
from predict_sidecar.application.use_cases.scoring_use_case import ScoreModelsUseCase
from predict_sidecar.domain.ports.recorder import IRecordedMetricsReader


class GetRecordedPredictionsUseCase:
    """Returns the latest recorded prediction per label set."""

    def __init__(self, reader: IRecordedMetricsReader) -> None:
        self._reader = reader

    def execute(self) -> PredictionsResponseDTO:
        return PredictionsResponseDTO(
            predictions=[
                RecordedPredictionDTO.from_domain(metric)
                for metric in self._reader.snapshot()
            ]
        )


class RunScoringCycleUseCase:
    """Runs a scoring cycle on demand, outside of the scheduler."""

    def __init__(self, score_models_use_case: ScoreModelsUseCase) -> None:
        self._score_models = score_models_use_case

    async def execute(self) -> ScoringCycleResponseDTO:
        report = await self._score_models.execute()
        return ScoringCycleResponseDTO(
            scored=report.scored,
            skipped=report.skipped,
            failed=report.failed,
            predictions=report.predictions,
        )
