"""
Application DTOs - Prediction

Recorded predictions and scoring cycle summaries exposed over HTTP.
"""

from typing import Dict, List

from pydantic import BaseModel, Field

from predict_sidecar.domain.entities.time_series import Metric


class RecordedPredictionDTO(BaseModel):
    """Latest point recorded for one label set."""

    name: str = Field(description="Metric name, e.g. predict_sidecar:btc_usd")
    labels: Dict[str, str] = Field(default_factory=dict)
    value: float
    timestamp: int = Field(description="Unix timestamp in seconds")

    @classmethod
    def from_domain(cls, metric: Metric) -> "RecordedPredictionDTO":
        return cls(
            name=metric.name,
            labels=dict(metric.labels),
            value=metric.data_point.value,
            timestamp=metric.data_point.timestamp,
        )


class PredictionsResponseDTO(BaseModel):
    predictions: List[RecordedPredictionDTO] = Field(default_factory=list)


class ScoringCycleResponseDTO(BaseModel):
    """Outcome of an on-demand scoring cycle, by model key."""

    scored: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(
        default_factory=list, description="Models whose target is not ready yet"
    )
    failed: Dict[str, str] = Field(
        default_factory=dict, description="Model key -> error type"
    )
    predictions: Dict[str, float] = Field(
        default_factory=dict, description="Model key -> denormalized prediction"
    )
