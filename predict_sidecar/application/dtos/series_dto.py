"""
Series DTOs - Application Layer

Payloads of the ingestion boundary and of buffer inspection.
"""

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from predict_sidecar.domain.entities.time_series import DataPoint
from predict_sidecar.shared.consts import SERIES_NAME_LABEL


class DataPointDTO(BaseModel):
    """A single sample; ``timestamp`` is in unix seconds."""

    value: float = Field(description="Sample value")
    timestamp: int = Field(description="Unix timestamp in seconds")

    def to_domain(self) -> DataPoint:
        return DataPoint(value=self.value, timestamp=self.timestamp)

    @classmethod
    def from_domain(cls, point: DataPoint) -> "DataPointDTO":
        return cls(value=point.value, timestamp=point.timestamp)


class SeriesAppendRequestDTO(BaseModel):
    """Points for one labeled series, oldest first."""

    labels: Dict[str, str] = Field(
        description="Series labels; the series key is the '__name__' label"
    )
    points: List[DataPointDTO] = Field(
        default_factory=list, description="Chronologically ordered samples"
    )

    @field_validator("labels")
    @classmethod
    def _require_name(cls, labels: Dict[str, str]) -> Dict[str, str]:
        if not labels.get(SERIES_NAME_LABEL):
            raise ValueError(f"labels must include a non-empty '{SERIES_NAME_LABEL}'")
        return labels

    model_config = {
        "json_schema_extra": {
            "example": {
                "labels": {"__name__": "btc_usd", "exchange": "gdax"},
                "points": [
                    {"value": 6512.5, "timestamp": 1538352000},
                    {"value": 6514.0, "timestamp": 1538352060},
                ],
            }
        }
    }


class SeriesAppendResponseDTO(BaseModel):
    """Result of an append."""

    series_key: str
    received: int = Field(ge=0, description="Points received in the request")
    buffered: int = Field(ge=0, description="Buffer length after the append")


class SeriesSummaryDTO(BaseModel):
    """Buffered series and their lengths."""

    series_key: str
    buffered: int


class SeriesListResponseDTO(BaseModel):
    max_points: int
    series: List[SeriesSummaryDTO] = Field(default_factory=list)


class SeriesDetailResponseDTO(BaseModel):
    """Full buffer content of one series."""

    series_key: str
    points: List[DataPointDTO] = Field(default_factory=list)
