"""
Application Use Cases - Series ingestion

Entry point for externally collected points. The series key is the
``__name__`` label alone; other labels do not disambiguate series.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence, Tuple

import structlog

from predict_sidecar.domain.entities.time_series import DataPoint
from predict_sidecar.domain.services.series_buffer_store import SeriesBufferStore
from predict_sidecar.shared.consts import SERIES_NAME_LABEL

logger = structlog.get_logger(__name__)


def series_key_from_labels(labels: Mapping[str, str]) -> str:
    # TODO: key on the full label set once targets spanning several series are supported
    return labels.get(SERIES_NAME_LABEL, "")


class AppendSeriesUseCase:
    """Appends ingested points to the buffer of their series."""

    def __init__(self, store: SeriesBufferStore):
        self._store = store

    def execute(
        self, labels: Mapping[str, str], points: Sequence[DataPoint]
    ) -> Tuple[str, int]:
        """Returns the series key and its buffer length after the append."""
        series_key = series_key_from_labels(labels)
        buffered = self._store.append(series_key, points)
        logger.debug(
            "ingestion.points_received",
            series_key=series_key,
            received=len(points),
            buffered=buffered,
        )
        return series_key, buffered


class GetSeriesUseCase:
    """Read-only access to the buffered series."""

    def __init__(self, store: SeriesBufferStore):
        self._store = store

    @property
    def max_points(self) -> int:
        return self._store.max_points

    def get(self, series_key: str) -> Optional[Tuple[DataPoint, ...]]:
        return self._store.read(series_key)

    def sizes(self) -> Dict[str, int]:
        return self._store.sizes()
