"""In-process recorder keeping the latest point of every label set."""

from __future__ import annotations

import threading
from typing import Dict, FrozenSet, List, Tuple

import structlog

from predict_sidecar.domain.entities.time_series import Metric
from predict_sidecar.domain.ports.recorder import IRecordedMetricsReader, IRecorder

logger = structlog.get_logger(__name__)

_LabelSet = FrozenSet[Tuple[str, str]]


class InMemoryRecorder(IRecorder, IRecordedMetricsReader):
    """Latest-value store, like a gauge per label set."""

    def __init__(self) -> None:
        self._metrics: Dict[_LabelSet, Metric] = {}
        self._lock = threading.Lock()

    def record(self, metric: Metric) -> None:
        with self._lock:
            self._metrics[frozenset(metric.labels.items())] = metric
        logger.debug(
            "recorder.metric.recorded",
            metric=metric.name,
            value=metric.data_point.value,
            timestamp=metric.data_point.timestamp,
        )

    def snapshot(self) -> List[Metric]:
        with self._lock:
            metrics = list(self._metrics.values())
        return sorted(metrics, key=lambda m: (m.name, sorted(m.labels.items())))

    def __len__(self) -> int:
        with self._lock:
            return len(self._metrics)
