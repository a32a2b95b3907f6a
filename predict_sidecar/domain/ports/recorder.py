"""Recorder ports: sink for predictions emitted by the scoring cycle."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from predict_sidecar.domain.entities.time_series import Metric


class IRecorder(ABC):
    """Fire-and-forget metric sink."""

    @abstractmethod
    def record(self, metric: Metric) -> None:
        """Publish a labeled point."""
        raise NotImplementedError


class IRecordedMetricsReader(ABC):
    """Read side of recorders that keep what they were given."""

    @abstractmethod
    def snapshot(self) -> List[Metric]:
        """Latest metric per label set."""
        raise NotImplementedError
