"""Domain entities for buffered series points and recorded metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True, slots=True)
class DataPoint:
    """A single sample of a series; ``timestamp`` is in unix seconds."""

    value: float
    timestamp: int


@dataclass(frozen=True, slots=True)
class Metric:
    """A labeled point handed to the recorder."""

    labels: Dict[str, str]
    data_point: DataPoint

    @property
    def name(self) -> str:
        return self.labels.get("__name__", "")
