"""
Domain Service - Min-max scaler

Scale parameters are derived from the window being scored, every cycle, so
the model never depends on statistics persisted at training time. The price
is that a flat window has no usable range; that case is an error here rather
than an infinite or NaN value flowing into the model or the published
prediction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from predict_sidecar.domain.entities.errors import DegenerateWindowError
from predict_sidecar.domain.entities.time_series import DataPoint


@dataclass(frozen=True, slots=True)
class ScaleParameters:
    """Min-max coefficients of one window."""

    min: float
    max: float
    scale: float
    offset: float

    @classmethod
    def from_values(cls, values: np.ndarray) -> "ScaleParameters":
        if values.size == 0:
            raise DegenerateWindowError("cannot scale an empty window")

        lowest = float(values.min())
        highest = float(values.max())
        spread = highest - lowest
        if not math.isfinite(spread):
            raise DegenerateWindowError(
                "window contains non-finite values",
                details={"min": lowest, "max": highest},
            )
        if spread == 0.0:
            raise DegenerateWindowError(
                "window has zero range",
                details={"min": lowest, "max": highest},
            )

        scale = 1.0 / spread
        return cls(min=lowest, max=highest, scale=scale, offset=-lowest * scale)


class Scaler:
    """Normalizes a window into roughly [0, 1] and maps model outputs back."""

    def __init__(self, points: Sequence[DataPoint]):
        self._values = np.fromiter(
            (point.value for point in points), dtype=np.float64, count=len(points)
        )
        self.params = ScaleParameters.from_values(self._values)

    @property
    def min(self) -> float:
        return self.params.min

    @property
    def max(self) -> float:
        return self.params.max

    @property
    def scale(self) -> float:
        return self.params.scale

    @property
    def offset(self) -> float:
        return self.params.offset

    def normalize(self) -> np.ndarray:
        return self._values * self.params.scale + self.params.offset

    def denormalize(self, value: float) -> float:
        return (float(value) - self.params.offset) / self.params.scale
