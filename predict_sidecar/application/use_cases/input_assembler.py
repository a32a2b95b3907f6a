"""
Application Use Case - Input assembly

Turns buffered series into the input tensor of one model. Every column is
scaled independently over its own last ``input_steps`` points, and the
column order of the model metadata is the column order of the tensor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

import numpy as np

from predict_sidecar.domain.entities.errors import (
    InsufficientHistoryError,
    MissingSeriesError,
)
from predict_sidecar.domain.entities.model import ModelMetadata
from predict_sidecar.domain.entities.time_series import DataPoint
from predict_sidecar.domain.services.scaler import Scaler
from predict_sidecar.domain.services.series_buffer_store import SeriesBufferStore


@dataclass(frozen=True)
class AssembledInput:
    """
    Normalized model input.

    ``flat`` holds the normalized windows concatenated column after column,
    so ``flat[col * steps + step]`` is column ``col`` at ``step``.
    """

    flat: np.ndarray
    steps: int
    columns: Tuple[str, ...]

    def tensor(self) -> np.ndarray:
        """Input as float32 ``[1][steps][columns]`` (batch of one window)."""
        by_column = self.flat.reshape(len(self.columns), self.steps)
        return np.ascontiguousarray(by_column.T, dtype=np.float32)[np.newaxis, ...]


def window_tail(
    series_key: str, points: Sequence[DataPoint], steps: int
) -> Sequence[DataPoint]:
    """Last ``steps`` points of a series, failing when fewer are buffered."""
    if len(points) < steps:
        raise InsufficientHistoryError(series_key, required=steps, available=len(points))
    return points[len(points) - steps :]


class InputAssembler:
    """Builds model inputs from the series buffer store."""

    def __init__(self, store: SeriesBufferStore):
        self._store = store

    def assemble(
        self,
        metadata: ModelMetadata,
        snapshot: Optional[Mapping[str, Sequence[DataPoint]]] = None,
    ) -> AssembledInput:
        """
        Assemble the input of ``metadata``'s model.

        Args:
            metadata: Model whose columns and step count drive the assembly.
            snapshot: Buffers copied earlier in the same cycle; read from the
                store when omitted.

        Raises:
            MissingSeriesError: A column has never been buffered.
            InsufficientHistoryError: A column has fewer than ``input_steps`` points.
            DegenerateWindowError: A column window cannot be scaled.
        """
        if snapshot is None:
            snapshot = self._store.snapshot(metadata.columns, tail=metadata.input_steps)

        # Validate every column before scaling any of them.
        windows = []
        for column in metadata.columns:
            points = snapshot.get(column)
            if points is None:
                raise MissingSeriesError(column, details={"model": metadata.model_key})
            windows.append(window_tail(column, points, metadata.input_steps))

        normalized = [Scaler(window).normalize() for window in windows]
        flat = np.concatenate(normalized) if normalized else np.empty(0)

        return AssembledInput(
            flat=flat,
            steps=metadata.input_steps,
            columns=tuple(metadata.columns),
        )
