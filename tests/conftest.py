from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from predict_sidecar.domain.entities.model import Model, ModelMetadata  # noqa: E402
from predict_sidecar.domain.entities.time_series import DataPoint, Metric  # noqa: E402
from predict_sidecar.domain.ports.model_runtime import IModelRuntime  # noqa: E402
from predict_sidecar.domain.ports.recorder import IRecorder  # noqa: E402
from predict_sidecar.domain.services.series_buffer_store import (  # noqa: E402
    SeriesBufferStore,
)


def make_points(values: Iterable[float], start: int = 1_600_000_000) -> List[DataPoint]:
    return [
        DataPoint(value=float(value), timestamp=start + idx * 60)
        for idx, value in enumerate(values)
    ]


class StubRuntime(IModelRuntime):
    """Returns a fixed output and remembers what it was fed."""

    def __init__(
        self,
        output: Optional[np.ndarray] = None,
        error: Optional[Exception] = None,
        shape: Optional[Tuple[Optional[int], ...]] = None,
    ):
        self.output = (
            np.array([[0.5]], dtype=np.float32) if output is None else output
        )
        self.error = error
        self.shape = shape
        self.calls: List[Tuple[dict, List[str]]] = []
        self.closed = False

    def run(
        self, inputs: Mapping[str, np.ndarray], outputs: Sequence[str]
    ) -> List[np.ndarray]:
        self.calls.append((dict(inputs), list(outputs)))
        if self.error is not None:
            raise self.error
        return [self.output]

    def input_shape(self, operation: str) -> Optional[Tuple[Optional[int], ...]]:
        return self.shape

    def close(self) -> None:
        self.closed = True


class ListRecorder(IRecorder):
    def __init__(self) -> None:
        self.metrics: List[Metric] = []

    def record(self, metric: Metric) -> None:
        self.metrics.append(metric)


def make_metadata(
    model_key: str = "model-btc_usd-5m",
    target: str = "btc_usd",
    columns: Sequence[str] = ("btc_usd", "eth_usd"),
    input_steps: int = 3,
    predict_future_duration: int = 300,
) -> ModelMetadata:
    return ModelMetadata(
        model_key=model_key,
        input_steps=input_steps,
        input_operation="lstm_input",
        output_steps=1,
        output_operation="dense/BiasAdd",
        predict_future_duration=predict_future_duration,
        target=target,
        columns=tuple(columns),
    )


@pytest.fixture()
def store() -> SeriesBufferStore:
    return SeriesBufferStore(max_points=10)


@pytest.fixture()
def metadata() -> ModelMetadata:
    return make_metadata()


@pytest.fixture()
def stub_runtime() -> StubRuntime:
    return StubRuntime()


@pytest.fixture()
def model(metadata: ModelMetadata, stub_runtime: StubRuntime) -> Model:
    return Model(runtime=stub_runtime, metadata=metadata)


@pytest.fixture()
def recorder() -> ListRecorder:
    return ListRecorder()
