"""
Domain Entities - Model

Static description of a pre-trained forecasting model and its pairing with
the runtime handle that executes it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from predict_sidecar.domain.ports.model_runtime import IModelRuntime


@dataclass(frozen=True)
class ModelMetadata:
    """
    Parameters a model was trained with.

    ``columns`` order is the column layout of the input tensor and must be the
    same order used at training time.
    """

    model_key: str
    input_steps: int
    input_operation: str
    output_steps: int
    output_operation: str
    predict_future_duration: int
    target: str
    columns: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Model:
    """A loaded model runtime together with its metadata."""

    runtime: "IModelRuntime"
    metadata: ModelMetadata

    @property
    def key(self) -> str:
        return self.metadata.model_key
