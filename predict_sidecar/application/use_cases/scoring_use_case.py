"""
Application Use Case - Model scoring

One scoring cycle walks every configured model and, for each of them:
  * checks that the target series holds more than ``input_steps`` points
  * assembles the normalized input from one snapshot of the buffers
  * runs inference off the event loop, bounded by a timeout, with at most one
    call in flight per model
  * denormalizes output ``[0][0]`` with the target window of the same snapshot
  * records the prediction as ``predict_sidecar:<target>``

A failing model is logged and skipped; the others still run.
"""

from __future__ import annotations

import asyncio
import functools
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
import structlog

from predict_sidecar.application.use_cases.input_assembler import (
    InputAssembler,
    window_tail,
)
from predict_sidecar.domain.entities.errors import InferenceFailedError, ScoringError
from predict_sidecar.domain.entities.model import Model, ModelMetadata
from predict_sidecar.domain.entities.time_series import DataPoint, Metric
from predict_sidecar.domain.ports.recorder import IRecorder
from predict_sidecar.domain.services.scaler import Scaler
from predict_sidecar.domain.services.series_buffer_store import SeriesBufferStore
from predict_sidecar.shared.consts import (
    PREDICTION_DURATION_LABEL,
    PREDICTION_NAME_PREFIX,
    SERIES_NAME_LABEL,
)

logger = structlog.get_logger(__name__)


@dataclass
class ScoringCycleReport:
    """Outcome of one scoring cycle, by model key."""

    scored: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    predictions: Dict[str, float] = field(default_factory=dict)


def prediction_labels(metadata: ModelMetadata) -> Dict[str, str]:
    return {
        SERIES_NAME_LABEL: f"{PREDICTION_NAME_PREFIX}:{metadata.target}",
        PREDICTION_DURATION_LABEL: str(metadata.predict_future_duration),
    }


def _consume_result(future: asyncio.Future) -> None:
    # Abandoned calls: mark their outcome as retrieved.
    if not future.cancelled():
        future.exception()


class ScoreModelsUseCase:
    """Runs one scoring cycle over the configured models."""

    def __init__(
        self,
        store: SeriesBufferStore,
        models: Sequence[Model],
        recorder: IRecorder,
        *,
        assembler: Optional[InputAssembler] = None,
        inference_timeout_seconds: Optional[float] = 10.0,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self._models = list(models)
        self._recorder = recorder
        self._assembler = assembler or InputAssembler(store)
        self._inference_timeout = inference_timeout_seconds
        self._clock = clock
        # Last executor call per model key; a hung runtime holds at most one worker.
        self._in_flight: Dict[str, asyncio.Future] = {}

    @property
    def models(self) -> List[Model]:
        return list(self._models)

    async def execute(self) -> ScoringCycleReport:
        report = ScoringCycleReport()

        for model in self._models:
            key = model.key
            try:
                prediction = await self._score_model(model)
            except ScoringError as exc:
                report.failed[key] = type(exc).__name__
                logger.warning(
                    "scoring.model.failed",
                    model_key=key,
                    error_type=type(exc).__name__,
                    error=exc.message,
                    details=exc.details or None,
                )
                continue

            if prediction is None:
                report.skipped.append(key)
                continue

            if not self._publish(model, prediction):
                report.failed[key] = "RecorderError"
                continue

            report.scored.append(key)
            report.predictions[key] = prediction.data_point.value

        logger.info(
            "scoring.cycle.completed",
            scored=len(report.scored),
            skipped=len(report.skipped),
            failed=len(report.failed),
        )
        return report

    async def _score_model(self, model: Model) -> Optional[Metric]:
        metadata = model.metadata

        # One extra point is enough to tell "more than input_steps" apart.
        snapshot = self._store.snapshot(
            {*metadata.columns, metadata.target}, tail=metadata.input_steps + 1
        )
        target_points = snapshot.get(metadata.target)
        if target_points is None or len(target_points) <= metadata.input_steps:
            logger.debug(
                "scoring.model.not_ready",
                model_key=model.key,
                target=metadata.target,
                buffered=len(target_points) if target_points is not None else 0,
                required=metadata.input_steps + 1,
            )
            return None

        assembled = self._assembler.assemble(metadata, snapshot)
        output = await self._infer(model, assembled.tensor())

        target_scaler = Scaler(
            window_tail(metadata.target, target_points, metadata.input_steps)
        )
        value = target_scaler.denormalize(output)

        return Metric(
            labels=prediction_labels(metadata),
            data_point=DataPoint(value=value, timestamp=int(self._clock())),
        )

    async def _infer(self, model: Model, tensor: np.ndarray) -> float:
        metadata = model.metadata
        pending = self._in_flight.get(model.key)
        if pending is not None and not pending.done():
            raise InferenceFailedError(
                "previous inference is still running", details={"model": model.key}
            )

        call = asyncio.get_running_loop().run_in_executor(
            None,
            functools.partial(
                model.runtime.run,
                {metadata.input_operation: tensor},
                [metadata.output_operation],
            ),
        )
        call.add_done_callback(_consume_result)
        self._in_flight[model.key] = call
        try:
            # Shielded so a timeout leaves the future tracking the running call.
            outputs = await asyncio.wait_for(
                asyncio.shield(call), timeout=self._inference_timeout
            )
        except asyncio.TimeoutError as exc:
            raise InferenceFailedError(
                f"inference timed out after {self._inference_timeout}s",
                details={"model": model.key},
            ) from exc
        except Exception as exc:
            raise InferenceFailedError(
                f"failed to run model: {exc}", details={"model": model.key}
            ) from exc

        return self._extract_prediction(model, outputs)

    def _extract_prediction(self, model: Model, outputs: Sequence[np.ndarray]) -> float:
        if not outputs:
            raise InferenceFailedError(
                "model returned no outputs", details={"model": model.key}
            )

        result = np.asarray(outputs[0])
        if result.ndim < 2 or result.size == 0:
            raise InferenceFailedError(
                f"unexpected output shape {result.shape}, expected [batch][steps]",
                details={"model": model.key},
            )

        value = float(np.ravel(result[0][0])[0])
        if not math.isfinite(value):
            raise InferenceFailedError(
                "model returned a non-finite prediction",
                details={"model": model.key, "value": value},
            )
        return value

    def _publish(self, model: Model, metric: Metric) -> bool:
        try:
            self._recorder.record(metric)
        except Exception as exc:
            logger.error(
                "scoring.publish.failed",
                model_key=model.key,
                metric=metric.name,
                error=str(exc),
                exc_info=exc,
            )
            return False

        logger.info(
            "scoring.model.scored",
            model_key=model.key,
            metric=metric.name,
            value=metric.data_point.value,
            timestamp=metric.data_point.timestamp,
        )
        return True
