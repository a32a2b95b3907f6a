"""
Infrastructure - TensorFlow model runtime

Runs frozen SavedModels through a TF1-style session so that inputs and
outputs can be addressed by graph operation name, the way the models'
``params.json`` refers to them.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np
import structlog
import tensorflow as tf  # type: ignore

from predict_sidecar.domain.ports.model_runtime import IModelRuntime

logger = structlog.get_logger(__name__)


class TensorFlowModelRuntime(IModelRuntime):
    """Session-backed runtime over one loaded SavedModel graph."""

    def __init__(self, session: "tf.compat.v1.Session", export_dir: str = ""):
        self._session = session
        self._graph = session.graph
        self._export_dir = export_dir

    @classmethod
    def load(cls, export_dir: str, tags: Sequence[str]) -> "TensorFlowModelRuntime":
        """Load the SavedModel at ``export_dir`` tagged with ``tags``."""
        graph = tf.Graph()
        session = tf.compat.v1.Session(graph=graph)
        try:
            with graph.as_default():
                tf.compat.v1.saved_model.load(session, list(tags), export_dir)
        except Exception:
            session.close()
            raise

        logger.info("runtime.tensorflow.loaded", export_dir=export_dir, tags=list(tags))
        return cls(session, export_dir)

    def _output_of(self, operation: str) -> "tf.Tensor":
        return self._graph.get_operation_by_name(operation).outputs[0]

    def run(
        self,
        inputs: Mapping[str, np.ndarray],
        outputs: Sequence[str],
    ) -> List[np.ndarray]:
        feed_dict = {
            self._output_of(name): np.asarray(value) for name, value in inputs.items()
        }
        fetches = [self._output_of(name) for name in outputs]
        results = self._session.run(fetches, feed_dict=feed_dict)
        return [np.asarray(result) for result in results]

    def input_shape(self, operation: str) -> Optional[Tuple[Optional[int], ...]]:
        try:
            shape = self._output_of(operation).shape
        except (KeyError, ValueError):
            return None
        if shape.rank is None:
            return None
        return tuple(shape.as_list())

    def close(self) -> None:
        self._session.close()
        logger.debug("runtime.tensorflow.closed", export_dir=self._export_dir)
