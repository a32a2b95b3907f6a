"""Model runtime port: opaque inference engine behind a loaded model."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np


class IModelRuntime(ABC):
    """Runs a model graph given named input operations and requested outputs."""

    @abstractmethod
    def run(
        self,
        inputs: Mapping[str, np.ndarray],
        outputs: Sequence[str],
    ) -> List[np.ndarray]:
        """
        Execute inference.

        Args:
            inputs: Input operation name -> tensor to feed.
            outputs: Output operation names to fetch, in order.

        Returns:
            One array per requested output, in the same order.
        """
        raise NotImplementedError

    def input_shape(self, operation: str) -> Optional[Tuple[Optional[int], ...]]:
        """Static shape of an input operation, ``None`` when the runtime cannot tell."""
        return None

    def close(self) -> None:
        """Release resources held by the runtime."""
