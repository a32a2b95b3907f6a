"""
Domain Service - Series buffer store

Bounded, time-ordered buffers keyed by series key. Ingestion appends while
the scoring cycle reads, possibly from different threads, so every access to
the table goes through one lock and callers only ever get copies.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Tuple

from predict_sidecar.domain.entities.time_series import DataPoint
from predict_sidecar.shared.logging import get_logger

logger = get_logger(__name__)


class SeriesBufferStore:
    """Keeps at most ``max_points`` points per series, oldest first."""

    def __init__(self, max_points: int):
        if max_points < 1:
            raise ValueError("max_points must be at least 1")
        self._max_points = max_points
        self._buffers: Dict[str, Deque[DataPoint]] = {}
        self._lock = threading.Lock()

    @property
    def max_points(self) -> int:
        return self._max_points

    def append(self, series_key: str, points: Sequence[DataPoint]) -> int:
        """
        Append ``points`` to the buffer of ``series_key``.

        A batch of ``max_points`` or more replaces the buffer with its own
        last ``max_points`` entries; older history is dropped entirely.
        Smaller batches push the oldest buffered points out FIFO. Points are
        trusted to be in chronological order.

        Returns:
            The buffer length after the append.
        """
        points = list(points)
        with self._lock:
            if len(points) >= self._max_points:
                buffer = deque(points[-self._max_points :], maxlen=self._max_points)
                self._buffers[series_key] = buffer
            else:
                buffer = self._buffers.setdefault(
                    series_key, deque(maxlen=self._max_points)
                )
                buffer.extend(points)
            size = len(buffer)

        logger.debug(
            "series.appended", series_key=series_key, received=len(points), size=size
        )
        return size

    def read(self, series_key: str) -> Optional[Tuple[DataPoint, ...]]:
        """Copy of one buffer, ``None`` when the series was never appended."""
        with self._lock:
            buffer = self._buffers.get(series_key)
            return tuple(buffer) if buffer is not None else None

    def snapshot(
        self, series_keys: Iterable[str], tail: Optional[int] = None
    ) -> Dict[str, Tuple[DataPoint, ...]]:
        """
        Copy several buffers in one critical section.

        Args:
            series_keys: Keys to copy; unknown keys are left out of the result.
            tail: When given, only the last ``tail`` points of each buffer.
        """
        result: Dict[str, Tuple[DataPoint, ...]] = {}
        with self._lock:
            for key in series_keys:
                buffer = self._buffers.get(key)
                if buffer is None:
                    continue
                points = tuple(buffer)
                if tail is not None:
                    points = points[-tail:] if tail > 0 else ()
                result[key] = points
        return result

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._buffers)

    def sizes(self) -> Dict[str, int]:
        with self._lock:
            return {key: len(buffer) for key, buffer in sorted(self._buffers.items())}

    def __contains__(self, series_key: object) -> bool:
        with self._lock:
            return series_key in self._buffers

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffers)
