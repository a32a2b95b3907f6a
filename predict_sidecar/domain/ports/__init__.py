"""Ports consumed by the application layer."""

from .health_check import IHealthCheckService
from .model_runtime import IModelRuntime
from .recorder import IRecordedMetricsReader, IRecorder

__all__ = [
    "IHealthCheckService",
    "IModelRuntime",
    "IRecordedMetricsReader",
    "IRecorder",
]
