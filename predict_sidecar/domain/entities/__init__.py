"""
Domain Entities Package

Core value objects and the error taxonomy of the sidecar.
"""

from .errors import (
    DegenerateWindowError,
    DomainError,
    InferenceFailedError,
    InsufficientHistoryError,
    MissingSeriesError,
    ModelLoadError,
    ModelMetadataError,
    ModelRegistryError,
    ScoringError,
)
from .health import ApplicationInfo, ComponentStatus, ServiceStatus, SystemHealth
from .model import Model, ModelMetadata
from .time_series import DataPoint, Metric

__all__ = [
    "DataPoint",
    "Metric",
    "Model",
    "ModelMetadata",
    "SystemHealth",
    "ComponentStatus",
    "ServiceStatus",
    "ApplicationInfo",
    "DomainError",
    "ScoringError",
    "MissingSeriesError",
    "InsufficientHistoryError",
    "DegenerateWindowError",
    "InferenceFailedError",
    "ModelRegistryError",
    "ModelLoadError",
    "ModelMetadataError",
]
