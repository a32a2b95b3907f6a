"""
Domain Errors

Error taxonomy of the sidecar. Scoring errors are per model and per cycle:
they are logged and the model is skipped until the next cycle. Registry
errors happen while loading models and are fatal at startup.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ScoringError(DomainError):
    """Base class for failures that abort one model for one scoring cycle."""


class MissingSeriesError(ScoringError):
    """Raised when a series required by a model has never been buffered."""

    def __init__(self, series_key: str, details: Optional[Dict[str, Any]] = None):
        self.series_key = series_key
        super().__init__(f"missing datapoints for: {series_key}", details)


class InsufficientHistoryError(ScoringError):
    """Raised when a series holds fewer points than a model window needs."""

    def __init__(
        self,
        series_key: str,
        required: int,
        available: int,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.series_key = series_key
        self.required = required
        self.available = available
        message = (
            f"series {series_key} has {available} points buffered, "
            f"{required} required"
        )
        super().__init__(message, details)


class DegenerateWindowError(ScoringError):
    """Raised when a window cannot be min-max scaled (empty, flat or non-finite)."""


class InferenceFailedError(ScoringError):
    """Raised when the model runtime fails, times out or returns an unusable output."""


class ModelRegistryError(DomainError):
    """Base class for model loading failures."""


class ModelLoadError(ModelRegistryError):
    """Raised when a model directory or its runtime artifact cannot be loaded."""


class ModelMetadataError(ModelRegistryError):
    """Raised when ``params.json`` is missing, malformed or inconsistent."""
