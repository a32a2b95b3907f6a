"""Domain services: window scaling, series buffering and metadata checks."""

from .model_metadata_validator import validate_model_metadata
from .scaler import ScaleParameters, Scaler
from .series_buffer_store import SeriesBufferStore

__all__ = [
    "ScaleParameters",
    "Scaler",
    "SeriesBufferStore",
    "validate_model_metadata",
]
