"""
Controllers Package - Presentation Layer

FastAPI routers mapping HTTP requests onto application use cases.
"""

from .predictions_controller import router as predictions_router
from .series_controller import router as series_router
from .system_controller import router as system_router

__all__ = ["predictions_router", "series_router", "system_router"]
