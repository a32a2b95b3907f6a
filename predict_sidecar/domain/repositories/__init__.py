from .model_registry import IModelRegistry

__all__ = ["IModelRegistry"]
