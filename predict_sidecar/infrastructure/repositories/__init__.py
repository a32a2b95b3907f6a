from .filesystem_model_registry import FilesystemModelRegistry, ModelParamsDocument

__all__ = ["FilesystemModelRegistry", "ModelParamsDocument"]
