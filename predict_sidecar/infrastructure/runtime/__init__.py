from .tensorflow_runtime import TensorFlowModelRuntime

__all__ = ["TensorFlowModelRuntime"]
