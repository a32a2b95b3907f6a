from .in_memory_recorder import InMemoryRecorder

__all__ = ["InMemoryRecorder"]
