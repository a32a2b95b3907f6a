"""
Model Registry Interface

Abstracts where pre-trained models and their metadata come from. The
filesystem implementation reads one directory per model.
"""

from abc import ABC, abstractmethod
from typing import List

from predict_sidecar.domain.entities.model import Model


class IModelRegistry(ABC):
    """Interface for model registry implementations."""

    @abstractmethod
    def load_models(self, path_spec: str) -> List[Model]:
        """
        Load every model referenced by ``path_spec``.

        Args:
            path_spec: Colon-separated list of model directories.

        Returns:
            Loaded models, in the order given.

        Raises:
            ModelLoadError: A directory or its runtime artifact is invalid.
            ModelMetadataError: A ``params.json`` is missing or inconsistent.
        """
        pass
