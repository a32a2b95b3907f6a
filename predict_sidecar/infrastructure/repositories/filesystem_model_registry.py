"""
Infrastructure - Filesystem model registry

Each model lives in its own directory holding a SavedModel tagged with the
directory name and a ``params.json`` such as::

    {
        "model_key": "model-btc_usd-5m",
        "input_steps": 30,
        "input_operation": "lstm_input",
        "output_steps": 1,
        "output_operation": "dense/BiasAdd",
        "predict_future_duration": 300,
        "target": "btc_usd",
        "columns": ["btc_usd", "eth_usd"]
    }
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence

import structlog
from pydantic import BaseModel, Field, ValidationError

from predict_sidecar.domain.entities.errors import (
    ModelLoadError,
    ModelMetadataError,
    ModelRegistryError,
)
from predict_sidecar.domain.entities.model import Model, ModelMetadata
from predict_sidecar.domain.ports.model_runtime import IModelRuntime
from predict_sidecar.domain.repositories.model_registry import IModelRegistry
from predict_sidecar.domain.services.model_metadata_validator import (
    validate_model_metadata,
)
from predict_sidecar.shared.consts import MODEL_PARAMS_FILENAME, MODEL_PATH_SEPARATOR

logger = structlog.get_logger(__name__)

RuntimeLoader = Callable[[str, Sequence[str]], IModelRuntime]


class ModelParamsDocument(BaseModel):
    """Schema of ``params.json``."""

    model_key: Optional[str] = Field(
        default=None, description="Model identifier, defaults to the directory name"
    )
    input_steps: int
    input_operation: str
    output_steps: int
    output_operation: str
    predict_future_duration: int
    target: str
    columns: List[str]

    model_config = {"extra": "ignore", "protected_namespaces": ()}

    def to_domain(self, default_key: str) -> ModelMetadata:
        return ModelMetadata(
            model_key=self.model_key or default_key,
            input_steps=self.input_steps,
            input_operation=self.input_operation,
            output_steps=self.output_steps,
            output_operation=self.output_operation,
            predict_future_duration=self.predict_future_duration,
            target=self.target,
            columns=tuple(self.columns),
        )


def _default_runtime_loader(export_dir: str, tags: Sequence[str]) -> IModelRuntime:
    from predict_sidecar.infrastructure.runtime.tensorflow_runtime import (
        TensorFlowModelRuntime,
    )

    return TensorFlowModelRuntime.load(export_dir, tags)


class FilesystemModelRegistry(IModelRegistry):
    """Loads models from a colon-separated list of directories."""

    def __init__(self, runtime_loader: Optional[RuntimeLoader] = None):
        self._runtime_loader = runtime_loader or _default_runtime_loader

    def load_models(self, path_spec: str) -> List[Model]:
        models: List[Model] = []
        if not path_spec:
            logger.warning("registry.no_model_paths")
            return models

        try:
            for path in path_spec.split(MODEL_PATH_SEPARATOR):
                models.append(self._load_model(path))
        except ModelRegistryError:
            for model in models:
                model.runtime.close()
            raise

        logger.info(
            "registry.models_loaded",
            count=len(models),
            model_keys=[model.key for model in models],
        )
        return models

    def _load_model(self, path: str) -> Model:
        directory = Path(path)
        if not path or not directory.is_dir():
            raise ModelLoadError(f"invalid model path: {path}", details={"path": path})

        # The SavedModel is tagged with its directory name.
        tag = directory.name
        metadata = self._read_metadata(directory, default_key=tag)

        try:
            runtime = self._runtime_loader(str(directory), [tag])
        except Exception as exc:
            raise ModelLoadError(
                f"error loading model runtime: {exc}", details={"path": path}
            ) from exc

        try:
            validate_model_metadata(
                metadata, runtime.input_shape(metadata.input_operation)
            )
        except ModelMetadataError:
            runtime.close()
            raise

        logger.info(
            "registry.model_loaded",
            model_key=metadata.model_key,
            target=metadata.target,
            columns=list(metadata.columns),
            input_steps=metadata.input_steps,
        )
        return Model(runtime=runtime, metadata=metadata)

    def _read_metadata(self, directory: Path, default_key: str) -> ModelMetadata:
        params_file = directory / MODEL_PARAMS_FILENAME
        try:
            content = params_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise ModelMetadataError(
                f"error loading model metadata: {exc}",
                details={"path": str(params_file)},
            ) from exc

        try:
            document = ModelParamsDocument.model_validate_json(content)
        except ValidationError as exc:
            raise ModelMetadataError(
                f"error deserializing model metadata: {exc}",
                details={"path": str(params_file)},
            ) from exc

        return document.to_domain(default_key)
