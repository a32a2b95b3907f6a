"""Domain service helpers for validating model metadata at load time."""

from typing import List, Optional, Sequence

from predict_sidecar.domain.entities.errors import ModelMetadataError
from predict_sidecar.domain.entities.model import ModelMetadata


def _validate_columns(columns: Sequence[str], errors: List[str]) -> None:
    if not columns:
        errors.append("Model must declare at least one input column.")
        return

    seen = set()
    for idx, column in enumerate(columns, start=1):
        if not column:
            errors.append(f"Column #{idx} must be a non-empty series key.")
        elif column in seen:
            errors.append(f"Column '{column}' is declared more than once.")
        seen.add(column)


def _validate_input_shape(
    metadata: ModelMetadata,
    input_shape: Optional[Sequence[Optional[int]]],
    errors: List[str],
) -> None:
    # Expected layout is [batch][steps][columns]; unknown dims are not checked.
    if input_shape is None:
        return
    if len(input_shape) != 3:
        errors.append(
            f"Input operation '{metadata.input_operation}' has rank "
            f"{len(input_shape)}, expected 3 ([batch, steps, columns])."
        )
        return

    _, steps, columns = input_shape
    if steps is not None and steps != metadata.input_steps:
        errors.append(
            f"Input operation expects {steps} steps but input_steps is "
            f"{metadata.input_steps}."
        )
    if columns is not None and columns != len(metadata.columns):
        errors.append(
            f"Input operation expects {columns} columns but "
            f"{len(metadata.columns)} are declared."
        )


def validate_model_metadata(
    metadata: ModelMetadata,
    input_shape: Optional[Sequence[Optional[int]]] = None,
) -> None:
    """Validate model metadata against itself and the runtime's input shape.

    Raises:
        ModelMetadataError: If one or more validation rules fail.
    """

    errors: List[str] = []

    if not metadata.model_key:
        errors.append("Model key must be provided.")
    if metadata.input_steps <= 0:
        errors.append("Input steps must be greater than 0.")
    if metadata.output_steps <= 0:
        errors.append("Output steps must be greater than 0.")
    if not metadata.input_operation:
        errors.append("Input operation name must be provided.")
    if not metadata.output_operation:
        errors.append("Output operation name must be provided.")
    if not metadata.target:
        errors.append("Target series key must be provided.")

    _validate_columns(metadata.columns, errors)
    if not errors:
        _validate_input_shape(metadata, input_shape, errors)

    if errors:
        raise ModelMetadataError(
            f"Invalid metadata for model '{metadata.model_key}'",
            details={"errors": errors},
        )
