"""Exception hierarchy for the inference engine."""

from __future__ import annotations

from collections.abc import Sequence


class RealizarError(Exception):
    """Base class for every error raised by the package."""


class InvalidShapeError(RealizarError):
    """A shape, size or layout is not acceptable."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid shape: {reason}")
        self.reason = reason


class DataShapeMismatchError(RealizarError):
    """The number of data elements does not match the requested shape."""

    def __init__(self, data_size: int, shape: Sequence[int], expected: int) -> None:
        self.data_size = data_size
        self.shape = list(shape)
        self.expected = expected
        super().__init__(
            f"Data size {data_size} does not match shape {self.shape} "
            f"(expected {expected} elements)"
        )


class UnsupportedOperationError(RealizarError):
    """An operation failed or cannot be carried out on the given input."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"Unsupported operation '{operation}': {reason}")
        self.operation = operation
        self.reason = reason


class RegistryError(RealizarError):
    """The model registry could not complete a request."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Registry error: {message}")
        self.message = message


class ModelNotFoundError(RealizarError):
    """No model is registered under the requested identifier."""

    def __init__(self, model_id: str) -> None:
        super().__init__(f"Model not found: {model_id}")
        self.model_id = model_id


class ModelAlreadyExistsError(RealizarError):
    """A model is already registered under the given identifier."""

    def __init__(self, model_id: str) -> None:
        super().__init__(f"Model already exists: {model_id}")
        self.model_id = model_id