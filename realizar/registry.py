"""Thread-safe registry of named models and their tokenizers."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass
from typing import Any

from realizar.errors import ModelAlreadyExistsError, ModelNotFoundError


@dataclass(frozen=True)
class ModelInfo:
    """Descriptive metadata of a registered model."""

    id: str
    name: str
    description: str = ""
    format: str = "unknown"
    loaded: bool = False


@dataclass(frozen=True)
class _ModelEntry:
    model: Any
    tokenizer: Any
    info: ModelInfo


class ModelRegistry:
    """Keeps models and tokenizers under unique identifiers.

    All operations are safe to call from several threads at once. The same
    model and tokenizer objects are handed out on every lookup.
    """

    def __init__(self, cache_capacity: int) -> None:
        self.cache_capacity = cache_capacity
        self._lock = threading.RLock()
        self._models: dict[str, _ModelEntry] = {}

    def _insert(self, info: ModelInfo, model: Any, tokenizer: Any) -> None:
        with self._lock:
            if info.id in self._models:
                raise ModelAlreadyExistsError(info.id)
            self._models[info.id] = _ModelEntry(model, tokenizer, info)

    def _entry(self, model_id: str) -> _ModelEntry:
        with self._lock:
            try:
                return self._models[model_id]
            except KeyError:
                raise ModelNotFoundError(model_id) from None

    def register(self, model_id: str, model: Any, tokenizer: Any) -> None:
        """Register a model under `model_id` with default metadata."""
        info = ModelInfo(
            id=model_id,
            name=model_id,
            description="",
            format="unknown",
            loaded=True,
        )
        self._insert(info, model, tokenizer)

    def register_with_info(self, info: ModelInfo, model: Any, tokenizer: Any) -> None:
        """Register a model with full metadata; it is marked as loaded."""
        self._insert(dataclasses.replace(info, loaded=True), model, tokenizer)

    def get(self, model_id: str) -> tuple[Any, Any]:
        """Return the (model, tokenizer) pair registered under `model_id`."""
        entry = self._entry(model_id)
        return entry.model, entry.tokenizer

    def get_info(self, model_id: str) -> ModelInfo:
        """Return the metadata of the model registered under `model_id`."""
        return self._entry(model_id).info

    def list(self) -> list[ModelInfo]:
        """Return the metadata of every registered model."""
        with self._lock:
            return [entry.info for entry in self._models.values()]

    def unregister(self, model_id: str) -> None:
        """Remove the model registered under `model_id`."""
        with self._lock:
            if self._models.pop(model_id, None) is None:
                raise ModelNotFoundError(model_id)

    def __contains__(self, model_id: object) -> bool:
        with self._lock:
            return model_id in self._models

    def __len__(self) -> int:
        with self._lock:
            return len(self._models)