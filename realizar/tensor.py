"""N-dimensional tensor stored flat in row-major order."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Any

from realizar.errors import DataShapeMismatchError, InvalidShapeError


def _format_value(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Tensor:
    """An N-dimensional array with a fixed, validated shape."""

    __slots__ = ("_data", "_shape")

    def __init__(self, shape: Sequence[int], data: Iterable[Any]) -> None:
        shape = tuple(shape)
        data = list(data)

        if not shape:
            raise InvalidShapeError("Shape cannot be empty")
        if 0 in shape:
            raise InvalidShapeError("Shape dimensions cannot be zero")

        expected = math.prod(shape)
        if len(data) != expected:
            raise DataShapeMismatchError(len(data), shape, expected)

        self._shape = shape
        self._data = data

    @property
    def shape(self) -> tuple[int, ...]:
        """Dimensions of the tensor."""
        return self._shape

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self._shape)

    @property
    def size(self) -> int:
        """Total number of elements."""
        return len(self._data)

    @property
    def data(self) -> tuple[Any, ...]:
        """Flattened elements in row-major order."""
        return tuple(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._shape == other._shape and self._data == other._data

    def __repr__(self) -> str:
        return f"Tensor(shape={list(self._shape)!r}, data={self._data!r})"

    def __str__(self) -> str:
        shape = ", ".join(str(dim) for dim in self._shape)
        values = ", ".join(_format_value(v) for v in self._data)
        return f"Tensor(shape=[{shape}], data=[{values}])"