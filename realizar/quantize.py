"""Block quantization formats with a single scale per block (Q4_0, Q8_0)."""

from __future__ import annotations

import struct
from array import array
from collections.abc import Iterable

from realizar.errors import InvalidShapeError

BLOCK_SIZE = 32
"""Number of values in a Q4_0 or Q8_0 block."""

QK_K = 256
"""Number of values in a K-quantization super-block."""

_Q4_0_BLOCK = struct.Struct("<f16s")
_Q8_0_BLOCK = struct.Struct("<f32b")
_F16 = struct.Struct("<e")


def _as_f32(values: Iterable[float]) -> list[float]:
    """Round every value to single precision."""
    return array("f", values).tolist()


def _check_length(data: bytes, block_bytes: int, fmt_name: str) -> None:
    if len(data) % block_bytes:
        raise InvalidShapeError(
            f"{fmt_name} data length {len(data)} is not a multiple of "
            f"block size {block_bytes}"
        )


def read_f16(data: bytes) -> float:
    """Read a little-endian half-precision float from the first two bytes."""
    if len(data) < _F16.size:
        raise InvalidShapeError(
            f"f16 value needs {_F16.size} bytes, got {len(data)}"
        )
    (value,) = _F16.unpack_from(data)
    return value


def dequantize_q4_0(data: bytes) -> list[float]:
    """Expand Q4_0 blocks (f32 scale + 16 bytes of 4-bit values) to floats.

    Each nibble holds an unsigned value that is shifted to [-8, 7] before
    scaling; the low nibble of a byte comes before the high one.
    """
    data = bytes(data)
    _check_length(data, _Q4_0_BLOCK.size, "Q4_0")

    def values() -> Iterable[float]:
        for scale, quants in _Q4_0_BLOCK.iter_unpack(data):
            scale = _as_f32((scale,))[0]
            for byte in quants:
                yield scale * ((byte & 0x0F) - 8)
                yield scale * (((byte >> 4) & 0x0F) - 8)

    return _as_f32(values())


def dequantize_q8_0(data: bytes) -> list[float]:
    """Expand Q8_0 blocks (f32 scale + 32 signed bytes) to floats."""
    data = bytes(data)
    _check_length(data, _Q8_0_BLOCK.size, "Q8_0")

    def values() -> Iterable[float]:
        for scale, *quants in _Q8_0_BLOCK.iter_unpack(data):
            for q in quants:
                yield scale * q

    return _as_f32(values())