"""K-quantization formats with 256-value super-blocks (Q4_K, Q5_K, Q6_K)."""

from __future__ import annotations

import struct
from collections.abc import Iterator, Sequence

from realizar.errors import InvalidShapeError

_Q4_K_BLOCK = struct.Struct("<ee12s128s")
_Q5_K_BLOCK = struct.Struct("<ee12s32s128s")
_Q6_K_BLOCK = struct.Struct("<e16b64s128s")
_F32 = struct.Struct("<f")

_BLOCKS_PER_SUPER_BLOCK = 8
_SCALE_BYTES = 12


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return _F32.unpack(_F32.pack(value))[0]


def _check_length(data: bytes, block_bytes: int, fmt_name: str) -> None:
    if len(data) % block_bytes:
        raise InvalidShapeError(
            f"{fmt_name} data length {len(data)} is not a multiple of "
            f"super-block size {block_bytes}"
        )


def extract_scale_min(scales: bytes, block_idx: int) -> tuple[float, float]:
    """Return the 6-bit scale and min of a block, each normalised to [0, 1].

    The twelve bytes hold eight 12-bit fields packed little-endian; the low
    six bits of a field are the scale and the high six bits the min.
    """
    scales = bytes(scales)
    if len(scales) != _SCALE_BYTES:
        raise InvalidShapeError(
            f"packed scales must be {_SCALE_BYTES} bytes, got {len(scales)}"
        )
    if not 0 <= block_idx < _BLOCKS_PER_SUPER_BLOCK:
        raise InvalidShapeError(
            f"block index {block_idx} is outside 0..{_BLOCKS_PER_SUPER_BLOCK - 1}"
        )
    bits = int.from_bytes(scales, "little") >> (block_idx * 12)
    scale_bits = bits & 0x3F
    min_bits = (bits >> 6) & 0x3F
    return _f32(scale_bits / 63.0), _f32(min_bits / 63.0)


def _affine_table(d: float, dmin: float, scales: bytes, block_idx: int) -> list[float]:
    """Values of `d * scale * q - dmin * min` for every 5-bit q of a block."""
    scale, minimum = extract_scale_min(scales, block_idx)
    ds = _f32(d * scale)
    dm = _f32(dmin * minimum)
    return [_f32(_f32(ds * q) - dm) for q in range(32)]


def dequantize_q4_k(data: bytes) -> list[float]:
    """Expand Q4_K super-blocks (144 bytes each) to 256 floats apiece."""
    data = bytes(data)
    _check_length(data, _Q4_K_BLOCK.size, "Q4_K")

    def values() -> Iterator[float]:
        for d, dmin, scales, qs in _Q4_K_BLOCK.iter_unpack(data):
            for block_idx in range(_BLOCKS_PER_SUPER_BLOCK):
                table = _affine_table(d, dmin, scales, block_idx)
                for byte in qs[block_idx * 16:(block_idx + 1) * 16]:
                    yield table[byte & 0x0F]
                    yield table[(byte >> 4) & 0x0F]

    return list(values())


def dequantize_q5_k(data: bytes) -> list[float]:
    """Expand Q5_K super-blocks (176 bytes each) to 256 floats apiece."""
    data = bytes(data)
    _check_length(data, _Q5_K_BLOCK.size, "Q5_K")

    def values() -> Iterator[float]:
        for d, dmin, scales, qh, qs in _Q5_K_BLOCK.iter_unpack(data):
            for block_idx in range(_BLOCKS_PER_SUPER_BLOCK):
                table = _affine_table(d, dmin, scales, block_idx)
                high_bits = qh[block_idx * 4:(block_idx + 1) * 4]
                low_bits = qs[block_idx * 16:(block_idx + 1) * 16]
                for byte_idx, byte in enumerate(low_bits):
                    hb = high_bits[byte_idx // 4]
                    offset = (byte_idx % 4) * 2
                    yield table[(((hb >> offset) & 0x01) << 4) | (byte & 0x0F)]
                    yield table[
                        (((hb >> (offset + 1)) & 0x01) << 4) | ((byte >> 4) & 0x0F)
                    ]

    return list(values())


def _signed_table(d: float, scale: int) -> list[float]:
    """Values of `d * scale * (q - 32)` for every 6-bit q."""
    ds = _f32(d * scale)
    return [_f32(ds * (q - 32)) for q in range(64)]


def dequantize_q6_k(data: bytes) -> list[float]:
    """Expand Q6_K super-blocks (210 bytes each) to 256 floats apiece."""
    data = bytes(data)
    _check_length(data, _Q6_K_BLOCK.size, "Q6_K")

    def values() -> Iterator[float]:
        for d, *rest in _Q6_K_BLOCK.iter_unpack(data):
            scales: Sequence[int] = rest[:16]
            qh: bytes = rest[16]
            qs: bytes = rest[17]
            for block_idx, scale in enumerate(scales):
                table = _signed_table(d, scale)
                high_bits = qh[block_idx * 4:(block_idx + 1) * 4]
                low_bits = qs[block_idx * 8:(block_idx + 1) * 8]
                for byte_idx, byte in enumerate(low_bits):
                    hb = high_bits[byte_idx // 2]
                    shift = (byte_idx % 2) * 4
                    yield table[(((hb >> shift) & 0x03) << 4) | (byte & 0x0F)]
                    yield table[
                        (((hb >> (shift + 2)) & 0x03) << 4) | ((byte >> 4) & 0x0F)
                    ]

    return list(values())