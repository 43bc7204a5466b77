# realizar

Building blocks for serving machine-learning models, written in plain Python
with no third-party dependencies.

## What it provides

- `realizar.tensor.Tensor`: an N-dimensional tensor stored flat in row-major
  order. The shape must be non-empty, contain no zero dimension, and match the
  number of elements. `shape`, `ndim`, `size` and `data` are read-only
  properties.
- `realizar.quantize`: dequantization of `Q4_0` blocks (f32 scale + 16 bytes
  of 4-bit values) and `Q8_0` blocks (f32 scale + 32 signed bytes) with
  `dequantize_q4_0` and `dequantize_q8_0`, plus `read_f16` for a
  little-endian half-precision float. It also defines `BLOCK_SIZE` (32) and
  `QK_K` (256).
- `realizar.kquants`: dequantization of the K-quantization formats with
  `dequantize_q4_k` (144 bytes per 256 values), `dequantize_q5_k` (176 bytes)
  and `dequantize_q6_k` (210 bytes), and `extract_scale_min` for the packed
  6-bit scales and mins of a super-block.
- `realizar.metrics`: a thread-safe `MetricsCollector` that counts successful
  and failed requests, tokens and inference time, returns a `MetricsSnapshot`
  with derived rates, and renders the Prometheus text format.
- `realizar.registry`: a thread-safe `ModelRegistry` that keeps model and
  tokenizer objects under unique identifiers, with `ModelInfo` metadata.
- `realizar.errors`: the exception hierarchy rooted at `RealizarError`
  (`InvalidShapeError`, `DataShapeMismatchError`, `UnsupportedOperationError`,
  `RegistryError`, `ModelNotFoundError`, `ModelAlreadyExistsError`).

Every dequantization function raises `InvalidShapeError` when the input length
is not a whole number of blocks.

## Installation

```
pip install .
```

## Examples

```python
from realizar.tensor import Tensor

t = Tensor([2, 3], [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
print(t.shape, t.ndim, t.size)   # (2, 3) 2 6
print(t)                         # Tensor(shape=[2, 3], data=[1, 2, 3, 4, 5, 6])
```

```python
import struct
from realizar.quantize import dequantize_q8_0
from realizar.kquants import dequantize_q4_k

block = struct.pack("<f32b", 0.5, *range(32))
print(dequantize_q8_0(block)[:3])      # [0.0, 0.5, 1.0]

print(len(dequantize_q4_k(bytes(288))))  # 512
```

```python
from datetime import timedelta
from realizar.metrics import MetricsCollector

metrics = MetricsCollector()
metrics.record_success(10, timedelta(milliseconds=100))  # or 0.1 seconds
metrics.record_failure()
print(metrics.snapshot().error_rate)   # 0.5
print(metrics.to_prometheus())
```

```python
from realizar.registry import ModelInfo, ModelRegistry

registry = ModelRegistry(5)
registry.register("llama-7b", model, tokenizer)
registry.register_with_info(
    ModelInfo(id="small", name="Small model", format="GGUF"), model, tokenizer
)
model, tokenizer = registry.get("llama-7b")
print("small" in registry, len(registry))   # True 2
registry.unregister("small")
```

Looking up or removing an unknown identifier raises `ModelNotFoundError`;
registering an identifier twice raises `ModelAlreadyExistsError`.

## What it does not do

- It does not read model files from disk or parse model file formats; the
  dequantization functions work on raw bytes you supply.
- It has no transformer, tokenizer or text generation; the registry stores
  whatever model and tokenizer objects it is given.
- It has no HTTP server and no command-line program. The `cache_capacity`
  given to `ModelRegistry` is stored but does not limit how many models it
  holds.

## Running the tests

```
pip install .[test]
pytest
```