"""Tensors, GGUF-style dequantization, metrics and a model registry for ML inference."""

__version__ = "0.2.0"

__all__ = ["errors", "tensor", "metrics", "quantize", "kquants", "registry"]