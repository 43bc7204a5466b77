[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "realizar"
version = "0.2.0"
description = "ML inference building blocks: tensors, GGUF-style dequantization, metrics and a model registry"
requires-python = ">=3.10"
dependencies = []
keywords = ["machine-learning", "inference", "quantization", "gguf", "model-serving"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["realizar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
