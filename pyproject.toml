[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "audiochroma"
version = "1.4.0"
description = "Streaming stages for chroma-based audio analysis: resampling, down-mixing, FFT framing and chroma features"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["audio", "chroma", "fft", "resampling", "pitch-class", "fingerprinting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["audiochroma"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
