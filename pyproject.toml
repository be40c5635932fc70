[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "radartrack"
version = "0.1.0"
description = "Depth projection, rectangle helpers and DeepSORT-style multi-object tracking for radar station vision"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["tracking", "deepsort", "kalman-filter", "hungarian-algorithm", "point-cloud", "depth-map"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["radartrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
