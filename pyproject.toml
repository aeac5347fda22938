[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "astrosim"
version = "0.1.0"
description = "Building blocks for spacecraft simulation: message slots, a scheduler, sensor and battery models, telemetry recorders"
requires-python = ">=3.10"
keywords = ["spacecraft", "simulation", "attitude", "sensors", "telemetry", "mrp", "quaternion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["astrosim"]

[tool.pytest.ini_options]
addopts = "-ra"
