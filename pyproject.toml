[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecsspus"
version = "0.1.0"
description = "Packet utilisation services for spacecraft on-board software: parameters, monitoring, packet stores and time-based scheduling"
requires-python = ">=3.10"
dependencies = []
keywords = ["ecss", "pus", "telemetry", "telecommand", "spacecraft", "crc", "scheduling"]
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
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ecsspus"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
