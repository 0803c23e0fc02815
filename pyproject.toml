[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flagalgebra"
version = "0.4.0"
description = "Building blocks for flag algebra computations: combinatorial iterators, operator identifiers, SDPA files, CSDP certificates and SVG drawings"
requires-python = ">=3.10"
dependencies = []
keywords = ["flag", "algebra", "graph", "combinatorics", "sdp", "sdpa", "csdp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flagalgebra"]

[tool.pytest.ini_options]
addopts = "-ra"
