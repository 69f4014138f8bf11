[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hogbom"
version = "0.1.0"
description = "Hogbom CLEAN deconvolution of square radio images, with interchangeable peak-finding strategies and a benchmark runner"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "astronomy",
    "radio astronomy",
    "deconvolution",
    "clean",
    "hogbom",
    "benchmark",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hogbom-clean = "hogbom.cli:main"
hogbom-reduction = "hogbom.reduction:main"

[tool.hatch.build.targets.wheel]
packages = ["hogbom"]

[tool.hatch.build.targets.sdist]
include = [
    "hogbom",
    "tests",
    "README.md",
    "pyproject.toml",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
