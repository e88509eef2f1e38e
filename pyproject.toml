[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "antrs"
version = "0.1.0"
description = "Typed reading of AnnData (H5AD) style single-cell RNA-seq data structures."
requires-python = ">=3.10"
dependencies = []
keywords = ["AnnData", "single-cell", "bioinformatics", "h5ad", "csr"]
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
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["antrs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
