[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "exactsum"
version = "0.1.0"
description = "Exactly rounded summation of floating-point numbers using superaccumulators"
requires-python = ">=3.10"
dependencies = []
keywords = ["summation", "floating-point", "exact", "superaccumulator", "rounding"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
exactsum = "exactsum.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["exactsum"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
