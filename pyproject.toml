[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seqmetrics"
version = "0.1.0"
description = "Edit distances for strings and sequences: Levenshtein, LCS and Hamming, with edit operations and cached scorers"
requires-python = ">=3.10"
dependencies = []
keywords = ["levenshtein", "edit distance", "lcs", "hamming", "string similarity", "editops"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
seqmetrics-bench = "seqmetrics.bench:main"

[tool.hatch.build.targets.wheel]
packages = ["seqmetrics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
