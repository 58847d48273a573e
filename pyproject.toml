[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bondsnipe"
version = "0.1.0"
description = "Bonding-curve token tracking: Borsh instruction and event decoding, entry-pattern matching, take-profit and stop-loss bookkeeping."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bonding-curve",
    "borsh",
    "base58",
    "trading",
    "take-profit",
    "stop-loss",
    "pattern-matching",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bondsnipe"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
