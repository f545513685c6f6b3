[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bagbench"
version = "0.1.0"
description = "Storage benchmarks for recorded message streams, with bag summary formatting and timed replay"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "benchmark",
    "sqlite",
    "storage",
    "message recording",
    "bag files",
    "replay",
]
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
    "Topic :: Database",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bagbench-sqlite = "bagbench.cli:sqlite_main"
bagbench-trivial = "bagbench.cli:trivial_main"
bagbench-big-messages = "bagbench.suites:big_messages_main"
bagbench-small-messages = "bagbench.suites:small_messages_main"
bagbench-mixed-messages = "bagbench.suites:mixed_messages_main"

[tool.hatch.build.targets.wheel]
packages = ["bagbench"]

[tool.hatch.build.targets.sdist]
include = ["bagbench", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
