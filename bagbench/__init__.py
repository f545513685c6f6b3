"""Storage benchmarks for message streams, bag summary formatting and timed replay."""

__version__ = "0.1.0"