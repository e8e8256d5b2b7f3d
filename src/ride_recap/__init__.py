"""
Ride Recap package.

This package contains:
- pipeline: export loading, aggregation engine and output writers.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ride-recap")
except PackageNotFoundError:  # pragma: no cover - package not installed
    __version__ = "0.0.0"
