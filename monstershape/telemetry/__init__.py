"""Telemetry for build runs.

This package emits deterministic run events for auditing batch builds.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
