"""Core types and base classes for claimsample."""

from claimsample.core.types import Record, ScoredRecord, get_value
from claimsample.core.step import Step, Pipeline

__all__ = ["Record", "ScoredRecord", "get_value", "Step", "Pipeline"]
