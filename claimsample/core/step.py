"""Base Step and Pipeline classes for claimsample."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any


class Step(ABC):
    """Base class for all pipeline steps."""

    def __init__(self) -> None:
        self._name: str | None = None

    @abstractmethod
    def process(self, records: Iterable[Any]) -> Iterable[Any]:
        """Process input items and yield output items."""
        ...

    def as_step(self, name: str) -> "Step":
        """Assign a name to this step for logging."""
        self._name = name
        return self

    def __rshift__(self, other: "Step") -> "Pipeline":
        """Enable >> syntax for chaining steps."""
        return Pipeline([self, other])

    @property
    def name(self) -> str:
        """Return step name (auto-generated if not set)."""
        return self._name or self.__class__.__name__


class Pipeline(Step):
    """A sequence of steps that form a pipeline."""

    def __init__(self, steps: list[Step]) -> None:
        super().__init__()
        self._steps: list[Step] = steps

    def __rshift__(self, other: Step) -> "Pipeline":
        """Enable >> syntax for appending steps to pipeline."""
        if isinstance(other, Pipeline):
            return Pipeline(self._steps + other._steps)
        return Pipeline(self._steps + [other])

    def process(self, records: Iterable[Any]) -> Iterable[Any]:
        """Process records through all steps in sequence."""
        current = records
        for step in self._steps:
            current = step.process(current)
        return current

    @property
    def steps(self) -> list[Step]:
        """Return the list of steps in this pipeline."""
        return self._steps

    def run(
        self,
        limit: int | None = None,
        stop_after: int | str | None = None,
        log_level: str = "INFO",
    ) -> list[Any]:
        """
        Execute the pipeline and return all output items.

        Steps run one after another, each fully materialized before the next.

        Args:
            limit: Process only first N source records.
            stop_after: Stop after step (index or name).
            log_level: Logging level recorded in the RunConfig.

        Returns:
            List of output items.
        """
        from claimsample.core.runner import run_pipeline

        return run_pipeline(
            self, limit=limit, stop_after=stop_after, log_level=log_level
        )
