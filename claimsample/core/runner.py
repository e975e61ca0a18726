"""Pipeline execution engine."""

import time
from typing import TYPE_CHECKING, Any

from loguru import logger

from claimsample.core.config import RunConfig

if TYPE_CHECKING:
    from claimsample.core.step import Pipeline


class Runner:
    """
    Execution engine for pipelines.

    Each step runs to completion before the next one starts, so a failing
    source (e.g. a header without the identifier column) aborts the run
    before any scoring, sampling or writing happens.
    """

    def __init__(self, pipeline: "Pipeline", config: RunConfig | None = None) -> None:
        """
        Initialize the runner.

        Args:
            pipeline: The pipeline to execute.
            config: Execution configuration. Uses defaults if None.
        """
        self.pipeline = pipeline
        self.config = config or RunConfig()

    def execute(self) -> list[Any]:
        """
        Execute the pipeline.

        Returns:
            List of output items.
        """
        items: list[Any] = []

        for i, step in enumerate(self.pipeline.steps):
            step_name = step.name
            items_in = len(items)

            logger.info(f"Executing step {i}: {step_name}")
            start_time = time.time()

            items = list(step.process(iter(items)))

            if i == 0 and self.config.limit is not None:
                items = items[: self.config.limit]
                logger.info(f"Limiting source to {len(items)} records")

            elapsed = time.time() - start_time
            logger.info(
                f"Step {i} ({step_name}): {items_in} -> {len(items)} records "
                f"({elapsed:.2f}s)"
            )

            if self.config.stop_after is not None:
                if i == self.config.stop_after or step_name == self.config.stop_after:
                    logger.info(f"Stopping after step: {step_name}")
                    break

        return items


def run_pipeline(
    pipeline: "Pipeline",
    limit: int | None = None,
    stop_after: int | str | None = None,
    log_level: str = "INFO",
) -> list[Any]:
    """
    Execute a pipeline with the runner.

    Args:
        pipeline: Pipeline to execute.
        limit: Process only first N source records.
        stop_after: Stop after step (index or name).
        log_level: Logging level recorded in the RunConfig.

    Returns:
        List of output items.
    """
    config = RunConfig(limit=limit, stop_after=stop_after, log_level=log_level)
    runner = Runner(pipeline, config)
    return runner.execute()
