"""Scorer: turn categorical attributes into importance scores and probabilities."""

from collections.abc import Iterable, Sequence

from loguru import logger

from claimsample.core.config import WeightTable
from claimsample.core.step import Step
from claimsample.core.types import Record, ScoredRecord, get_value


def score_record(record: Record, weights: dict[str, dict[str, int]]) -> int:
    """Sum the weight of each weighted attribute's value in the record."""
    return sum(
        value_weights.get(get_value(record, attr), 0)
        for attr, value_weights in weights.items()
    )


def score_records(
    records: Sequence[Record],
    table: WeightTable,
) -> list[ScoredRecord]:
    """
    Score every record and normalize scores into probabilities.

    Attributes not mentioned in the table never contribute. When the
    total score is 0 every probability stays 0, which sends the sampler
    down its fallback path.

    Args:
        records: Records sharing a common set of attributes.
        table: Weight table to score against.

    Returns:
        One ScoredRecord per input record, in input order.
    """
    weights = table.as_mapping()
    scores = [score_record(record, weights) for record in records]
    total = sum(scores)

    logger.debug(f"Scored {len(scores)} records, total score {total}")

    if total > 0:
        return [
            ScoredRecord(record=record, score=score, probability=score / total)
            for record, score in zip(records, scores)
        ]
    return [ScoredRecord(record=record, score=score) for record, score in zip(records, scores)]


class Score(Step):
    """
    Annotate records with a weighted importance score.

    Collects all input records, scores them against the weight table and
    yields ScoredRecord objects for the sampling step.

    Example:
        >>> Source.csv("claims.csv") >> Score(DEFAULT_WEIGHT_RULES) >> StratifiedSample(n=5)
    """

    def __init__(self, table: WeightTable) -> None:
        """
        Initialize a Score step.

        Args:
            table: Weight table shared read-only by every scoring pass.
        """
        super().__init__()
        self._table = table

    def process(self, records: Iterable[Record]) -> Iterable[ScoredRecord]:
        """Score records and yield them with their annotations."""
        all_records = list(records)
        scored = score_records(all_records, self._table)
        matched = sum(1 for s in scored if s.score > 0)
        logger.info(
            f"Scored {len(scored)} records against {len(self._table)} weight rules "
            f"({matched} matched at least one rule)"
        )
        yield from scored
