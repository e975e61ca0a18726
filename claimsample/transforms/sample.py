"""Sampler: weighted draws with a stratified fallback that guarantees the sample size."""

import random
from collections.abc import Callable, Iterable, Sequence

from loguru import logger

from claimsample.core.config import WeightTable
from claimsample.core.step import Step
from claimsample.core.types import Record, ScoredRecord
from claimsample.transforms.score import score_records

Shuffler = Callable[[list, random.Random], list]
"""Returns a new permutation of the given items using the given generator."""


def shuffle_copy(items: list, rng: random.Random) -> list:
    """Default shuffler: shuffle a copy, leaving the input order alone."""
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled


def _check_n(n: int) -> None:
    if n < 0:
        raise ValueError(f"Sample size must be >= 0, got {n}")


def weighted_sample(
    records: Sequence[ScoredRecord],
    n: int,
    rng: random.Random,
) -> list[ScoredRecord]:
    """
    Draw n records with replacement, proportionally to their probability.

    Each draw picks a uniform value in [0, total) and walks the cumulative
    probabilities until it finds the first bound >= the draw. The total is
    taken from the running sum rather than assumed to be 1.0.

    The result can contain the same record more than once.
    """
    _check_n(n)
    cumulative = []
    total = 0.0
    for record in records:
        total += record.probability
        cumulative.append(total)

    result = []
    for _ in range(n):
        draw = rng.random() * total
        for record, bound in zip(records, cumulative):
            if bound >= draw:
                result.append(record)
                break
    return result


def fallback_sample(
    records: Sequence[ScoredRecord],
    n: int,
    pairs: Iterable[tuple[str, str]],
    id_field: str,
    rng: random.Random,
    shuffle: Shuffler = shuffle_copy,
) -> list[ScoredRecord]:
    """
    Select up to n records, unique by identifier.

    First a stratified pass takes, for each (attribute, value) pair in
    order, the first record carrying that value whose identifier is not
    already used. Then a fill pass walks a shuffled copy of all records and
    appends unused identifiers until n is reached.

    Args:
        records: Scored records in their original order.
        n: Target sample size.
        pairs: (attribute, value) pairs in configuration order.
        id_field: Column used to deduplicate selections.
        rng: Random generator handed to the shuffler.
        shuffle: Permutation used by the fill pass.

    Returns:
        At most n records, stratified picks first.
    """
    _check_n(n)
    selected: list[ScoredRecord] = []
    used_ids: set[str] = set()

    for attr, value in pairs:
        if len(selected) >= n:
            break
        for record in records:
            record_id = record.get(id_field)
            if record.get(attr) == value and record_id not in used_ids:
                selected.append(record)
                used_ids.add(record_id)
                break

    stratified = len(selected)

    if len(selected) < n:
        for record in shuffle(list(records), rng):
            if len(selected) >= n:
                break
            record_id = record.get(id_field)
            if record_id in used_ids:
                continue
            selected.append(record)
            used_ids.add(record_id)

    logger.debug(
        f"Fallback selected {stratified} stratified and "
        f"{len(selected) - stratified} fill records"
    )
    return selected[:n]


def select_sample(
    records: Sequence[ScoredRecord],
    n: int,
    table: WeightTable,
    id_field: str,
    rng: random.Random | None = None,
    shuffle: Shuffler = shuffle_copy,
) -> list[ScoredRecord]:
    """
    Pick the sampling path and produce the final sample.

    Weighted sampling is used when the total score is positive and there
    are at least n records; otherwise the fallback path runs.

    Args:
        records: Scored records.
        n: Target sample size.
        table: Weight table whose rule order drives the stratified pass.
        id_field: Column used to deduplicate fallback selections.
        rng: Random generator. A fresh unseeded one if None.
        shuffle: Permutation used by the fallback fill pass.

    Returns:
        The selected records in selection order.
    """
    _check_n(n)
    rng = rng or random.Random()
    total = sum(record.score for record in records)

    if total > 0 and len(records) >= n:
        logger.info(f"Weighted sampling {n} records from {len(records)}")
        return weighted_sample(records, n, rng)

    if total == 0 and records:
        logger.warning("No record matched any weight rule, using fallback sampling")
    else:
        logger.info(
            f"Fallback sampling: {len(records)} records available, {n} requested"
        )
    return fallback_sample(records, n, table.pairs(), id_field, rng, shuffle)


class StratifiedSample(Step):
    """
    Select a fixed-size sample biased toward weighted categories.

    Accepts ScoredRecord items from a Score step; plain records are scored
    against the step's own weight table first. Yields the selected source
    records.

    Examples:
        >>> # 5 records, default claim weights
        >>> StratifiedSample(DEFAULT_WEIGHT_RULES)

        >>> # Reproducible sample of 20, deduplicated on "member_id"
        >>> StratifiedSample(table, n=20, id_field="member_id", seed=42)
    """

    def __init__(
        self,
        table: WeightTable,
        *,
        n: int = 5,
        id_field: str = "claim_hcc_id",
        seed: int | None = None,
        shuffle: Shuffler = shuffle_copy,
    ) -> None:
        """
        Initialize a StratifiedSample.

        Args:
            table: Weight table used by the stratified pass (and for
                scoring plain records).
            n: Number of records to select.
            id_field: Column used to deduplicate fallback selections.
            seed: Random seed for reproducibility.
            shuffle: Permutation used by the fallback fill pass.
        """
        super().__init__()
        _check_n(n)
        self._table = table
        self._n = n
        self._id_field = id_field
        self._seed = seed
        self._shuffle = shuffle
        self._rng: random.Random | None = None

    def _get_rng(self) -> random.Random:
        """Get or create the random number generator."""
        if self._rng is None:
            self._rng = random.Random(self._seed)
        return self._rng

    def pick(self, records: Iterable[Record | ScoredRecord]) -> list[ScoredRecord]:
        """
        Materialize the sample immediately.

        Args:
            records: Scored or plain records.

        Returns:
            The selected ScoredRecord objects.
        """
        items = list(records)
        if items and not isinstance(items[0], ScoredRecord):
            items = score_records(items, self._table)
        return select_sample(
            items,
            self._n,
            self._table,
            self._id_field,
            rng=self._get_rng(),
            shuffle=self._shuffle,
        )

    def process(self, records: Iterable[Record | ScoredRecord]) -> Iterable[Record]:
        """Collect all input records and yield the selected source records."""
        selected = self.pick(records)
        logger.info(f"Selected {len(selected)} records (requested {self._n})")
        for scored in selected:
            yield scored.record
