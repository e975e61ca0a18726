"""Ready-made sampling pipelines for file and in-memory inputs."""

import random
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from claimsample.core.config import SamplingConfig
from claimsample.core.step import Pipeline
from claimsample.sinks.sink import Sink
from claimsample.sources.source import Source, row_to_record, validate_header
from claimsample.transforms.sample import (
    Shuffler,
    StratifiedSample,
    select_sample,
    shuffle_copy,
)
from claimsample.transforms.score import Score, score_records


def build_pipeline(
    input_path: str | Path,
    output_path: str | Path,
    config: SamplingConfig | None = None,
) -> Pipeline:
    """
    Build the read -> score -> sample -> write pipeline.

    The source refuses a header without ``config.id_field`` before yielding
    any record, so nothing is scored or written in that case.

    Args:
        input_path: CSV, TSV or JSONL input file.
        output_path: Output file. ``.jsonl`` writes JSONL, anything else CSV.
        config: Sampling settings. Defaults to SamplingConfig().

    Returns:
        A Pipeline ready to ``run()``.

    Example:
        >>> build_pipeline("unsampled-4k.csv", "sampled.csv").run()
    """
    config = config or SamplingConfig()
    output_path = Path(output_path)

    source = Source.file(input_path, required_columns=[config.id_field])
    if output_path.suffix.lower() == ".jsonl":
        sink = Sink.jsonl(output_path)
    else:
        # The source header is only known once the input has been read
        sink = Sink.csv(output_path, fieldnames=lambda: source.header)

    return (
        source.as_step("load")
        >> Score(config.weights).as_step("score")
        >> StratifiedSample(
            config.weights,
            n=config.sample_size,
            id_field=config.id_field,
            seed=config.seed,
        ).as_step("sample")
        >> sink.as_step("write")
    )


def sample_rows(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    config: SamplingConfig | None = None,
    shuffle: Shuffler = shuffle_copy,
) -> list[list[str]]:
    """
    Sample rows of an in-memory table.

    Args:
        header: Column names.
        rows: Rows of string fields aligned to the header.
        config: Sampling settings. Defaults to SamplingConfig().
        shuffle: Permutation used by the fallback fill pass.

    Returns:
        The selected rows, aligned to the same header, in selection order.

    Raises:
        MissingColumnError: If the identifier column is not in the header.
    """
    config = config or SamplingConfig()
    header = [h.strip() for h in header]
    validate_header(header, [config.id_field])

    records = [row_to_record(header, row) for row in rows]
    scored = score_records(records, config.weights)
    selected = select_sample(
        scored,
        config.sample_size,
        config.weights,
        config.id_field,
        rng=random.Random(config.seed),
        shuffle=shuffle,
    )
    logger.info(f"Sampled {len(selected)} of {len(records)} rows")
    return [[s.record.get(h, "") for h in header] for s in selected]
