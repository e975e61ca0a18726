"""claimsample - weighted, coverage-aware sampling of tabular claim records."""

from claimsample.core.types import Record, ScoredRecord, get_value
from claimsample.core.step import Step, Pipeline
from claimsample.core.config import (
    DEFAULT_WEIGHT_RULES,
    RunConfig,
    SamplingConfig,
    WeightRule,
    WeightTable,
)
from claimsample.core.runner import Runner, run_pipeline
from claimsample.sources.source import (
    FileSource,
    ListSource,
    MissingColumnError,
    Source,
)
from claimsample.transforms.score import Score, score_records
from claimsample.transforms.sample import (
    StratifiedSample,
    fallback_sample,
    select_sample,
    weighted_sample,
)
from claimsample.sinks.sink import Sink, CSVSink, JSONLSink, ListSink
from claimsample.pipeline import build_pipeline, sample_rows

__all__ = [
    "Record",
    "ScoredRecord",
    "get_value",
    "Step",
    "Pipeline",
    "DEFAULT_WEIGHT_RULES",
    "RunConfig",
    "SamplingConfig",
    "WeightRule",
    "WeightTable",
    "Runner",
    "run_pipeline",
    "Source",
    "FileSource",
    "ListSource",
    "MissingColumnError",
    "Score",
    "score_records",
    "StratifiedSample",
    "fallback_sample",
    "select_sample",
    "weighted_sample",
    "Sink",
    "CSVSink",
    "JSONLSink",
    "ListSink",
    "build_pipeline",
    "sample_rows",
]
