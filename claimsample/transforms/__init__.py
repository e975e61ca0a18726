"""Transform steps for scoring and sampling records."""

from claimsample.transforms.score import Score, score_records
from claimsample.transforms.sample import (
    StratifiedSample,
    fallback_sample,
    select_sample,
    shuffle_copy,
    weighted_sample,
)

__all__ = [
    "Score",
    "score_records",
    "StratifiedSample",
    "fallback_sample",
    "select_sample",
    "shuffle_copy",
    "weighted_sample",
]
