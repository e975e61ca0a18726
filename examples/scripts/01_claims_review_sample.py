"""Build a review sample from an in-memory claims list.

Demonstrates: scoring against the default claim weights, the weighted path,
and the fallback path when the dataset is smaller than the request.
"""

from loguru import logger

from claimsample import DEFAULT_WEIGHT_RULES, Score, Sink, Source, StratifiedSample

claims = [
    {"claim_hcc_id": f"H{i:03d}", "claim_source": ["EDI", "Paper", "Web"][i % 3],
     "status": ["Final", "Open", "Denied", "Open"][i % 4]}
    for i in range(40)
]

# Weighted: records matching more rules are drawn more often
weighted = (
    Source.list(claims, required_columns=["claim_hcc_id"])
    >> Score(DEFAULT_WEIGHT_RULES)
    >> StratifiedSample(DEFAULT_WEIGHT_RULES, n=5, seed=42)
    >> Sink.list()
).run()
logger.info(f"weighted(5): ids={[r['claim_hcc_id'] for r in weighted]}")

# Fallback: 3 records, 5 requested -> one per category, then the rest
fallback = (
    Source.list(claims[:3])
    >> Score(DEFAULT_WEIGHT_RULES)
    >> StratifiedSample(DEFAULT_WEIGHT_RULES, n=5, seed=42)
    >> Sink.list()
).run()
logger.info(f"fallback(5 of 3): ids={[r['claim_hcc_id'] for r in fallback]}")
