"""Command-line entry point: sample a claims file into a small review set."""

import argparse
import os
import sys

from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError

from claimsample.core.config import SamplingConfig
from claimsample.pipeline import build_pipeline
from claimsample.sources.source import MissingColumnError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="claimsample",
        description="Select a fixed-size sample biased toward important claim categories",
    )
    parser.add_argument("input", help="Input CSV, TSV or JSONL file")
    parser.add_argument(
        "-o",
        "--output",
        default=os.getenv("CLAIMSAMPLE_OUTPUT", "sampled.csv"),
        help="Output file (default: sampled.csv)",
    )
    parser.add_argument(
        "-n",
        "--sample-size",
        type=int,
        default=os.getenv("CLAIMSAMPLE_SAMPLE_SIZE"),
        help="Number of records to select (default: 5)",
    )
    parser.add_argument(
        "--id-field",
        default=os.getenv("CLAIMSAMPLE_ID_FIELD"),
        help="Identifier column (default: claim_hcc_id)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--config", default=None, help="JSON file with weights and sampling settings"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> SamplingConfig:
    """Merge the optional config file with command-line values (flags win)."""
    overrides = {
        "sample_size": args.sample_size,
        "id_field": args.id_field,
        "seed": args.seed,
    }
    if args.config:
        return SamplingConfig.from_file(args.config, **overrides)
    return SamplingConfig(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    try:
        config = load_config(args)
        records = build_pipeline(args.input, args.output, config).run()
    except MissingColumnError as e:
        logger.error(str(e))
        return 1
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid configuration:\n{e}")
        return 1
    except ValueError as e:
        # Unsupported input format or a malformed --config file
        logger.error(str(e))
        return 1

    logger.success(
        f"Sampling complete. Output saved to {args.output}. Total records: {len(records)}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
