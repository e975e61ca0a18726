"""Configuration models for scoring, sampling and pipeline execution."""

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_WEIGHT = 100


class WeightRule(BaseModel):
    """A single (attribute, value) pair and the weight it contributes."""

    model_config = ConfigDict(frozen=True)

    attribute: str = Field(description="Column name the rule matches on")
    value: str = Field(description="Column value that earns the weight")
    weight: int = Field(default=DEFAULT_WEIGHT, ge=0)

    @field_validator("attribute", "value")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class WeightTable(BaseModel):
    """
    Ordered, immutable collection of weight rules.

    The rule order matters: the fallback sampler walks the rules in
    configuration order when picking one representative per category.
    """

    model_config = ConfigDict(frozen=True)

    rules: tuple[WeightRule, ...] = ()

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[str, str]],
        weight: int = DEFAULT_WEIGHT,
    ) -> "WeightTable":
        """
        Build a table from (attribute, value) pairs sharing one weight.

        Example:
            >>> WeightTable.from_pairs([("status", "Denied"), ("claim_source", "Paper")])
        """
        return cls(
            rules=tuple(
                WeightRule(attribute=attr, value=value, weight=weight)
                for attr, value in pairs
            )
        )

    def as_mapping(self) -> dict[str, dict[str, int]]:
        """Return attribute -> value -> weight. Later rules for a pair win."""
        mapping: dict[str, dict[str, int]] = {}
        for rule in self.rules:
            mapping.setdefault(rule.attribute, {})[rule.value] = rule.weight
        return mapping

    def pairs(self) -> Iterator[tuple[str, str]]:
        """Yield (attribute, value) pairs in configuration order."""
        for rule in self.rules:
            yield rule.attribute, rule.value

    def __len__(self) -> int:
        return len(self.rules)


DEFAULT_WEIGHT_RULES = WeightTable.from_pairs(
    [
        ("claim_source", "EDI"),
        ("claim_source", "Paper"),
        ("claim_type", "Professional"),
        ("claim_type", "Institutional(OP)"),
        ("claim_type", "Institutional(IP)"),
        ("status", "Final"),
        ("status", "Denied"),
        ("status", "Rejected"),
        ("payment_status", "Check Issued"),
        ("payment_status", "Check Not Issued"),
    ]
)


class SamplingConfig(BaseModel):
    """
    Settings for one sampling run.
    """

    model_config = ConfigDict(frozen=True)

    weights: WeightTable = Field(default=DEFAULT_WEIGHT_RULES)

    sample_size: int = Field(
        default=5, ge=0, description="Number of records to select"
    )

    id_field: str = Field(
        default="claim_hcc_id",
        description="Column used to deduplicate fallback selections",
    )

    seed: int | None = Field(
        default=None, description="Random seed. None seeds from the OS."
    )

    @field_validator("weights", mode="before")
    @classmethod
    def coerce_weights(cls, v: Any) -> Any:
        # Accept a bare list of rules or of [attribute, value] pairs
        if isinstance(v, (list, tuple)):
            rules = []
            for item in v:
                if isinstance(item, (list, tuple)):
                    attr, value, *rest = item
                    weight = rest[0] if rest else DEFAULT_WEIGHT
                    rules.append({"attribute": attr, "value": value, "weight": weight})
                else:
                    rules.append(item)
            return {"rules": rules}
        return v

    @field_validator("id_field")
    @classmethod
    def validate_id_field(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("id_field must be a non-empty column name")
        return v

    @classmethod
    def from_file(cls, path: str | Path, **overrides: Any) -> "SamplingConfig":
        """
        Load settings from a JSON file.

        Args:
            path: JSON file with any of the SamplingConfig fields.
            **overrides: Values that take precedence over the file.

        Returns:
            A validated SamplingConfig.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(data)


@dataclass
class RunConfig:
    """Configuration for pipeline execution."""

    limit: int | None = None
    """Process only first N records from the source."""

    stop_after: int | str | None = None
    """Stop after this step (index or name)."""

    log_level: str = "INFO"
    """Logging level."""
