"""Source steps for loading records."""

from claimsample.sources.source import (
    FileSource,
    ListSource,
    MissingColumnError,
    Source,
    validate_header,
)

__all__ = ["Source", "FileSource", "ListSource", "MissingColumnError", "validate_header"]
