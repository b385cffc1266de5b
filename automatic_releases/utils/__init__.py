"""Utility modules for shared functionality."""

from .constants import (
    CONVENTIONAL_COMMIT_TYPES,
    HEADER_PATTERN,
    MERGE_PATTERN,
    START_OF_HISTORY_REF,
    TAG_REF_PATTERN,
)
from .retry import retry_on_rate_limit

__all__ = [
    "CONVENTIONAL_COMMIT_TYPES",
    "HEADER_PATTERN",
    "MERGE_PATTERN",
    "TAG_REF_PATTERN",
    "START_OF_HISTORY_REF",
    "retry_on_rate_limit",
]
