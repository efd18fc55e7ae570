"""Error types and schema contracts for puzzle bundles."""

from __future__ import annotations

from .bundle import assert_valid_bundle, check_bundle
from .errors import (
    BundleValidationError,
    DescriptorError,
    ParamsError,
    ValidationIssue,
    ValidationReport,
)

__all__ = [
    "BundleValidationError",
    "DescriptorError",
    "ParamsError",
    "ValidationIssue",
    "ValidationReport",
    "assert_valid_bundle",
    "check_bundle",
]
