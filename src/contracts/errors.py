"""Shared error types for descriptor loading and bundle contracts."""

from __future__ import annotations


from dataclasses import dataclass
from typing import List

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


class ParamsError(ValueError):
    """Raised when a parameter string is malformed or unsupported."""


class DescriptorError(ValueError):
    """Raised when a game description cannot be loaded.

    ``reason`` carries the human readable explanation shown to the player,
    e.g. ``"Flags go off grid"``.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced while checking an exported bundle."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of checking a bundle against its schema."""

    ok: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]


class BundleValidationError(ValueError):
    """Raised when a puzzle bundle does not satisfy its contract."""

    def __init__(self, report: ValidationReport) -> None:
        summary = "; ".join(f"{issue.path}: {issue.msg}" for issue in report.errors)
        super().__init__(summary or "bundle failed validation")
        self.report = report


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


def make_warning(code: str, msg: str, path: str) -> ValidationIssue:
    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_WARN)


__all__ = [
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "BundleValidationError",
    "DescriptorError",
    "ParamsError",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
    "make_warning",
]
