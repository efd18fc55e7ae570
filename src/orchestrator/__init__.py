"""Orchestration for batch puzzle generation."""

from . import log
from .pipeline import derive_seed, derived_seeds, run_batch, run_pipeline

__all__ = [
    "derive_seed",
    "derived_seeds",
    "log",
    "run_batch",
    "run_pipeline",
]
