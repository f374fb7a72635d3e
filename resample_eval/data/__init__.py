"""
Data loading and splitting for the resampling evaluation.

This module provides:
- Dataset: In-memory labeled observations with validation
- CSVBackend: Loads a CSV and labels the continuous target
- Splitters: Test size rule and reproducible random train/test splits
"""

from resample_eval.data.backend import LABEL_LEVELS, Dataset
from resample_eval.data.csv_backend import CSVBackend
from resample_eval.data.splitters import (
    Split,
    build_split_index,
    compute_split_sizes,
    draw_split,
    validate_splits,
)

__all__ = [
    "LABEL_LEVELS",
    "Dataset",
    "CSVBackend",
    "Split",
    "build_split_index",
    "compute_split_sizes",
    "draw_split",
    "validate_splits",
]
