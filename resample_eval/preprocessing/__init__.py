"""Preprocessing: exploratory checks, target labeling and feature encoding."""

from resample_eval.preprocessing.eda import (
    EDAReport,
    correlation_matrix,
    find_correlation,
    missing_values,
    near_zero_var,
    run_eda,
)
from resample_eval.preprocessing.feature_pipeline import FeaturePipeline
from resample_eval.preprocessing.labeling import binarize_target

__all__ = [
    "EDAReport",
    "FeaturePipeline",
    "binarize_target",
    "correlation_matrix",
    "find_correlation",
    "missing_values",
    "near_zero_var",
    "run_eda",
]
