"""Evaluation module for misclassification error and its summaries."""

from resample_eval.evaluation.metrics import (
    compute_accuracy,
    confusion_counts,
    misclassification_error,
)
from resample_eval.evaluation.summary import (
    ErrorSummary,
    normal_quantile,
    paired_difference,
    summarize_comparison,
    summarize_errors,
)

__all__ = [
    "ErrorSummary",
    "compute_accuracy",
    "confusion_counts",
    "misclassification_error",
    "normal_quantile",
    "paired_difference",
    "summarize_comparison",
    "summarize_errors",
]
