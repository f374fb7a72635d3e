"""
Experiment runners.

This module provides:
- resampling_runner: repeated random train/test comparison of classifiers
"""

from resample_eval.experiments.resampling_runner import (
    ErrorSeries,
    TrialFailedError,
    TrialResult,
    run_resampling,
    run_trial,
)

__all__ = [
    "ErrorSeries",
    "TrialFailedError",
    "TrialResult",
    "run_resampling",
    "run_trial",
]
