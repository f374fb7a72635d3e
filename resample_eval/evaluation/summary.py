"""
Summary statistics for per-trial error series.

For B trial error rates e_1..e_B:
- mean and sample standard deviation (ddof=1)
- standard error sd / sqrt(B)
- two-sided normal-approximation interval mean ± z_(0.5 + level/2) * se

Trials recorded as NaN (failed fits under the "nan" policy) are excluded
and counted in n_failed. Every function here is a pure function of its
input arrays.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

import numpy as np
from scipy import stats


@dataclass(frozen=True)
class ErrorSummary:
    """Summary of one error series (or of a paired difference)."""

    name: str
    n_trials: int
    n_failed: int
    mean: float
    std: float
    se: float
    ci_lower: float
    ci_upper: float
    confidence_level: float
    median: float
    min: float
    max: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def normal_quantile(confidence_level: float) -> float:
    """z such that P(-z < Z < z) = confidence_level for standard normal Z."""
    if not 0.0 < confidence_level < 1.0:
        raise ValueError(f"confidence_level must be in (0, 1), got {confidence_level}")
    return float(stats.norm.ppf(0.5 + confidence_level / 2.0))


def summarize_errors(
    errors: np.ndarray,
    confidence_level: float = 0.95,
    name: str = "",
) -> ErrorSummary:
    """Summarize one series of per-trial error rates.

    Args:
        errors: Error rate per trial; NaN marks a failed trial.
        confidence_level: Coverage of the normal-approximation interval.
        name: Label stored on the summary.

    Returns:
        ErrorSummary. With fewer than two finite values the standard
        deviation and interval are NaN.
    """
    errors = np.asarray(errors, dtype=float)
    z = normal_quantile(confidence_level)

    finite = errors[np.isfinite(errors)]
    n = len(finite)
    nan = float("nan")

    if n == 0:
        mean = median = lo = hi = nan
    else:
        mean = float(np.mean(finite))
        median = float(np.median(finite))
        lo = float(np.min(finite))
        hi = float(np.max(finite))

    if n >= 2:
        std = float(np.std(finite, ddof=1))
        se = std / np.sqrt(n)
        ci_lower, ci_upper = mean - z * se, mean + z * se
    else:
        std = se = ci_lower = ci_upper = nan

    return ErrorSummary(
        name=name,
        n_trials=len(errors),
        n_failed=len(errors) - n,
        mean=mean,
        std=std,
        se=float(se),
        ci_lower=float(ci_lower),
        ci_upper=float(ci_upper),
        confidence_level=confidence_level,
        median=median,
        min=lo,
        max=hi,
    )


def paired_difference(
    errors_a: np.ndarray,
    errors_b: np.ndarray,
    confidence_level: float = 0.95,
    name: str = "",
) -> ErrorSummary:
    """Summarize the per-trial difference errors_a - errors_b.

    Both series must come from the same splits, trial for trial. A trial
    where either side failed counts as failed for the difference.
    """
    errors_a = np.asarray(errors_a, dtype=float)
    errors_b = np.asarray(errors_b, dtype=float)
    if errors_a.shape != errors_b.shape:
        raise ValueError(
            f"Paired series must have equal length, got {len(errors_a)} and {len(errors_b)}"
        )
    return summarize_errors(errors_a - errors_b, confidence_level, name=name)


def summarize_comparison(
    errors: Mapping[str, np.ndarray],
    confidence_level: float = 0.95,
) -> Dict[str, Any]:
    """Summarize every classifier's series and, for two, their difference.

    Args:
        errors: Classifier name -> per-trial error rates (aligned by trial).
        confidence_level: Coverage of the normal-approximation intervals.

    Returns:
        {"classifiers": {name: summary dict}, "difference": summary dict or None,
         "best": name with the lowest mean error}
    """
    summaries = {
        name: summarize_errors(values, confidence_level, name=name)
        for name, values in errors.items()
    }

    difference = None
    names = list(errors)
    if len(names) == 2:
        a, b = names
        difference = paired_difference(
            errors[a], errors[b], confidence_level, name=f"{a} - {b}"
        ).to_dict()

    ranked = sorted(
        (s for s in summaries.values() if np.isfinite(s.mean)),
        key=lambda s: s.mean,
    )

    return {
        "classifiers": {name: s.to_dict() for name, s in summaries.items()},
        "difference": difference,
        "best": ranked[0].name if ranked else None,
    }
