"""
Exploratory checks run before model comparison.

Implements:
- Missing values: per-column counts and percentages
- Near-zero variance: frequency ratio / percent unique screening
- Correlation filtering: drop one column of each highly correlated pair

A column is near-zero variance when it is constant, or when the most common
value is freq_cut times more frequent than the second most common AND the
share of distinct values is at most unique_cut percent.

Correlation filtering walks columns from highest to lowest mean absolute
correlation. Whenever a pair exceeds the cutoff, the member with the larger
mean absolute correlation to the columns still kept is removed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np
import pandas as pd

from resample_eval.config import EDAConfig


def missing_values(df: pd.DataFrame) -> pd.DataFrame:
    """Count missing values per column.

    Returns:
        DataFrame indexed by column with n_missing and pct_missing.
    """
    n_missing = df.isna().sum()
    return pd.DataFrame({
        "n_missing": n_missing.astype(int),
        "pct_missing": 100.0 * n_missing / max(len(df), 1),
    })


def near_zero_var(
    df: pd.DataFrame,
    freq_cut: float = 95 / 5,
    unique_cut: float = 10.0,
) -> pd.DataFrame:
    """Screen columns for zero and near-zero variance.

    Args:
        df: Covariates.
        freq_cut: Cutoff for ratio of most common to second most common value.
        unique_cut: Cutoff (percent) for distinct values over sample size.

    Returns:
        DataFrame indexed by column with freq_ratio, percent_unique,
        zero_var and nzv.
    """
    rows = {}
    n = len(df)
    for col in df.columns:
        counts = df[col].value_counts(dropna=True)
        n_unique = len(counts)
        freq_ratio = float(counts.iloc[0] / counts.iloc[1]) if n_unique > 1 else 0.0
        percent_unique = 100.0 * n_unique / n if n else 0.0
        zero_var = n_unique <= 1
        rows[col] = {
            "freq_ratio": freq_ratio,
            "percent_unique": percent_unique,
            "zero_var": zero_var,
            "nzv": zero_var or (freq_ratio > freq_cut and percent_unique <= unique_cut),
        }
    return pd.DataFrame.from_dict(
        rows,
        orient="index",
        columns=["freq_ratio", "percent_unique", "zero_var", "nzv"],
    )


def correlation_matrix(df: pd.DataFrame) -> pd.DataFrame:
    """Pearson correlation between the numeric columns."""
    return df.select_dtypes(include="number").corr()


def _mean_abs(values: np.ndarray) -> float:
    values = values[~np.isnan(values)]
    return float(values.mean()) if values.size else 0.0


def find_correlation(corr: pd.DataFrame, cutoff: float = 0.75) -> List[str]:
    """Select columns to remove so no kept pair exceeds the cutoff.

    Args:
        corr: Square correlation matrix (columns == index).
        cutoff: Absolute pairwise correlation above which a pair is reduced.

    Returns:
        Names of columns to drop, in the matrix's column order.
    """
    if list(corr.columns) != list(corr.index):
        raise ValueError("Correlation matrix must be square with matching labels")

    abs_corr = corr.abs().to_numpy(dtype=float, copy=True)
    np.fill_diagonal(abs_corr, np.nan)
    n_cols = abs_corr.shape[0]

    mean_corr = np.array([_mean_abs(abs_corr[i]) for i in range(n_cols)])
    order = np.argsort(-mean_corr, kind="stable")
    dropped = np.zeros(n_cols, dtype=bool)

    for pos, i in enumerate(order):
        if dropped[i]:
            continue
        for j in order[pos + 1:]:
            if dropped[i]:
                break
            if dropped[j] or not abs_corr[i, j] > cutoff:
                continue
            kept = ~dropped
            mean_i = _mean_abs(abs_corr[i, kept])
            mean_j = _mean_abs(abs_corr[j, kept])
            if mean_i > mean_j:
                dropped[i] = True
            else:
                dropped[j] = True

    return [col for col, d in zip(corr.columns, dropped) if d]


@dataclass
class EDAReport:
    """Outcome of the exploratory checks on a covariate frame."""

    missing: pd.DataFrame
    near_zero_var: pd.DataFrame
    correlation: pd.DataFrame
    dropped_near_zero_var: List[str] = field(default_factory=list)
    dropped_correlated: List[str] = field(default_factory=list)

    @property
    def has_missing(self) -> bool:
        return bool(self.missing["n_missing"].sum() > 0)

    @property
    def columns_to_drop(self) -> List[str]:
        return self.dropped_near_zero_var + self.dropped_correlated

    def to_dict(self) -> dict:
        return {
            "has_missing": self.has_missing,
            "n_missing": {k: int(v) for k, v in self.missing["n_missing"].items()},
            "near_zero_var": [c for c, flag in self.near_zero_var["nzv"].items() if flag],
            "dropped_near_zero_var": list(self.dropped_near_zero_var),
            "dropped_correlated": list(self.dropped_correlated),
        }


def run_eda(features: pd.DataFrame, cfg: EDAConfig | None = None) -> EDAReport:
    """Run missing-value, near-zero-variance and correlation checks.

    Near-zero-variance columns are removed before the correlation matrix is
    computed, so a constant column never enters correlation filtering.

    Args:
        features: Covariates (target excluded).
        cfg: EDA thresholds. Uses defaults if None.

    Returns:
        EDAReport with the diagnostics and the columns chosen for removal.
    """
    cfg = cfg or EDAConfig()

    missing = missing_values(features)
    nzv = near_zero_var(features, cfg.freq_cut, cfg.unique_cut)
    dropped_nzv = list(nzv.index[nzv["nzv"].astype(bool)]) if cfg.drop_near_zero_var else []

    remaining = features.drop(columns=dropped_nzv)
    corr = correlation_matrix(remaining)
    dropped_corr = (
        find_correlation(corr, cfg.correlation_cutoff) if cfg.drop_correlated else []
    )

    return EDAReport(
        missing=missing,
        near_zero_var=nzv,
        correlation=corr,
        dropped_near_zero_var=dropped_nzv,
        dropped_correlated=dropped_corr,
    )
