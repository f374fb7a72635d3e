"""
Binary labeling of a continuous target.

Values strictly greater than the threshold are labeled "above", everything
else (ties included) "below". The default threshold is the target median.
"""

from __future__ import annotations

import numpy as np
import pandas as pd


def binarize_target(
    target: pd.Series,
    threshold: float | None = None,
    label_above: str = "above",
    label_below: str = "below",
) -> pd.Series:
    """Turn a continuous target into a two-level label.

    Args:
        target: Continuous target values.
        threshold: Cut point. If None, uses the median of the target.
        label_above: Label for values > threshold.
        label_below: Label for values <= threshold.

    Returns:
        Series of labels with the same index and name as the target.

    Raises:
        ValueError: If the target has missing or non-numeric values, or if
            the labeling does not produce both levels.
    """
    if not pd.api.types.is_numeric_dtype(target):
        raise ValueError(f"Target '{target.name}' must be numeric, got {target.dtype}")
    if target.isna().any():
        raise ValueError(
            f"Target '{target.name}' has {int(target.isna().sum())} missing values"
        )

    if threshold is None:
        threshold = float(target.median())

    labels = pd.Series(
        np.where(target > threshold, label_above, label_below),
        index=target.index,
        name=target.name,
    )

    if labels.nunique() != 2:
        raise ValueError(
            f"Threshold {threshold} puts every observation in one class; "
            "the label must have exactly two levels"
        )
    return labels
