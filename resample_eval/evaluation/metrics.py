"""
Classification metrics on a held-out set.

Implements:
- Misclassification error: fraction of predicted labels that differ from truth
- Accuracy: 1 - misclassification error
- Confusion counts for a two-level label
"""

from __future__ import annotations

from typing import Dict, Sequence

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix


def _check_pair(y_true: np.ndarray, y_pred: np.ndarray) -> None:
    if len(y_true) != len(y_pred):
        raise ValueError(
            f"Length mismatch: y_true={len(y_true)}, y_pred={len(y_pred)}"
        )
    if len(y_true) == 0:
        raise ValueError("Error rate is undefined on an empty test set")


def misclassification_error(y_true: Sequence, y_pred: Sequence) -> float:
    """Fraction of predictions that differ from the true labels.

    Args:
        y_true: True labels.
        y_pred: Predicted labels.

    Returns:
        Error rate in [0, 1].

    Raises:
        ValueError: If the inputs are empty or differ in length.
    """
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    _check_pair(y_true, y_pred)
    return float(1.0 - accuracy_score(y_true, y_pred))


def compute_accuracy(y_true: Sequence, y_pred: Sequence) -> float:
    """Fraction of correct predictions."""
    return 1.0 - misclassification_error(y_true, y_pred)


def confusion_counts(
    y_true: Sequence,
    y_pred: Sequence,
    levels: Sequence[str] = ("above", "below"),
) -> Dict[str, int]:
    """Confusion counts treating levels[0] as the positive class.

    Returns:
        Dict with tp, fp, fn, tn.
    """
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    _check_pair(y_true, y_pred)

    # Rows = truth, columns = prediction, ordered (positive, negative)
    cm = confusion_matrix(y_true, y_pred, labels=list(levels))
    return {
        "tp": int(cm[0, 0]),
        "fn": int(cm[0, 1]),
        "fp": int(cm[1, 0]),
        "tn": int(cm[1, 1]),
    }
