"""Majority-class baseline: always predicts the most frequent training label."""

from __future__ import annotations

import numpy as np
import pandas as pd

from resample_eval.models.base import Classifier


class MajorityClassModel(Classifier):
    """Predicts the training set's most common label for every row.

    Ties go to the label that sorts first.
    """

    name = "majority"

    def __init__(self) -> None:
        self._label = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> MajorityClassModel:
        counts = pd.Series(y).value_counts()
        top = counts[counts == counts.max()].index
        self._label = sorted(top)[0]
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        if self._label is None:
            raise RuntimeError("Model has not been fitted. Call fit() first.")
        return np.full(len(X), self._label, dtype=object)
