"""
Quadratic Discriminant Analysis wrapper.

One Gaussian per class with its own covariance matrix. Fitting fails when
a class has too few rows for a covariance estimate, which the evaluator
surfaces as a trial failure.
"""

from __future__ import annotations

import numpy as np
from sklearn.discriminant_analysis import QuadraticDiscriminantAnalysis

from resample_eval.config import QDAConfig
from resample_eval.models.base import Classifier


class QDAModel(Classifier):
    """QDA classifier wrapper."""

    name = "qda"

    def __init__(self, cfg: QDAConfig | None = None) -> None:
        self.cfg = cfg or QDAConfig()
        self._model: QuadraticDiscriminantAnalysis | None = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> QDAModel:
        """Fit class means and covariances.

        Args:
            X: Feature matrix of shape (n_samples, n_features).
            y: Labels of shape (n_samples,).

        Raises:
            ValueError: If the training labels hold a single class.
        """
        if len(np.unique(y)) < 2:
            raise ValueError("QDA needs at least two classes in the training data")

        self._model = QuadraticDiscriminantAnalysis(
            reg_param=self.cfg.reg_param,
            tol=self.cfg.tol,
        )
        self._model.fit(X, y)
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        if self._model is None:
            raise RuntimeError("Model has not been fitted. Call fit() first.")
        return self._model.predict(X)
