"""
Classifier interface for the resampling evaluator.

Any model with fit/predict can be compared; the evaluator never looks at
model internals.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Classifier(ABC):
    """Abstract base class for compared classifiers.

    fit() must build a fresh model on every call, so one instance can be
    refit across trials without state leaking between splits.
    """

    name: str = "classifier"

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray) -> Classifier:
        """Train on labeled data.

        Args:
            X: Feature matrix of shape (n_samples, n_features).
            y: Labels of shape (n_samples,).

        Returns:
            The fitted model (self).
        """
        pass

    @abstractmethod
    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict labels.

        Args:
            X: Feature matrix of shape (n_samples, n_features).

        Returns:
            Array of shape (n_samples,) with predicted labels.

        Raises:
            RuntimeError: If model has not been fitted.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
