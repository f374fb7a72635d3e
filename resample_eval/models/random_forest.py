"""
Random Forest wrapper.

Provides a simple interface for scikit-learn's RandomForestClassifier with
defaults matching the classic randomForest classification settings
(500 trees, sqrt(p) features tried at each split).
"""

from __future__ import annotations

import numpy as np
from sklearn.ensemble import RandomForestClassifier

from resample_eval.config import RandomForestConfig
from resample_eval.models.base import Classifier


class RandomForestModel(Classifier):
    """Random Forest classifier wrapper.

    The forest is rebuilt with the same random_state on every fit, so
    repeated runs over the same splits give the same predictions.
    """

    name = "random_forest"

    def __init__(self, cfg: RandomForestConfig | None = None) -> None:
        self.cfg = cfg or RandomForestConfig()
        self._model: RandomForestClassifier | None = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> RandomForestModel:
        """Train the forest on labeled data.

        Args:
            X: Feature matrix of shape (n_samples, n_features).
            y: Labels of shape (n_samples,).
        """
        self._model = RandomForestClassifier(
            n_estimators=self.cfg.n_estimators,
            max_features=self.cfg.max_features,
            max_depth=self.cfg.max_depth,
            min_samples_leaf=self.cfg.min_samples_leaf,
            n_jobs=self.cfg.n_jobs,
            random_state=self.cfg.random_seed,
        )
        self._model.fit(X, y)
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Return the majority vote of the trees for each row.

        Raises:
            RuntimeError: If model has not been fitted.
        """
        if self._model is None:
            raise RuntimeError("Model has not been fitted. Call fit() first.")
        return self._model.predict(X)

    @property
    def feature_importances(self) -> np.ndarray:
        """Mean decrease in impurity per feature."""
        if self._model is None:
            raise RuntimeError("Model has not been fitted. Call fit() first.")
        return self._model.feature_importances_
