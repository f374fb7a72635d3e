"""
Pytest configuration and shared fixtures for resampling evaluation tests.
"""

import numpy as np
import pandas as pd
import pytest

from resample_eval.config import RandomForestConfig
from resample_eval.data.backend import Dataset
from resample_eval.models.base import Classifier


@pytest.fixture
def balanced_dataset():
    """100 rows, labels split 50/50, two informative covariates and one noise column."""
    rng = np.random.default_rng(0)
    n = 100
    labels = np.array(["above"] * 50 + ["below"] * 50)
    shift = np.where(labels == "above", 1.5, -1.5)
    features = pd.DataFrame({
        "x0": rng.normal(shift, 1.0),
        "x1": rng.normal(0.0, 1.0, n) + 0.5 * shift,
        "x2": rng.normal(0.0, 1.0, n),
    })
    return Dataset(features=features, labels=pd.Series(labels))


@pytest.fixture
def raw_frame():
    """Raw table with a continuous target, a categorical and a constant column."""
    rng = np.random.default_rng(1)
    n = 60
    x0 = rng.normal(0.0, 1.0, n)
    return pd.DataFrame({
        "x0": x0,
        "x1": rng.normal(0.0, 1.0, n),
        "site": rng.choice(["north", "south", "east"], size=n),
        "flag": np.ones(n),
        "y": 2.0 * x0 + rng.normal(0.0, 0.5, n),
    })


@pytest.fixture
def fast_rf_cfg():
    """Small forest so tests stay quick."""
    return RandomForestConfig(n_estimators=20, random_seed=0)


class RecordingClassifier(Classifier):
    """Predicts a fixed label and records what it was trained and scored on."""

    def __init__(self, name="recording", label="above"):
        self.name = name
        self.label = label
        self.fit_calls = []
        self.predict_calls = []

    def fit(self, X, y):
        self.fit_calls.append((X.copy(), np.asarray(y).copy()))
        return self

    def predict(self, X):
        self.predict_calls.append(X.copy())
        return np.full(len(X), self.label, dtype=object)


class FailingClassifier(Classifier):
    """Raises on every fit."""

    name = "failing"

    def fit(self, X, y):
        raise ValueError("singular covariance")

    def predict(self, X):
        raise RuntimeError("Model has not been fitted. Call fit() first.")


@pytest.fixture
def recording_classifier_cls():
    return RecordingClassifier


@pytest.fixture
def failing_classifier():
    return FailingClassifier()
