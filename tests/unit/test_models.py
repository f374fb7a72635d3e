"""Unit tests for the classifier wrappers."""

import numpy as np
import pytest

from resample_eval.config import QDAConfig
from resample_eval.models import MajorityClassModel, QDAModel, RandomForestModel
from resample_eval.preprocessing.feature_pipeline import FeaturePipeline


@pytest.fixture
def Xy(balanced_dataset):
    X = FeaturePipeline().fit_transform(balanced_dataset.features)
    y = balanced_dataset.labels.to_numpy()
    return X, y


class TestQDAModel:
    """Tests for the QDA wrapper."""

    def test_fit_returns_model_and_predicts_levels(self, Xy):
        X, y = Xy
        model = QDAModel().fit(X, y)

        y_pred = model.predict(X)

        assert isinstance(model, QDAModel)
        assert set(y_pred) <= {"above", "below"}
        # Class means are three standard deviations apart on x0
        assert np.mean(y_pred == y) > 0.85

    def test_single_class_training_rejected(self, Xy):
        X, y = Xy
        with pytest.raises(ValueError, match="two classes"):
            QDAModel().fit(X[:50], y[:50])

    def test_predict_before_fit(self, Xy):
        X, _ = Xy
        with pytest.raises(RuntimeError, match="not been fitted"):
            QDAModel().predict(X)

    def test_refit_replaces_model(self, Xy):
        X, y = Xy
        model = QDAModel(QDAConfig(reg_param=0.1))
        model.fit(X, y)
        first = model._model
        model.fit(X, y)
        assert model._model is not first


class TestRandomForestModel:
    """Tests for the Random Forest wrapper."""

    def test_fit_predict(self, Xy, fast_rf_cfg):
        X, y = Xy
        model = RandomForestModel(fast_rf_cfg).fit(X, y)

        y_pred = model.predict(X)

        assert len(y_pred) == len(y)
        assert set(y_pred) <= {"above", "below"}
        assert model.feature_importances.shape == (3,)

    def test_same_seed_same_predictions(self, Xy, fast_rf_cfg):
        X, y = Xy
        a = RandomForestModel(fast_rf_cfg).fit(X[:80], y[:80]).predict(X[80:])
        b = RandomForestModel(fast_rf_cfg).fit(X[:80], y[:80]).predict(X[80:])
        np.testing.assert_array_equal(a, b)

    def test_predict_before_fit(self, Xy):
        X, _ = Xy
        with pytest.raises(RuntimeError, match="not been fitted"):
            RandomForestModel().predict(X)


class TestMajorityClassModel:
    """Tests for the majority-class baseline."""

    def test_predicts_most_common_label(self):
        X = np.zeros((5, 1))
        y = np.array(["below", "above", "below", "below", "above"])

        y_pred = MajorityClassModel().fit(X, y).predict(np.zeros((3, 1)))

        assert list(y_pred) == ["below", "below", "below"]

    def test_tie_goes_to_first_sorted_label(self):
        X = np.zeros((4, 1))
        y = np.array(["below", "above", "below", "above"])
        assert list(MajorityClassModel().fit(X, y).predict(X[:1])) == ["above"]

    def test_predict_before_fit(self):
        with pytest.raises(RuntimeError):
            MajorityClassModel().predict(np.zeros((1, 1)))
