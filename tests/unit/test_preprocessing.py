"""Unit tests for labeling, exploratory checks and the feature pipeline."""

import numpy as np
import pandas as pd
import pytest

from resample_eval.config import EDAConfig
from resample_eval.preprocessing.eda import (
    correlation_matrix,
    find_correlation,
    missing_values,
    near_zero_var,
    run_eda,
)
from resample_eval.preprocessing.feature_pipeline import FeaturePipeline
from resample_eval.preprocessing.labeling import binarize_target


class TestBinarizeTarget:
    """Tests for above/below labeling."""

    def test_median_split(self):
        labels = binarize_target(pd.Series([1.0, 2.0, 3.0, 4.0], name="y"))
        assert list(labels) == ["below", "below", "above", "above"]
        assert labels.name == "y"

    def test_ties_go_below(self):
        labels = binarize_target(pd.Series([1.0, 2.0, 2.0, 3.0]))
        assert list(labels) == ["below", "below", "below", "above"]

    def test_explicit_threshold(self):
        labels = binarize_target(pd.Series([1.0, 5.0, 10.0]), threshold=6.0)
        assert list(labels) == ["below", "below", "above"]

    def test_custom_level_names(self):
        labels = binarize_target(
            pd.Series([0.0, 1.0]), label_above="high", label_below="low"
        )
        assert list(labels) == ["low", "high"]

    def test_constant_target_rejected(self):
        with pytest.raises(ValueError, match="two levels"):
            binarize_target(pd.Series([3.0, 3.0, 3.0]))

    def test_missing_target_rejected(self):
        with pytest.raises(ValueError, match="missing"):
            binarize_target(pd.Series([1.0, np.nan, 3.0]))

    def test_non_numeric_rejected(self):
        with pytest.raises(ValueError, match="numeric"):
            binarize_target(pd.Series(["a", "b"]))


class TestMissingValues:
    """Tests for the missing-value check."""

    def test_counts(self):
        df = pd.DataFrame({"a": [1.0, np.nan, 3.0, np.nan], "b": [1, 2, 3, 4]})
        report = missing_values(df)

        assert report.loc["a", "n_missing"] == 2
        assert report.loc["a", "pct_missing"] == pytest.approx(50.0)
        assert report.loc["b", "n_missing"] == 0


class TestNearZeroVar:
    """Tests for near-zero-variance screening."""

    def test_flags(self):
        rng = np.random.default_rng(0)
        n = 100
        df = pd.DataFrame({
            "constant": np.ones(n),
            "rare": np.r_[np.zeros(98), np.ones(2)],
            "balanced_binary": np.r_[np.zeros(50), np.ones(50)],
            "continuous": rng.normal(size=n),
        })
        report = near_zero_var(df)

        assert bool(report.loc["constant", "zero_var"])
        assert bool(report.loc["constant", "nzv"])
        # 98 / 2 = 49 > 19 and 2% distinct <= 10%
        assert report.loc["rare", "freq_ratio"] == pytest.approx(49.0)
        assert bool(report.loc["rare", "nzv"])
        assert not bool(report.loc["balanced_binary", "nzv"])
        assert not bool(report.loc["continuous", "nzv"])
        assert report.loc["continuous", "percent_unique"] == pytest.approx(100.0)

    def test_cutoffs_are_respected(self):
        df = pd.DataFrame({"rare": np.r_[np.zeros(98), np.ones(2)]})
        report = near_zero_var(df, freq_cut=60.0)
        assert not bool(report.loc["rare", "nzv"])


class TestFindCorrelation:
    """Tests for pairwise correlation filtering."""

    def test_drops_one_of_perfect_pair(self):
        rng = np.random.default_rng(0)
        a = rng.normal(size=200)
        df = pd.DataFrame({"a": a, "b": 2.0 * a, "c": rng.normal(size=200)})

        dropped = find_correlation(correlation_matrix(df), cutoff=0.75)

        assert len(dropped) == 1
        assert dropped[0] in {"a", "b"}

    def test_reduces_correlated_group_to_one(self):
        rng = np.random.default_rng(1)
        a = rng.normal(size=300)
        df = pd.DataFrame({
            "a": a,
            "b": a + rng.normal(scale=0.05, size=300),
            "c": a + rng.normal(scale=0.05, size=300),
            "d": rng.normal(size=300),
        })

        dropped = find_correlation(correlation_matrix(df), cutoff=0.9)

        assert len(dropped) == 2
        assert "d" not in dropped

    def test_nothing_above_cutoff(self):
        rng = np.random.default_rng(2)
        df = pd.DataFrame(rng.normal(size=(200, 3)), columns=["a", "b", "c"])
        assert find_correlation(correlation_matrix(df), cutoff=0.75) == []

    def test_negative_correlation_counts(self):
        rng = np.random.default_rng(3)
        a = rng.normal(size=100)
        df = pd.DataFrame({"a": a, "b": -a})
        assert len(find_correlation(correlation_matrix(df), cutoff=0.75)) == 1

    def test_non_square_rejected(self):
        corr = pd.DataFrame([[1.0, 0.5]], index=["a"], columns=["a", "b"])
        with pytest.raises(ValueError, match="square"):
            find_correlation(corr)


class TestRunEDA:
    """Tests for the combined exploratory report."""

    def test_report(self, raw_frame):
        features = raw_frame.drop(columns=["y"])
        features["x0_copy"] = 3.0 * features["x0"] + 1.0
        features.loc[0, "x1"] = np.nan

        report = run_eda(features, EDAConfig(correlation_cutoff=0.75))

        assert report.has_missing
        assert report.dropped_near_zero_var == ["flag"]
        assert "flag" not in report.correlation.columns
        # Categorical columns never enter the correlation matrix
        assert "site" not in report.correlation.columns
        assert len(report.dropped_correlated) == 1
        assert report.dropped_correlated[0] in {"x0", "x0_copy"}
        assert report.columns_to_drop == ["flag"] + report.dropped_correlated

        summary = report.to_dict()
        assert summary["has_missing"] is True
        assert summary["n_missing"]["x1"] == 1
        assert summary["near_zero_var"] == ["flag"]

    def test_dropping_can_be_disabled(self, raw_frame):
        features = raw_frame.drop(columns=["y"])
        cfg = EDAConfig(drop_near_zero_var=False, drop_correlated=False)

        report = run_eda(features, cfg)

        assert report.columns_to_drop == []
        assert bool(report.near_zero_var.loc["flag", "nzv"])


class TestFeaturePipeline:
    """Tests for converting covariates to a model matrix."""

    def test_drop_and_encode(self, raw_frame):
        features = raw_frame.drop(columns=["y"])
        pipeline = FeaturePipeline(drop_columns=["flag"])

        X = pipeline.fit_transform(features)

        # site has three levels -> two dummy columns with drop_first
        assert pipeline.feature_names == ["x0", "x1", "site_north", "site_south"]
        assert X.shape == (60, 4)
        assert X.dtype == np.float64

    def test_subset_keeps_layout(self, raw_frame):
        features = raw_frame.drop(columns=["y"])
        pipeline = FeaturePipeline().fit(features)

        only_north = features[features["site"] == "north"].head(3)
        X = pipeline.transform(only_north)

        assert X.shape == (3, len(pipeline.feature_names))
        north_col = pipeline.feature_names.index("site_north")
        south_col = pipeline.feature_names.index("site_south")
        assert np.all(X[:, north_col] == 1.0)
        assert np.all(X[:, south_col] == 0.0)

    def test_transform_before_fit(self, raw_frame):
        with pytest.raises(RuntimeError, match="not fitted"):
            FeaturePipeline().transform(raw_frame)

    def test_unknown_drop_column(self, raw_frame):
        with pytest.raises(ValueError, match="not in frame"):
            FeaturePipeline(drop_columns=["nope"]).fit(raw_frame)

    def test_nothing_left(self):
        with pytest.raises(ValueError, match="No covariates"):
            FeaturePipeline(drop_columns=["a"]).fit(pd.DataFrame({"a": [1.0, 2.0]}))
