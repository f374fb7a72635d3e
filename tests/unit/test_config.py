"""Unit tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from resample_eval.config import (
    DatasetConfig,
    EDAConfig,
    ExperimentConfig,
    QDAConfig,
    RandomForestConfig,
    ResamplingConfig,
)


class TestDefaults:
    """Defaults of the comparison."""

    def test_resampling_defaults(self):
        cfg = ResamplingConfig()
        assert cfg.n_trials == 50
        assert cfg.test_fraction == 0.2
        assert cfg.confidence_level == 0.95
        assert cfg.on_trial_error == "raise"

    def test_dataset_defaults(self):
        cfg = DatasetConfig()
        assert cfg.threshold is None
        assert (cfg.label_above, cfg.label_below) == ("above", "below")

    def test_forest_defaults(self):
        cfg = RandomForestConfig()
        assert cfg.n_estimators == 500
        assert cfg.max_features == "sqrt"


class TestValidation:
    """Invalid values are rejected by pydantic."""

    def test_test_fraction_range(self):
        with pytest.raises(ValidationError):
            ResamplingConfig(test_fraction=1.5)
        with pytest.raises(ValidationError):
            ResamplingConfig(test_fraction=0.0)

    def test_failure_policy(self):
        with pytest.raises(ValidationError):
            ResamplingConfig(on_trial_error="retry")

    def test_trials_positive(self):
        with pytest.raises(ValidationError):
            ResamplingConfig(n_trials=0)

    def test_correlation_cutoff(self):
        with pytest.raises(ValidationError):
            EDAConfig(correlation_cutoff=1.5)


class TestYaml:
    """Loading configs from YAML."""

    def test_from_yaml_path(self, tmp_path):
        path = tmp_path / "resampling.yaml"
        path.write_text("n_trials: 10\ntest_fraction: 0.25\non_trial_error: nan\n")

        cfg = ResamplingConfig.from_yaml(path)

        assert cfg.n_trials == 10
        assert cfg.test_fraction == 0.25
        assert cfg.on_trial_error == "nan"
        assert cfg.random_seed == 42

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert QDAConfig.from_yaml(path) == QDAConfig()

    def test_shipped_configs_load(self):
        assert DatasetConfig.from_yaml().target == "y"
        assert EDAConfig.from_yaml().freq_cut == pytest.approx(19.0)
        assert QDAConfig.from_yaml().reg_param == 0.0
        assert RandomForestConfig.from_yaml().n_estimators == 500
        assert ResamplingConfig.from_yaml().n_trials == 50
        assert ExperimentConfig.from_yaml().output_dir == "experiments"
