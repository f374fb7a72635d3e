"""
Configuration management using pydantic.

All config classes use pydantic for validation and YAML loading.
Config files are stored in configs/ directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Literal

import yaml
from pydantic import BaseModel, Field


# Base path for config files
CONFIGS_DIR = Path(__file__).parent.parent / "configs"


def load_yaml(path: Path | str) -> dict[str, Any]:
    """Load a YAML file and return as dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


class DatasetConfig(BaseModel):
    """Configuration for loading and labeling the dataset."""

    path: str = "data/dataset.csv"
    target: str = "y"
    exclude_columns: List[str] = Field(default_factory=list)
    drop_missing: bool = True  # keep complete cases only
    threshold: float | None = None  # None = median of the target
    label_above: str = "above"
    label_below: str = "below"

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> DatasetConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/dataset.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "dataset.yaml"
        return cls(**load_yaml(path))


class EDAConfig(BaseModel):
    """Thresholds for near-zero-variance and correlation filtering."""

    freq_cut: float = Field(default=95 / 5, gt=1.0)  # most common / second most common
    unique_cut: float = Field(default=10.0, ge=0.0, le=100.0)  # percent distinct values
    correlation_cutoff: float = Field(default=0.75, gt=0.0, le=1.0)
    drop_near_zero_var: bool = True
    drop_correlated: bool = True

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> EDAConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/eda.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "eda.yaml"
        return cls(**load_yaml(path))


class QDAConfig(BaseModel):
    """Configuration for Quadratic Discriminant Analysis."""

    reg_param: float = Field(default=0.0, ge=0.0, le=1.0)
    tol: float = 1.0e-4

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> QDAConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/model_qda.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "model_qda.yaml"
        return cls(**load_yaml(path))


class RandomForestConfig(BaseModel):
    """Configuration for Random Forest.

    500 trees with sqrt(p) candidate features per split, the usual
    randomForest defaults for classification.
    """

    n_estimators: int = Field(default=500, ge=1)
    max_features: str | int | float | None = "sqrt"
    max_depth: int | None = None
    min_samples_leaf: int = Field(default=1, ge=1)
    n_jobs: int | None = None
    random_seed: int = 42

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> RandomForestConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/model_random_forest.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "model_random_forest.yaml"
        return cls(**load_yaml(path))


class ResamplingConfig(BaseModel):
    """Configuration for the repeated random train/test evaluation.

    on_trial_error decides what happens when a classifier fails to fit or
    predict on one split: "raise" aborts the run, "nan" records NaN for that
    classifier and trial and keeps going.
    """

    n_trials: int = Field(default=50, ge=1)  # B
    test_fraction: float = Field(default=0.2, gt=0.0, lt=1.0)
    confidence_level: float = Field(default=0.95, gt=0.0, lt=1.0)
    on_trial_error: Literal["raise", "nan"] = "raise"
    random_seed: int = 42

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> ResamplingConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/resampling.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "resampling.yaml"
        return cls(**load_yaml(path))


class ExperimentConfig(BaseModel):
    """Top-level settings for the comparison script."""

    name: str = ""
    output_dir: str = "experiments"
    make_plot: bool = True
    show_progress: bool = True

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> "ExperimentConfig":
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/experiment.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "experiment.yaml"
        return cls(**load_yaml(path))
