"""
CSV loader that builds a labeled Dataset.

Reads the raw table, applies the above/below labeling to the continuous
target and returns covariates plus label as a Dataset.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from resample_eval.config import DatasetConfig
from resample_eval.data.backend import Dataset
from resample_eval.preprocessing.labeling import binarize_target


class CSVBackend:
    """Loads a single CSV file and exposes it as a labeled Dataset.

    The target column is continuous in the file; it is turned into a
    two-level label at load time and removed from the covariates.
    """

    def __init__(self, cfg: DatasetConfig, path: str | Path | None = None):
        """Initialize CSV backend.

        Args:
            cfg: Dataset configuration (target, excluded columns, threshold).
            path: CSV path. Overrides cfg.path if given.
        """
        self.cfg = cfg
        self.path = Path(path if path is not None else cfg.path)

        self._load_data()

    def _load_data(self) -> None:
        """Load the CSV and validate the target column."""
        if not self.path.exists():
            raise FileNotFoundError(f"Required file not found: {self.path}")

        self._raw = pd.read_csv(self.path)

        if self.cfg.target not in self._raw.columns:
            raise ValueError(f"{self.path.name} must have '{self.cfg.target}' column")

        missing = [c for c in self.cfg.exclude_columns if c not in self._raw.columns]
        if missing:
            raise ValueError(f"Excluded columns not in {self.path.name}: {missing}")

    @property
    def raw(self) -> pd.DataFrame:
        """The table as read from disk."""
        return self._raw

    @property
    def feature_names(self) -> List[str]:
        """Return list of covariate column names."""
        dropped = {self.cfg.target, *self.cfg.exclude_columns}
        return [c for c in self._raw.columns if c not in dropped]

    def _rows(self) -> pd.DataFrame:
        columns = [self.cfg.target, *self.feature_names]
        if self.cfg.drop_missing:
            return self._raw[columns].dropna()
        return self._raw[columns]

    @property
    def n_incomplete(self) -> int:
        """Rows with at least one missing value among target and covariates."""
        columns = [self.cfg.target, *self.feature_names]
        return int(self._raw[columns].isna().any(axis=1).sum())

    def get_dataset(self) -> Dataset:
        """Return the labeled dataset.

        Rows with missing values are dropped first when cfg.drop_missing is set.
        """
        rows = self._rows()
        labels = binarize_target(
            rows[self.cfg.target],
            threshold=self.cfg.threshold,
            label_above=self.cfg.label_above,
            label_below=self.cfg.label_below,
        )
        return Dataset(
            features=rows[self.feature_names],
            labels=labels,
            levels=(self.cfg.label_above, self.cfg.label_below),
        )

    def get_summary(self) -> dict:
        """Return summary statistics about the loaded data."""
        target = self._raw[self.cfg.target]
        return {
            "path": str(self.path),
            "n_rows": len(self._raw),
            "n_incomplete": self.n_incomplete,
            "n_features": len(self.feature_names),
            "target": self.cfg.target,
            "target_median": float(target.median()),
            "feature_names": self.feature_names,
        }
