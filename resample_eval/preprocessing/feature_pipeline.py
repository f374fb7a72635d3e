"""
Feature pipeline from covariate frame to model matrix.

Drops the columns removed by the exploratory checks and one-hot encodes
categorical covariates so both classifiers see the same numeric matrix.
"""

from __future__ import annotations

from typing import List

import numpy as np
import pandas as pd


class FeaturePipeline:
    """Converts a covariate DataFrame to a float numpy array.

    Fit once on the full covariate frame (no labels involved), so every
    train/test split shares one column layout.
    """

    def __init__(self, drop_columns: List[str] | None = None):
        """Initialize pipeline.

        Args:
            drop_columns: Covariates to exclude (e.g. EDA removals).
        """
        self.drop_columns = list(drop_columns or [])
        self._fitted_cols: List[str] | None = None

    def _encode(self, df: pd.DataFrame, drop_first: bool) -> pd.DataFrame:
        kept = df.drop(columns=[c for c in self.drop_columns if c in df.columns])
        return pd.get_dummies(kept, drop_first=drop_first, dtype=float)

    def fit(self, df: pd.DataFrame, y: pd.Series | None = None) -> "FeaturePipeline":
        """Fit pipeline (store encoded column layout).

        Args:
            df: Covariates.
            y: Labels (unused, for sklearn compatibility).

        Returns:
            Self for chaining.
        """
        unknown = [c for c in self.drop_columns if c not in df.columns]
        if unknown:
            raise ValueError(f"Columns to drop not in frame: {unknown}")

        self._fitted_cols = list(self._encode(df, drop_first=True).columns)
        if not self._fitted_cols:
            raise ValueError("No covariates left after dropping columns")
        return self

    def transform(self, df: pd.DataFrame) -> np.ndarray:
        """Transform dataframe to numpy array.

        Args:
            df: Covariates with the columns seen at fit time.

        Returns:
            Numpy array of features, shape (n_rows, n_encoded_features).
        """
        if self._fitted_cols is None:
            raise RuntimeError("Pipeline not fitted. Call fit() first.")

        # Full dummies, then keep the fitted layout (drops the baseline level)
        encoded = self._encode(df, drop_first=False).reindex(
            columns=self._fitted_cols, fill_value=0.0
        )
        return encoded.values.astype(np.float64)

    def fit_transform(self, df: pd.DataFrame, y: pd.Series | None = None) -> np.ndarray:
        """Fit and transform in one step.

        Args:
            df: Covariates.
            y: Labels (unused).

        Returns:
            Numpy array of features.
        """
        return self.fit(df, y).transform(df)

    @property
    def feature_names(self) -> List[str]:
        """Get fitted (encoded) feature column names."""
        if self._fitted_cols is None:
            raise RuntimeError("Pipeline not fitted.")
        return self._fitted_cols
