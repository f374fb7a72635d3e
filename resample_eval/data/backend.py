"""
Dataset contract for the resampling evaluation.

Defines the in-memory dataset every loader must produce, so the evaluator
never depends on where the rows came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

LABEL_LEVELS: Tuple[str, str] = ("above", "below")


@dataclass
class Dataset:
    """N labeled observations with a shared covariate schema.

    Attributes:
        features: Covariates, one row per observation (numeric or categorical).
        labels: Binary label per observation, levels given by `levels`.
        levels: The two allowed label values.
        require_both_levels: If False, a label column holding only one of the
            levels is accepted (row subsets such as a small training split).
    """

    features: pd.DataFrame
    labels: pd.Series
    levels: Tuple[str, str] = LABEL_LEVELS
    require_both_levels: bool = field(default=True, repr=False)

    def __post_init__(self) -> None:
        """Validate data integrity after initialization."""
        if len(self.features) == 0:
            raise ValueError("Dataset is empty")

        if len(self.features) != len(self.labels):
            raise ValueError(
                f"Shape mismatch: features={len(self.features)}, labels={len(self.labels)}"
            )

        if len(set(self.levels)) != 2:
            raise ValueError(f"Exactly two label levels required, got {self.levels}")

        unique = set(pd.unique(self.labels))
        if not unique.issubset(self.levels):
            raise ValueError(f"Labels must be in {set(self.levels)}, got {unique}")
        if self.require_both_levels and unique != set(self.levels):
            raise ValueError(
                f"Labels must have exactly the levels {set(self.levels)}, got {unique}"
            )

        # Positional indexing only from here on
        self.features = self.features.reset_index(drop=True)
        self.labels = self.labels.reset_index(drop=True)

    def __len__(self) -> int:
        """Number of observations."""
        return len(self.labels)

    @property
    def n_rows(self) -> int:
        """Number of observations (N)."""
        return len(self.labels)

    @property
    def feature_names(self) -> List[str]:
        """Covariate column names."""
        return list(self.features.columns)

    def column(self, name: str) -> pd.Series:
        """Return one covariate column by name.

        Raises:
            KeyError: If the column does not exist.
        """
        if name not in self.features.columns:
            raise KeyError(f"Unknown column: {name}")
        return self.features[name]

    def subset(self, indices: Sequence[int] | np.ndarray) -> Dataset:
        """Return the rows at the given positions as a new Dataset.

        A subset may hold a single label level (e.g. a tiny training split),
        so level validation is applied to the full dataset only.
        """
        idx = np.asarray(indices, dtype=int)
        return Dataset(
            features=self.features.iloc[idx],
            labels=self.labels.iloc[idx],
            levels=self.levels,
            require_both_levels=False,
        )

    def with_features(self, features: pd.DataFrame) -> Dataset:
        """Return a Dataset with the same labels and replaced covariates."""
        return Dataset(features=features, labels=self.labels, levels=self.levels)

    @property
    def class_balance(self) -> dict:
        """Fraction of observations at each label level."""
        counts = self.labels.value_counts(normalize=True)
        return {level: float(counts.get(level, 0.0)) for level in self.levels}
