"""
Splitting utilities for repeated random train/test evaluation.

Implements:
- Test size rule: ceil(test_fraction * N)
- Single random split drawn without replacement
- Split index builder for B trials from one seeded generator
- Validation of a precomputed split index

All B splits are drawn up front so the same seed always yields the same
sequence of splits, regardless of how the trials are later executed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Split:
    """Train/test partition of observation indices for one trial.

    Stores indices rather than data so the dataset is shared read-only.
    """

    trial_id: int
    train_indices: np.ndarray
    test_indices: np.ndarray

    @property
    def n_train(self) -> int:
        return len(self.train_indices)

    @property
    def n_test(self) -> int:
        return len(self.test_indices)


def compute_split_sizes(n_samples: int, test_fraction: float = 0.2) -> Tuple[int, int]:
    """Return (train_size, test_size) for N observations.

    Args:
        n_samples: Number of observations (N).
        test_fraction: Fraction of observations held out per trial.

    Returns:
        (N - ceil(test_fraction * N), ceil(test_fraction * N)).

    Raises:
        ValueError: If either side of the split would be empty.
    """
    if n_samples <= 0:
        raise ValueError(f"n_samples must be positive, got {n_samples}")
    if not 0.0 < test_fraction < 1.0:
        raise ValueError(f"test_fraction must be in (0, 1), got {test_fraction}")

    # Round before ceil so 0.2 * 100 does not become 21 through float error
    test_size = math.ceil(round(test_fraction * n_samples, 9))
    train_size = n_samples - test_size

    if test_size < 1:
        raise ValueError(
            f"Test set would be empty: ceil({test_fraction} * {n_samples}) = 0"
        )
    if train_size < 1:
        raise ValueError(
            f"Training set would be empty: test size {test_size} >= N = {n_samples}"
        )
    return train_size, test_size


def draw_split(
    n_samples: int,
    test_size: int,
    rng: np.random.Generator,
    trial_id: int = 0,
) -> Split:
    """Draw one split: test indices uniformly without replacement, train = rest.

    Args:
        n_samples: Number of observations (N).
        test_size: Number of held-out observations.
        rng: Random generator (advanced by this call).
        trial_id: Trial index stored on the split.

    Returns:
        Split with sorted, disjoint train and test index arrays covering 0..N-1.
    """
    test_idx = np.sort(rng.choice(n_samples, size=test_size, replace=False))
    mask = np.ones(n_samples, dtype=bool)
    mask[test_idx] = False
    train_idx = np.flatnonzero(mask)
    return Split(trial_id=trial_id, train_indices=train_idx, test_indices=test_idx)


def build_split_index(
    n_samples: int,
    n_trials: int = 50,
    test_fraction: float = 0.2,
    random_seed: int = 42,
) -> List[Split]:
    """Build the split for every trial.

    Args:
        n_samples: Number of observations (N).
        n_trials: Number of trials (B).
        test_fraction: Fraction held out per trial.
        random_seed: Random seed for reproducibility.

    Returns:
        List of B Split objects, trial_id 0..B-1.
    """
    if n_trials < 1:
        raise ValueError(f"n_trials must be at least 1, got {n_trials}")

    _, test_size = compute_split_sizes(n_samples, test_fraction)
    rng = np.random.default_rng(random_seed)

    return [
        draw_split(n_samples, test_size, rng, trial_id=trial_id)
        for trial_id in range(n_trials)
    ]


def validate_splits(splits: Sequence[Split], n_samples: int, test_size: int) -> None:
    """Check a precomputed split index against the dataset.

    Raises:
        ValueError: If there are no splits, a trial_id repeats, or a split's
            train/test sets overlap, miss rows, or hold out the wrong count.
    """
    if len(splits) == 0:
        raise ValueError("At least one split is required, got none")

    all_rows = np.arange(n_samples)
    seen = set()
    for split in splits:
        if split.trial_id in seen:
            raise ValueError(f"Duplicate trial_id {split.trial_id} in splits")
        seen.add(split.trial_id)

        if np.intersect1d(split.train_indices, split.test_indices).size:
            raise ValueError(f"Split {split.trial_id}: train and test sets overlap")
        if not np.array_equal(np.union1d(split.train_indices, split.test_indices), all_rows):
            raise ValueError(
                f"Split {split.trial_id} covers {split.n_train + split.n_test} "
                f"rows, dataset has {n_samples}"
            )
        if split.n_test != test_size:
            raise ValueError(
                f"Split {split.trial_id} holds out {split.n_test} rows, "
                f"expected {test_size}"
            )
