"""
Repeated random train/test comparison of classifiers.

For each of B trials:
- Hold out ceil(test_fraction * N) rows drawn without replacement
- Fit every classifier on the remaining rows
- Record each classifier's misclassification error on the held-out rows

All classifiers in a trial share one split, so trial k's error rates are
paired. Splits are drawn up front from one seeded generator, which makes a
run (or a resumed run) reproducible from the seed alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import numpy as np

from resample_eval.config import ResamplingConfig
from resample_eval.data.backend import Dataset
from resample_eval.data.splitters import (
    Split,
    build_split_index,
    compute_split_sizes,
    validate_splits,
)
from resample_eval.evaluation.metrics import misclassification_error
from resample_eval.evaluation.summary import summarize_comparison
from resample_eval.models.base import Classifier
from resample_eval.preprocessing.feature_pipeline import FeaturePipeline


class TrialFailedError(RuntimeError):
    """A classifier could not be fit or could not predict on one split."""

    def __init__(self, trial_id: int, classifier: str, cause: BaseException):
        self.trial_id = trial_id
        self.classifier = classifier
        self.cause = cause
        super().__init__(
            f"Trial {trial_id}: classifier '{classifier}' failed: "
            f"{type(cause).__name__}: {cause}"
        )


@dataclass(frozen=True)
class TrialResult:
    """Error rate of every classifier on one split.

    failures maps classifier name to the error message for classifiers
    recorded as NaN under the "nan" policy.
    """

    trial_id: int
    errors: Dict[str, float]
    n_train: int
    n_test: int
    failures: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "trial_id": self.trial_id,
            "errors": dict(self.errors),
            "n_train": self.n_train,
            "n_test": self.n_test,
            "failures": dict(self.failures),
        }

    @classmethod
    def from_dict(cls, d: dict) -> TrialResult:
        return cls(
            trial_id=int(d["trial_id"]),
            errors={k: float(v) if v is not None else float("nan") for k, v in d["errors"].items()},
            n_train=int(d["n_train"]),
            n_test=int(d["n_test"]),
            failures=dict(d.get("failures", {})),
        )


@dataclass
class ErrorSeries:
    """Ordered trial results for a fixed set of classifiers."""

    classifier_names: List[str]
    results: List[TrialResult] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.results)

    def append(self, result: TrialResult) -> None:
        """Add one trial result; classifier names must match the series."""
        if set(result.errors) != set(self.classifier_names):
            raise ValueError(
                f"Trial {result.trial_id} has classifiers {sorted(result.errors)}, "
                f"expected {sorted(self.classifier_names)}"
            )
        self.results.append(result)

    @property
    def trial_ids(self) -> List[int]:
        return [r.trial_id for r in self.results]

    def errors(self, name: str) -> np.ndarray:
        """Error rates of one classifier in trial order."""
        if name not in self.classifier_names:
            raise KeyError(f"Unknown classifier: {name}")
        return np.array([r.errors[name] for r in self.results], dtype=float)

    def as_arrays(self) -> Dict[str, np.ndarray]:
        return {name: self.errors(name) for name in self.classifier_names}

    @property
    def n_failed(self) -> Dict[str, int]:
        return {
            name: int(np.isnan(values).sum())
            for name, values in self.as_arrays().items()
        }

    def summarize(self, confidence_level: float = 0.95) -> dict:
        """Mean, sd, standard error and normal CI per classifier."""
        return summarize_comparison(self.as_arrays(), confidence_level)


def _check_preconditions(
    dataset: Dataset,
    classifiers: Mapping[str, Classifier],
) -> None:
    if len(dataset) == 0:
        raise ValueError("Dataset is empty")
    levels = set(dataset.labels.unique())
    if levels != set(dataset.levels):
        raise ValueError(
            f"Label must have exactly two levels {set(dataset.levels)}, got {levels}"
        )
    if not classifiers:
        raise ValueError("At least one classifier is required")


def run_trial(
    dataset: Dataset,
    split: Split,
    classifiers: Mapping[str, Classifier],
    pipeline: FeaturePipeline,
    on_trial_error: str = "raise",
) -> TrialResult:
    """Fit and score every classifier on one split.

    Args:
        dataset: Full labeled dataset (read-only).
        split: Train/test indices for this trial.
        classifiers: Name -> classifier; each is refit on this split.
        pipeline: Fitted feature pipeline.
        on_trial_error: "raise" or "nan" (see ResamplingConfig).

    Returns:
        TrialResult with one error rate per classifier.

    Raises:
        TrialFailedError: If a classifier fails and on_trial_error == "raise".
    """
    train = dataset.subset(split.train_indices)
    test = dataset.subset(split.test_indices)

    X_train = pipeline.transform(train.features)
    y_train = train.labels.to_numpy()
    X_test = pipeline.transform(test.features)
    y_test = test.labels.to_numpy()

    errors: Dict[str, float] = {}
    failures: Dict[str, str] = {}

    for name, clf in classifiers.items():
        try:
            model = clf.fit(X_train, y_train)
            y_pred = model.predict(X_test)
        except Exception as exc:
            if on_trial_error == "raise":
                raise TrialFailedError(split.trial_id, name, exc) from exc
            errors[name] = float("nan")
            failures[name] = f"{type(exc).__name__}: {exc}"
            continue
        errors[name] = misclassification_error(y_test, y_pred)

    return TrialResult(
        trial_id=split.trial_id,
        errors=errors,
        n_train=split.n_train,
        n_test=split.n_test,
        failures=failures,
    )


def run_resampling(
    dataset: Dataset,
    classifiers: Mapping[str, Classifier],
    cfg: ResamplingConfig | None = None,
    pipeline: FeaturePipeline | None = None,
    splits: Optional[Sequence[Split]] = None,
    completed: Sequence[TrialResult] = (),
    on_trial_complete: Optional[Callable[[TrialResult], None]] = None,
    show_progress: bool = True,
) -> ErrorSeries:
    """Run the repeated train/test comparison.

    Preconditions are checked before any trial runs: a non-empty dataset,
    a label with exactly two levels, and a split where both the test set
    (ceil(test_fraction * N)) and the training set are non-empty.

    Args:
        dataset: Labeled dataset.
        classifiers: Name -> classifier, compared on identical splits.
        cfg: Resampling configuration. Uses defaults if None.
        pipeline: Feature pipeline. If None, one is fitted on all covariates.
        splits: Precomputed splits. If None, built from cfg. Supplied
            splits must be non-empty, with unique trial_ids, each a disjoint
            cover of the rows holding out ceil(test_fraction * N).
        completed: Results of trials already run (e.g. when resuming);
            their trial_ids are skipped.
        on_trial_complete: Called with each new TrialResult.
        show_progress: Whether to show progress bar.

    Returns:
        ErrorSeries ordered by trial_id, one entry per split.
    """
    cfg = cfg or ResamplingConfig()
    _check_preconditions(dataset, classifiers)

    if splits is None:
        splits = build_split_index(
            n_samples=len(dataset),
            n_trials=cfg.n_trials,
            test_fraction=cfg.test_fraction,
            random_seed=cfg.random_seed,
        )
    else:
        _, test_size = compute_split_sizes(len(dataset), cfg.test_fraction)
        validate_splits(splits, len(dataset), test_size)

    if pipeline is None:
        pipeline = FeaturePipeline().fit(dataset.features)

    done = {r.trial_id: r for r in completed}
    remaining = [s for s in splits if s.trial_id not in done]

    if show_progress:
        from tqdm import tqdm
        iterator = tqdm(remaining, desc="Trials")
    else:
        iterator = remaining

    for split in iterator:
        result = run_trial(dataset, split, classifiers, pipeline, cfg.on_trial_error)
        done[result.trial_id] = result
        if on_trial_complete is not None:
            on_trial_complete(result)

    series = ErrorSeries(classifier_names=list(classifiers))
    for split in splits:
        series.append(done[split.trial_id])
    return series

