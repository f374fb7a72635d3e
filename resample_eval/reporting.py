"""
Console tables, JSON persistence and plots for comparison runs.

Trials are appended to trials.jsonl as they finish so an interrupted run
can be resumed; aggregated results go to results.json / summary.json.
NaN values (failed trials, undefined spread) are written as null so the
files stay strict JSON.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

from resample_eval.experiments.resampling_runner import ErrorSeries, TrialResult
from resample_eval.preprocessing.eda import EDAReport


def convert_numpy(obj):
    """Convert numpy types to Python types for JSON serialization."""
    if isinstance(obj, np.ndarray):
        return convert_numpy(obj.tolist())
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, (float, np.floating)):
        # NaN -> null
        return None if math.isnan(obj) else float(obj)
    elif isinstance(obj, dict):
        return {k: convert_numpy(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_numpy(i) for i in obj]
    return obj


def write_json(path: Path, payload: Any) -> None:
    """Write payload as indented JSON (NaN written as null)."""
    with open(path, "w") as f:
        json.dump(convert_numpy(payload), f, indent=2)


def load_completed_trials(exp_dir: Path) -> List[TrialResult]:
    """Load completed trials from trials.jsonl file."""
    trials_path = Path(exp_dir) / "trials.jsonl"
    trials = []
    if trials_path.exists():
        with open(trials_path) as f:
            for line in f:
                if line.strip():
                    trials.append(TrialResult.from_dict(json.loads(line)))
    return trials


def save_trial(exp_dir: Path, trial: TrialResult) -> None:
    """Append a single trial to trials.jsonl file."""
    trials_path = Path(exp_dir) / "trials.jsonl"
    with open(trials_path, "a") as f:
        f.write(json.dumps(convert_numpy(trial.to_dict())) + "\n")


def _fmt(value: float) -> str:
    return "nan" if value is None or not np.isfinite(value) else f"{value:.4f}"


def print_eda_report(report: EDAReport, n_rows: int) -> None:
    """Print missing-value, near-zero-variance and correlation findings."""
    print("\n" + "=" * 70)
    print(f"Exploratory checks ({n_rows} rows, {len(report.missing)} covariates)")
    print("=" * 70)

    if report.has_missing:
        missing = report.missing[report.missing["n_missing"] > 0]
        print("\nMissing values:")
        for col, row in missing.iterrows():
            print(f"  {col:<24} {int(row['n_missing']):>6} ({row['pct_missing']:.1f}%)")
    else:
        print("\nMissing values: none")

    flagged = report.near_zero_var[report.near_zero_var["nzv"].astype(bool)]
    if len(flagged):
        print("\nNear-zero variance:")
        print(f"  {'Column':<24} {'FreqRatio':>10} {'%Unique':>10} {'ZeroVar':>8}")
        for col, row in flagged.iterrows():
            print(
                f"  {col:<24} {row['freq_ratio']:>10.2f} "
                f"{row['percent_unique']:>10.2f} {str(bool(row['zero_var'])):>8}"
            )
    else:
        print("\nNear-zero variance: none")

    if report.dropped_correlated:
        print(f"\nHighly correlated, removed: {', '.join(report.dropped_correlated)}")
    else:
        print("\nHighly correlated: none above cutoff")


def print_results(summary: Dict[str, Any]) -> None:
    """Print formatted comparison summary."""
    classifiers = summary["classifiers"]
    first = next(iter(classifiers.values()))
    level = int(round(first["confidence_level"] * 100))

    print("\n" + "=" * 70)
    print(f"Misclassification Error ({first['n_trials']} trials)")
    print("=" * 70)
    print(f"  {'Classifier':<16} {'Mean':>8} {'Std':>8} {'SE':>8} {f'{level}% CI':>20} {'Failed':>7}")
    print("  " + "-" * 68)

    for name, s in classifiers.items():
        ci = f"[{_fmt(s['ci_lower'])}, {_fmt(s['ci_upper'])}]"
        print(
            f"  {name:<16} {_fmt(s['mean']):>8} {_fmt(s['std']):>8} "
            f"{_fmt(s['se']):>8} {ci:>20} {s['n_failed']:>7}"
        )

    diff = summary.get("difference")
    if diff is not None:
        ci = f"[{_fmt(diff['ci_lower'])}, {_fmt(diff['ci_upper'])}]"
        print(f"\nPaired difference ({diff['name']}):")
        print(f"  mean {_fmt(diff['mean'])}  std {_fmt(diff['std'])}  {level}% CI {ci}")

    if summary.get("best"):
        print(f"\nLowest mean error: {summary['best']}")


def plot_error_boxplot(
    series: ErrorSeries,
    output_path: Path,
    title: str = "Misclassification error over random splits",
) -> str:
    """Box plot of each classifier's per-trial error, one box per classifier.

    Returns:
        Path of the written image.
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    arrays = series.as_arrays()
    names = list(arrays)
    data = [values[np.isfinite(values)] for values in arrays.values()]

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.boxplot(data)
    ax.set_xticks(range(1, len(names) + 1))
    ax.set_xticklabels(names)
    for pos, values in enumerate(data, start=1):
        if len(values):
            ax.scatter(np.full(len(values), pos), values, s=8, alpha=0.4, color="#4e79a7")
    ax.set_ylabel("Test error rate")
    ax.set_title(title)

    fig.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return str(output_path)
