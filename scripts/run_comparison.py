#!/usr/bin/env python
"""
Compare QDA and Random Forest over repeated random train/test splits.

Loads the dataset, runs the exploratory checks (missing values, near-zero
variance, correlation filtering), labels the target above/below its median
and records each classifier's test error over B random 80/20 splits.

Usage:
    python scripts/run_comparison.py --data data/dataset.csv --target y
    python scripts/run_comparison.py --n-trials 100 --seed 7

Resume interrupted run:
    python scripts/run_comparison.py --resume experiments/comparison_20240101_120000

Results are saved to experiments/comparison_{timestamp}/.
Trials are saved incrementally, allowing resume after interruption.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from resample_eval.config import (
    DatasetConfig,
    EDAConfig,
    ExperimentConfig,
    QDAConfig,
    RandomForestConfig,
    ResamplingConfig,
)
from resample_eval.data.csv_backend import CSVBackend
from resample_eval.experiments.resampling_runner import TrialFailedError, run_resampling
from resample_eval.models import QDAModel, RandomForestModel
from resample_eval.preprocessing.eda import run_eda
from resample_eval.preprocessing.feature_pipeline import FeaturePipeline
from resample_eval.reporting import (
    load_completed_trials,
    plot_error_boxplot,
    print_eda_report,
    print_results,
    save_trial,
    write_json,
)


def apply_overrides(args, data_cfg, resampling_cfg, rf_cfg):
    """Return config copies with CLI overrides applied (validated by pydantic)."""
    data_updates = {}
    if args.data:
        data_updates["path"] = args.data
    if args.target:
        data_updates["target"] = args.target
    if args.exclude:
        data_updates["exclude_columns"] = args.exclude
    data_cfg = DatasetConfig(**{**data_cfg.model_dump(), **data_updates})

    resampling_updates = {}
    if args.n_trials is not None:
        resampling_updates["n_trials"] = args.n_trials
    if args.test_fraction is not None:
        resampling_updates["test_fraction"] = args.test_fraction
    if args.seed is not None:
        resampling_updates["random_seed"] = args.seed
    if args.on_trial_error:
        resampling_updates["on_trial_error"] = args.on_trial_error
    resampling_cfg = ResamplingConfig(**{**resampling_cfg.model_dump(), **resampling_updates})

    # Forest seed follows the split seed so one --seed reproduces the whole run
    if args.seed is not None:
        rf_cfg = RandomForestConfig(**{**rf_cfg.model_dump(), "random_seed": args.seed})

    return data_cfg, resampling_cfg, rf_cfg


def main():
    parser = argparse.ArgumentParser(
        description="Compare QDA and Random Forest test error over random splits"
    )
    parser.add_argument("--data", type=str, help="CSV path (overrides config)")
    parser.add_argument("--target", type=str, help="Continuous target column (overrides config)")
    parser.add_argument("--exclude", nargs="*", help="Columns to ignore (overrides config)")
    parser.add_argument("--n-trials", type=int, help="Number of random splits B (overrides config)")
    parser.add_argument("--test-fraction", type=float, help="Held-out fraction (overrides config)")
    parser.add_argument("--seed", type=int, help="Random seed (overrides config)")
    parser.add_argument(
        "--on-trial-error", choices=["raise", "nan"],
        help="Abort on a failed fit, or record NaN and continue (overrides config)",
    )
    parser.add_argument("--name", type=str, default="", help="Optional experiment name suffix")
    parser.add_argument("--no-plot", action="store_true", help="Skip the box plot")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    parser.add_argument(
        "--resume", type=str, default="",
        help="Path to experiment directory to resume (only --on-trial-error may change)"
    )
    args = parser.parse_args()

    # Load configs from YAML
    data_cfg = DatasetConfig.from_yaml()
    eda_cfg = EDAConfig.from_yaml()
    qda_cfg = QDAConfig.from_yaml()
    rf_cfg = RandomForestConfig.from_yaml()
    resampling_cfg = ResamplingConfig.from_yaml()
    exp_cfg = ExperimentConfig.from_yaml()

    if args.resume:
        exp_dir = Path(args.resume)
        config_path = exp_dir / "config.json"
        if not config_path.exists():
            print(f"Error: No config.json in resume directory: {exp_dir}")
            sys.exit(1)
        # Restore every setting from the saved snapshot so splits match
        with open(config_path) as f:
            saved = json.load(f)
        data_cfg = DatasetConfig(**saved["data_cfg"])
        eda_cfg = EDAConfig(**saved["eda_cfg"])
        qda_cfg = QDAConfig(**saved["qda_cfg"])
        rf_cfg = RandomForestConfig(**saved["rf_cfg"])
        resampling_cfg = ResamplingConfig(**saved["resampling_cfg"])
        print(f"Resuming experiment from: {exp_dir}")

        locked = [
            flag for flag, value in (
                ("--data", args.data), ("--target", args.target), ("--exclude", args.exclude),
                ("--n-trials", args.n_trials), ("--test-fraction", args.test_fraction),
                ("--seed", args.seed),
            )
            if value is not None and value != ""
        ]
        if locked:
            print(f"  Ignoring {', '.join(locked)} on resume (saved splits are kept)")

        # Failure policy does not affect the splits, so it may change on resume
        if args.on_trial_error and args.on_trial_error != resampling_cfg.on_trial_error:
            resampling_cfg = ResamplingConfig(
                **{**resampling_cfg.model_dump(), "on_trial_error": args.on_trial_error}
            )
            saved["resampling_cfg"] = resampling_cfg.model_dump()
            saved.setdefault("resume_overrides", []).append(
                {"on_trial_error": args.on_trial_error}
            )
            write_json(config_path, saved)
            print(f"  On trial error set to: {args.on_trial_error}")
    else:
        data_cfg, resampling_cfg, rf_cfg = apply_overrides(args, data_cfg, resampling_cfg, rf_cfg)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        exp_name = f"comparison_{timestamp}"
        name = args.name or exp_cfg.name
        if name:
            exp_name += f"_{name}"
        exp_dir = PROJECT_ROOT / exp_cfg.output_dir / exp_name
        exp_dir.mkdir(parents=True, exist_ok=True)

        write_json(exp_dir / "config.json", {
            "args": vars(args),
            "data_cfg": data_cfg.model_dump(),
            "eda_cfg": eda_cfg.model_dump(),
            "qda_cfg": qda_cfg.model_dump(),
            "rf_cfg": rf_cfg.model_dump(),
            "resampling_cfg": resampling_cfg.model_dump(),
        })

    # Data and exploratory checks
    backend = CSVBackend(data_cfg)
    raw_features = backend.raw[backend.feature_names]
    eda_report = run_eda(raw_features, eda_cfg)
    print_eda_report(eda_report, n_rows=len(raw_features))

    if backend.n_incomplete and data_cfg.drop_missing:
        print(f"\nDropping {backend.n_incomplete} rows with missing values")
    dataset = backend.get_dataset()
    pipeline = FeaturePipeline(drop_columns=eda_report.columns_to_drop).fit(dataset.features)

    classifiers = {
        QDAModel.name: QDAModel(qda_cfg),
        RandomForestModel.name: RandomForestModel(rf_cfg),
    }

    completed = load_completed_trials(exp_dir)

    print("=" * 70)
    print("Comparison Configuration")
    print("=" * 70)
    print(f"  Output: {exp_dir}")
    print(f"  Data: {backend.path} ({len(dataset)} rows)")
    print(f"  Target: {data_cfg.target} -> {dict(dataset.labels.value_counts())}")
    print(f"  Features: {', '.join(pipeline.feature_names)}")
    print(f"  Classifiers: {', '.join(classifiers)}")
    print(f"  Trials: {resampling_cfg.n_trials} (test fraction {resampling_cfg.test_fraction})")
    print(f"  Seed: {resampling_cfg.random_seed}")
    print(f"  On trial error: {resampling_cfg.on_trial_error}")
    if completed:
        print(f"\n  Resuming: {len(completed)} trials already completed")

    try:
        series = run_resampling(
            dataset,
            classifiers,
            cfg=resampling_cfg,
            pipeline=pipeline,
            completed=completed,
            on_trial_complete=lambda trial: save_trial(exp_dir, trial),
            show_progress=exp_cfg.show_progress and not args.no_progress,
        )
    except TrialFailedError as exc:
        print(f"\nError: {exc}")
        print("Completed trials are saved; rerun with --on-trial-error nan to skip failures.")
        sys.exit(1)

    summary = series.summarize(resampling_cfg.confidence_level)
    print_results(summary)

    # 1. Full results with all trials
    write_json(exp_dir / "results.json", {
        "summary": summary,
        "eda": eda_report.to_dict(),
        "features": pipeline.feature_names,
        "trials": [t.to_dict() for t in series.results],
    })
    # 2. Summary only (for quick review)
    write_json(exp_dir / "summary.json", summary)

    if exp_cfg.make_plot and not args.no_plot:
        plot_error_boxplot(series, exp_dir / "error_boxplot.png")

    print(f"\n{'=' * 70}")
    print(f"Results saved to: {exp_dir}")
    print(f"  - results.json  (summary, EDA findings and all trials)")
    print(f"  - summary.json  (aggregated error statistics)")
    print(f"  - config.json   (experiment configuration)")
    print(f"  - trials.jsonl  (incremental trial results)")
    print(f"{'=' * 70}")


if __name__ == "__main__":
    main()
