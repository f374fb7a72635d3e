#!/usr/bin/env python
"""
Run the exploratory checks on a dataset without fitting any model.

Usage:
    python scripts/run_eda.py --data data/dataset.csv --target y
    python scripts/run_eda.py --cutoff 0.9 --output eda.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from resample_eval.config import DatasetConfig, EDAConfig
from resample_eval.data.csv_backend import CSVBackend
from resample_eval.preprocessing.eda import run_eda
from resample_eval.reporting import print_eda_report, write_json


def main():
    parser = argparse.ArgumentParser(description="Exploratory checks on a CSV dataset")
    parser.add_argument("--data", type=str, help="CSV path (overrides config)")
    parser.add_argument("--target", type=str, help="Target column (overrides config)")
    parser.add_argument("--cutoff", type=float, help="Correlation cutoff (overrides config)")
    parser.add_argument("--output", type=str, default="", help="Optional JSON output path")
    args = parser.parse_args()

    data_cfg = DatasetConfig.from_yaml()
    eda_cfg = EDAConfig.from_yaml()

    data_updates = {k: v for k, v in {"path": args.data, "target": args.target}.items() if v}
    data_cfg = DatasetConfig(**{**data_cfg.model_dump(), **data_updates})
    if args.cutoff is not None:
        eda_cfg = EDAConfig(**{**eda_cfg.model_dump(), "correlation_cutoff": args.cutoff})

    backend = CSVBackend(data_cfg)
    features = backend.raw[backend.feature_names]
    report = run_eda(features, eda_cfg)
    print_eda_report(report, n_rows=len(features))

    dataset = backend.get_dataset()
    print(f"\nLabel balance: {dataset.class_balance}")

    if args.output:
        write_json(Path(args.output), {"summary": backend.get_summary(), "eda": report.to_dict()})
        print(f"\nSaved: {args.output}")


if __name__ == "__main__":
    main()
