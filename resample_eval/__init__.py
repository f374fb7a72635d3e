"""Repeated random train/test comparison of classifiers on tabular data."""

__version__ = "0.1.0"
