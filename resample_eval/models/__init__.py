"""Classifiers compared by the resampling evaluator."""

from resample_eval.config import QDAConfig, RandomForestConfig
from resample_eval.models.base import Classifier
from resample_eval.models.majority import MajorityClassModel
from resample_eval.models.qda import QDAModel
from resample_eval.models.random_forest import RandomForestModel

__all__ = [
    "Classifier",
    "MajorityClassModel",
    "QDAConfig",
    "QDAModel",
    "RandomForestConfig",
    "RandomForestModel",
]
