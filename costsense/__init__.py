#!filepath: costsense/__init__.py

from .utils.logger import Logging, init_logging, logs
from .config.app_config import AppConfig
from .core import Candidate, CostSensitiveExample, Prediction, SparseFeatures
from .learners import BaseLearner, BaseLearnerHandle
from .reductions import CSOAA, Reduction, WapLdf, build_reduction, setup

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "AppConfig",
    "Candidate", "CostSensitiveExample", "Prediction", "SparseFeatures",
    "BaseLearner", "BaseLearnerHandle",
    "CSOAA", "WapLdf", "Reduction",
    "setup", "build_reduction",
]
