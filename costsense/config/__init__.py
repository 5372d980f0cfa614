from .app_config import AppConfig
from .learner_config import BaseLearnerConfig
from .log_config import LogConfig
from .reduction_config import ProgressConfig, ReductionConfig, ReductionKind

__all__ = [
    "AppConfig",
    "BaseLearnerConfig",
    "LogConfig",
    "ProgressConfig",
    "ReductionConfig",
    "ReductionKind",
]
