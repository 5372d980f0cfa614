"""
Base learners (numeric layer under the reductions).

Every implementation satisfies the BaseLearner protocol structurally;
reductions only ever see a BaseLearnerHandle.
"""
from .base import BaseLearner, BaseLearnerHandle, as_handle
from .hashed_linear import HashedLinearRegressor
from .registry import resolve_base_learner
from .sgd_regressor import SklearnSGDLearner

__all__ = [
    "BaseLearner",
    "BaseLearnerHandle",
    "HashedLinearRegressor",
    "SklearnSGDLearner",
    "as_handle",
    "resolve_base_learner",
]
