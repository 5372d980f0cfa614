from .example import (
    NOT_APPLICABLE,
    Candidate,
    CostSensitiveExample,
    Prediction,
    ValidatedExample,
    validate,
)
from .features import CONSTANT, SparseFeatures, hash_feature

__all__ = [
    "NOT_APPLICABLE",
    "CONSTANT",
    "Candidate",
    "CostSensitiveExample",
    "Prediction",
    "SparseFeatures",
    "ValidatedExample",
    "hash_feature",
    "validate",
]
