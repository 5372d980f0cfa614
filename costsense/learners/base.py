# costsense/learners/base.py
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Protocol, runtime_checkable

from costsense.core.features import SparseFeatures


@runtime_checkable
class BaseLearner(Protocol):
    """
    BaseLearner (FINAL / FROZEN)

    Opaque online predictor under every reduction.

    Contract:
    - predict(features) -> float, no weight mutation
    - learn(features, target, weight) -> None
        weight >= 0 scales the update, weight == 0 is a no-op
    - one logical stream of calls; concurrent callers serialize outside
    """

    def predict(self, features: SparseFeatures) -> float:
        ...

    def learn(self, features: SparseFeatures, target: float, weight: float) -> None:
        ...


class BaseLearnerHandle:
    """
    Owned wrapper around one BaseLearner.

    Every reduction stacked on the same learner borrows the same handle,
    so they also share its lock. The lock is held per example via
    ``session()``, not per call.
    """

    def __init__(self, learner: BaseLearner):
        if not isinstance(learner, BaseLearner):
            raise TypeError(
                f"{type(learner).__name__} does not implement predict/learn"
            )
        self.learner = learner
        self._lock = threading.RLock()
        self.n_predict = 0
        self.n_learn = 0

    @contextmanager
    def session(self) -> Iterator["BaseLearnerHandle"]:
        with self._lock:
            yield self

    def predict(self, features: SparseFeatures) -> float:
        self.n_predict += 1
        return float(self.learner.predict(features))

    def learn(self, features: SparseFeatures, target: float, weight: float = 1.0) -> None:
        if weight < 0:
            raise ValueError(f"importance weight must be >= 0, got {weight}")
        if weight == 0:
            return
        self.n_learn += 1
        self.learner.learn(features, float(target), float(weight))

    def __repr__(self) -> str:
        return (
            f"BaseLearnerHandle({type(self.learner).__name__}, "
            f"predict={self.n_predict}, learn={self.n_learn})"
        )


def as_handle(base: BaseLearner | BaseLearnerHandle) -> BaseLearnerHandle:
    if isinstance(base, BaseLearnerHandle):
        return base
    return BaseLearnerHandle(base)
