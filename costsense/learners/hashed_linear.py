"""
hashed_linear.py
----------------
Online squared-loss linear regressor over a hashed weight table,
updated one (features, target, importance weight) triple at a time.

    yhat       = sum_i w[h(i)] * x_i
    grad       = (yhat - y) * x
    w         <- w - eta_t * weight * grad

Learning-rate schedules (t = accumulated importance weight):
    constant   : eta_t = eta0
    invscale   : eta_t = eta0 / (1 + decay * t)
    adaptive   : eta_t = eta0 / sqrt(t)

The scaled step is capped at 1 / ||x||^2, so one update moves the
prediction at most onto the target. Large importance weights (WAP cost
gaps) therefore never overshoot.
"""
from __future__ import annotations

import numpy as np

from costsense.core.features import SparseFeatures


class HashedLinearRegressor:
    VALID_SCHEDULES = ("constant", "invscale", "adaptive")

    def __init__(
        self,
        bits: int = 18,
        learning_rate: float = 0.5,
        schedule: str = "invscale",
        decay: float = 1e-3,
        l2: float = 0.0,
    ):
        if not 1 <= bits <= 30:
            raise ValueError(f"bits must be in [1, 30], got {bits}")
        if learning_rate <= 0:
            raise ValueError("learning_rate must be > 0.")
        if schedule not in self.VALID_SCHEDULES:
            raise ValueError(
                f"schedule must be one of {self.VALID_SCHEDULES}, got '{schedule}'."
            )

        self.bits = bits
        self.learning_rate = learning_rate
        self.schedule = schedule
        self.decay = decay
        self.l2 = l2

        self.mask = np.uint64((1 << bits) - 1)
        self.weights = np.zeros(1 << bits, dtype=np.float64)
        self.t = 0.0

    # ------------------------------------------------------------------
    def _slots(self, features: SparseFeatures) -> np.ndarray:
        return (features.indices & self.mask).astype(np.intp)

    def _eta(self) -> float:
        if self.schedule == "constant":
            return self.learning_rate
        if self.schedule == "invscale":
            return self.learning_rate / (1.0 + self.decay * self.t)
        return self.learning_rate / np.sqrt(max(self.t, 1.0))

    # ------------------------------------------------------------------
    def predict(self, features: SparseFeatures) -> float:
        if not len(features):
            return 0.0
        return float(np.dot(self.weights[self._slots(features)], features.values))

    def learn(self, features: SparseFeatures, target: float, weight: float) -> None:
        if weight <= 0 or not len(features):
            return

        self.t += weight
        slots = self._slots(features)
        x = features.values

        residual = float(np.dot(self.weights[slots], x)) - target
        step = min(self._eta() * weight, 1.0 / float(np.dot(x, x)))

        grad = residual * x
        if self.l2:
            grad = grad + self.l2 * self.weights[slots]

        # 哈希冲突: 同一 slot 的梯度需要累加
        np.add.at(self.weights, slots, -step * grad)

    def __repr__(self) -> str:
        return (
            f"HashedLinearRegressor(bits={self.bits}, eta0={self.learning_rate}, "
            f"schedule={self.schedule!r}, t={self.t:g})"
        )
