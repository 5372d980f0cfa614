# costsense/learners/sgd_regressor.py
from __future__ import annotations

from typing import Any

import numpy as np
from scipy.sparse import csr_matrix
from sklearn.linear_model import SGDRegressor

from costsense.core.features import SparseFeatures


class SklearnSGDLearner:
    """
    SGDRegressor Online Learner（FINAL）

    - features are hashed into a 1 x 2**bits CSR row
    - importance weight -> sample_weight
    - no intercept: reductions add their own constant feature
    """

    def __init__(self, bits: int = 18, **sgd_params: Any):
        self.bits = bits
        self.dim = 1 << bits
        self.mask = np.uint64(self.dim - 1)

        params = {"fit_intercept": False, "learning_rate": "invscaling", "eta0": 0.1}
        params.update(sgd_params)
        self.model = SGDRegressor(**params)

    def _row(self, features: SparseFeatures) -> csr_matrix:
        cols = (features.indices & self.mask).astype(np.int64)
        rows = np.zeros(cols.size, dtype=np.int64)
        # duplicate (row, col) entries are summed
        return csr_matrix((features.values, (rows, cols)), shape=(1, self.dim))

    @property
    def fitted(self) -> bool:
        return hasattr(self.model, "coef_")

    def predict(self, features: SparseFeatures) -> float:
        if not self.fitted:
            return 0.0
        return float(self.model.predict(self._row(features))[0])

    def learn(self, features: SparseFeatures, target: float, weight: float) -> None:
        if weight <= 0:
            return
        self.model.partial_fit(
            self._row(features),
            np.array([target], dtype=np.float64),
            sample_weight=np.array([weight], dtype=np.float64),
        )
