# tests/conftest.py
from __future__ import annotations

from typing import Dict, Optional, Sequence
from unittest.mock import MagicMock

import pytest
from loguru import logger

from costsense.core.example import Candidate, CostSensitiveExample
from costsense.core.features import SparseFeatures


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture
def mock_learner() -> MagicMock:
    """
    Base learner double: predict -> 0.0, learn recorded.
    """
    m = MagicMock()
    m.predict.return_value = 0.0
    return m


@pytest.fixture
def sf():
    """sf({1: 1.0, 7: 0.5}) -> SparseFeatures"""

    def _make(mapping: Optional[Dict[int, float]] = None) -> SparseFeatures:
        return SparseFeatures.from_dict(mapping or {})

    return _make


@pytest.fixture
def make_ldf_example():
    """
    Factory for label-dependent examples.

    Usage:
        ex = make_ldf_example({1: 0.0, 2: 5.0, 3: None})

    Candidate ``k`` gets the private feature {k * 10: 1.0}.
    """

    def _make(
        costs: Dict[int, Optional[float]],
        *,
        order: Optional[Sequence[int]] = None,
        index: int = 0,
    ) -> CostSensitiveExample:
        labels = list(order) if order is not None else list(costs)
        return CostSensitiveExample(
            candidates=tuple(
                Candidate(l, costs[l], SparseFeatures.from_dict({l * 10: 1.0}))
                for l in labels
            ),
            index=index,
        )

    return _make


@pytest.fixture
def make_example():
    """
    Factory for shared-feature examples.

    Usage:
        ex = make_example([0.0, NOT_APPLICABLE, 2.0], shared, index=3)

    Labels are 0..K-1 unless ``label_ids`` is given.
    """

    def _make(
        costs: Sequence[Optional[float]],
        shared: Optional[SparseFeatures] = None,
        *,
        label_ids: Optional[Sequence[int]] = None,
        index: Optional[int] = None,
    ) -> CostSensitiveExample:
        labels = label_ids if label_ids is not None else range(len(costs))
        return CostSensitiveExample(
            candidates=tuple(Candidate(int(l), c) for l, c in zip(labels, costs)),
            shared=shared if shared is not None else SparseFeatures.empty(),
            index=index,
        )

    return _make
