# costsense/core/example.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from costsense.core.features import SparseFeatures
from costsense.utils.errors import (
    DuplicateLabelId,
    MalformedExample,
    NonFiniteCost,
)
from costsense.utils.logger import logs

# cost sentinel: label listed without a cost
NOT_APPLICABLE = None


@dataclass(frozen=True)
class Candidate:
    label_id: int
    cost: Optional[float] = NOT_APPLICABLE
    features: Optional[SparseFeatures] = None

    @property
    def has_cost(self) -> bool:
        return self.cost is not NOT_APPLICABLE


@dataclass(frozen=True)
class CostSensitiveExample:
    """
    CostSensitiveExample（FINAL / FROZEN）

    One streaming record:
      - candidates: order matters only for deterministic enumeration
      - shared: used by candidates without a private vector
      - index: stream position, attached to every error for this record

    Consumed once (predict and/or learn), then discarded.
    """

    candidates: Tuple[Candidate, ...]
    shared: SparseFeatures = field(default_factory=SparseFeatures.empty)
    index: Optional[int] = None
    tag: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "candidates", tuple(self.candidates))

    def effective_features(self, candidate: Candidate) -> SparseFeatures:
        if candidate.features is not None:
            return candidate.features
        return self.shared

    def cost_of(self, label_id: int) -> Optional[float]:
        for c in self.candidates:
            if c.label_id == label_id:
                return c.cost
        return NOT_APPLICABLE


@dataclass(frozen=True)
class Prediction:
    label_id: int
    score: float
    # per-label regression output (csoaa) or win count (wap_ldf)
    scores: Dict[int, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidatedExample:
    example: CostSensitiveExample
    eligible: Tuple[Candidate, ...]
    excluded: Tuple[NonFiniteCost, ...]
    is_test: bool

    @property
    def index(self) -> Optional[int]:
        return self.example.index

    def min_cost(self) -> Optional[float]:
        if self.is_test:
            return None
        return min(c.cost for c in self.eligible)


def _bad_cost(cost: float) -> Optional[str]:
    if math.isnan(cost):
        return "cost is NaN"
    if math.isinf(cost):
        return "cost is infinite"
    if cost < 0:
        return f"cost is negative ({cost})"
    return None


def validate(example: CostSensitiveExample) -> ValidatedExample:
    """
    Check one example before any base-learner call.

    Raises:
      MalformedExample  - no candidates, or costs given but none usable
      DuplicateLabelId  - the same label_id twice

    NaN / infinite / negative costs only drop that candidate.
    An example where no candidate carries a cost is a test example.
    """
    idx = example.index

    if not example.candidates:
        raise MalformedExample("example has no candidates", example_index=idx)

    seen = set()
    for c in example.candidates:
        if c.label_id in seen:
            raise DuplicateLabelId(
                "label_id appears more than once", example_index=idx, label_id=c.label_id
            )
        seen.add(c.label_id)

    labeled = []
    excluded = []
    for c in example.candidates:
        if not c.has_cost:
            continue
        reason = _bad_cost(float(c.cost))
        if reason is None:
            labeled.append(c)
            continue
        err = NonFiniteCost(reason, example_index=idx, label_id=c.label_id)
        logs.warning(f"[validate] {err} -> candidate excluded")
        excluded.append(err)

    if labeled:
        return ValidatedExample(example, tuple(labeled), tuple(excluded), is_test=False)

    if not excluded:
        return ValidatedExample(example, example.candidates, (), is_test=True)

    raise MalformedExample("no candidate has a finite cost", example_index=idx)
