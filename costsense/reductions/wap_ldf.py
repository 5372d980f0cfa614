# costsense/reductions/wap_ldf.py
from __future__ import annotations

from itertools import combinations
from typing import Dict, Iterator, Tuple

from costsense.core.example import (
    Candidate,
    CostSensitiveExample,
    Prediction,
    ValidatedExample,
    validate,
)
from costsense.core.features import SparseFeatures
from costsense.reductions.base import LearnReport, Reduction
from costsense.utils.errors import MalformedExample

# binary targets on the paired representation x = f_a - f_b
A_PREFERRED = -1.0
B_PREFERRED = 1.0


def oriented(first: Candidate, second: Candidate) -> Tuple[Candidate, Candidate]:
    """Lower label_id is always side ``a``; enumeration order never matters."""
    if first.label_id <= second.label_id:
        return first, second
    return second, first


def paired_features(a: Candidate, b: Candidate) -> SparseFeatures:
    return a.features.subtract(b.features)


class WapLdf(Reduction):
    """
    Weighted All Pairs with label-dependent features（FINAL）

    Training, per unordered pair (a, b) of finite-cost candidates:
      delta  = cost_a - cost_b
      delta == 0       -> skip
      weight = |delta|  (exact, never normalized or clipped)
      target = -1 if cost_a < cost_b else +1

    Prediction: tournament over all pairs, predict(f_a - f_b) < 0 means
    a wins, > 0 means b wins, == 0 nobody scores. Most wins is selected,
    ties go to the lowest label_id.

    The shared vector is never used.
    """

    name = "wap_ldf"

    def _check(self, example: CostSensitiveExample) -> ValidatedExample:
        checked = validate(example)
        if len(checked.eligible) < 2:
            # no pair is built
            return checked
        for c in checked.eligible:
            if c.features is None:
                raise MalformedExample(
                    "wap_ldf needs label-dependent features on every candidate",
                    example_index=example.index,
                    label_id=c.label_id,
                )
        return checked

    def pairs(self, checked: ValidatedExample) -> Iterator[Tuple[Candidate, Candidate]]:
        for first, second in combinations(checked.eligible, 2):
            yield oriented(first, second)

    def _predict(self, checked: ValidatedExample) -> Prediction:
        if len(checked.eligible) < 2:
            only = checked.eligible[0]
            return Prediction(only.label_id, 0.0, {only.label_id: 0.0})

        wins: Dict[int, float] = {c.label_id: 0.0 for c in checked.eligible}
        for a, b in self.pairs(checked):
            margin = self.handle.predict(paired_features(a, b))
            if margin < 0:
                wins[a.label_id] += 1.0
            elif margin > 0:
                wins[b.label_id] += 1.0

        best = min(wins, key=lambda label: (-wins[label], label))
        return Prediction(best, wins[best], wins)

    def _learn(self, checked: ValidatedExample) -> LearnReport:
        updates = 0
        skipped = 0

        for a, b in self.pairs(checked):
            delta = float(a.cost) - float(b.cost)
            if delta == 0:
                skipped += 1
                continue

            target = A_PREFERRED if delta < 0 else B_PREFERRED
            self.handle.learn(paired_features(a, b), target, abs(delta))
            updates += 1

        return LearnReport(checked.index, updates, skipped, checked.excluded)
