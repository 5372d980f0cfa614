# costsense/reductions/csoaa.py
from __future__ import annotations

from costsense.core.example import Candidate, Prediction, ValidatedExample
from costsense.core.features import SparseFeatures
from costsense.learners.base import BaseLearnerHandle
from costsense.reductions.base import LearnReport, Reduction


class CSOAA(Reduction):
    """
    Cost-Sensitive One-Against-All（FINAL）

    K candidates -> K regressions on one shared base learner.

    ldf=False:
      view = effective features tagged by label_id + per-label constant,
      so each label gets its own regressor inside the same weight table.
    ldf=True:
      view = candidate's own features + one shared constant,
      all labels share a single regressor (label-dependent features).

    learn   : learn(view, cost, 1.0) per finite-cost candidate
    predict : argmin over (score, label_id)
    """

    name = "csoaa"

    def __init__(self, handle: BaseLearnerHandle, *, ldf: bool = False):
        super().__init__(handle)
        self.ldf = ldf

    def view(self, checked: ValidatedExample, candidate: Candidate) -> SparseFeatures:
        feats = checked.example.effective_features(candidate)
        if self.ldf:
            return feats.with_constant()
        return feats.tag(candidate.label_id).with_constant(candidate.label_id)

    def _predict(self, checked: ValidatedExample) -> Prediction:
        if len(checked.eligible) == 1:
            only = checked.eligible[0]
            score = self.handle.predict(self.view(checked, only))
            return Prediction(only.label_id, score, {only.label_id: score})

        scores = {
            c.label_id: self.handle.predict(self.view(checked, c))
            for c in checked.eligible
        }
        best = min(scores, key=lambda label: (scores[label], label))
        return Prediction(best, scores[best], scores)

    def _learn(self, checked: ValidatedExample) -> LearnReport:
        updates = 0
        for c in checked.eligible:
            self.handle.learn(self.view(checked, c), float(c.cost), 1.0)
            updates += 1

        return LearnReport(checked.index, updates, excluded=checked.excluded)
