#!filepath: costsense/observability/progress.py
from __future__ import annotations

from typing import Optional

from costsense.utils.logger import logs

HEADER = (
    f"{'average':<10}{'since':<10}{'example':>12}{'example':>12}"
    f"{'current':>10}{'current':>10}{'current':>10}"
)
HEADER_2 = (
    f"{'loss':<10}{'last':<10}{'counter':>12}{'weight':>12}"
    f"{'label':>10}{'predict':>10}{'features':>10}"
)


class ProgressReporter:
    """
    Textual progress log（offline tooling parses these lines）

    - one line each time the example counter reaches 1, 2, 4, 8, ...
    - average loss is over labeled (weighted) examples only
    - disabled reporter tracks nothing and logs nothing
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.reset()

    def reset(self):
        self.examples = 0
        self.weighted_examples = 0.0
        self.labeled_weight = 0.0
        self.sum_loss = 0.0
        self._since_weight = 0.0
        self._since_loss = 0.0
        self._next_dump = 1

    @property
    def average_loss(self) -> float:
        if self.labeled_weight == 0:
            return 0.0
        return self.sum_loss / self.labeled_weight

    def start(self, task: str):
        if not self.enabled:
            return
        logs.info(f"[Progress] {task} started")
        logs.info(f"[Progress] {HEADER}")
        logs.info(f"[Progress] {HEADER_2}")

    def update(
        self,
        *,
        label: str,
        predicted: int,
        loss: Optional[float],
        n_features: int,
        weight: float = 1.0,
    ):
        if not self.enabled:
            return

        self.examples += 1
        self.weighted_examples += weight
        if loss is not None:
            self.sum_loss += loss * weight
            self.labeled_weight += weight
            self._since_loss += loss * weight
            self._since_weight += weight

        if self.examples >= self._next_dump:
            self._emit(label, predicted, n_features)
            self._next_dump *= 2

    def _emit(self, label: str, predicted: int, n_features: int):
        since = self._since_loss / self._since_weight if self._since_weight else 0.0
        logs.info(
            f"[Progress] {self.average_loss:<10.6f}{since:<10.6f}"
            f"{self.examples:>12}{self.weighted_examples:>12.1f}"
            f"{label:>10}{predicted:>10}{n_features:>10}"
        )
        self._since_loss = 0.0
        self._since_weight = 0.0

    def done(self, task: str):
        if not self.enabled:
            return
        logs.info(
            f"[Progress] {task} done examples={self.examples} "
            f"weighted={self.weighted_examples:g} average_loss={self.average_loss:.6f}"
        )
