# costsense/reductions/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import ClassVar, Iterator, Optional, Tuple

from costsense.core.example import CostSensitiveExample, Prediction, ValidatedExample, validate
from costsense.learners.base import BaseLearnerHandle
from costsense.utils.errors import MalformedExample, NonFiniteCost


@dataclass(frozen=True)
class LearnReport:
    example_index: Optional[int]
    updates: int
    skipped_pairs: int = 0
    excluded: Tuple[NonFiniteCost, ...] = ()


@dataclass(frozen=True)
class Outcome:
    """
    Outcome（FINAL）

    One processed example:
      - loss = cost of the predicted label (None on test examples)
      - report is None when nothing was learned
    """

    example_index: Optional[int]
    prediction: Prediction
    loss: Optional[float]
    is_test: bool
    report: Optional[LearnReport] = None


class Reduction(ABC):
    """
    Reduction (FINAL / FROZEN)

    Uniform {predict, learn} over a CostSensitiveExample.
    Callers never branch on the concrete reduction.

    Every public method holds the handle session for the whole example,
    and validates the example before the first base-learner call.
    """

    name: ClassVar[str] = ""

    def __init__(self, handle: BaseLearnerHandle):
        self.handle = handle

    @contextmanager
    def session(self) -> Iterator["Reduction"]:
        with self.handle.session():
            yield self

    # --------------------------------------------------
    # Contract
    # --------------------------------------------------
    def predict(self, example: CostSensitiveExample) -> Prediction:
        checked = self._check(example)
        with self.session():
            return self._predict(checked)

    def learn(self, example: CostSensitiveExample) -> LearnReport:
        checked = self._check(example)
        if checked.is_test:
            raise MalformedExample(
                "cannot learn from an example without costs",
                example_index=example.index,
            )
        with self.session():
            return self._learn(checked)

    def process(self, example: CostSensitiveExample, *, learn: bool = True) -> Outcome:
        """predict, then learn (labeled examples only), atomically."""
        checked = self._check(example)

        with self.session():
            prediction = self._predict(checked)

            if checked.is_test:
                return Outcome(example.index, prediction, None, True)

            report = self._learn(checked) if learn else None

        loss = example.cost_of(prediction.label_id)
        return Outcome(example.index, prediction, loss, False, report)

    # --------------------------------------------------
    # Subclass hooks
    # --------------------------------------------------
    def _check(self, example: CostSensitiveExample) -> ValidatedExample:
        return validate(example)

    @abstractmethod
    def _predict(self, checked: ValidatedExample) -> Prediction:
        raise NotImplementedError

    @abstractmethod
    def _learn(self, checked: ValidatedExample) -> LearnReport:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.handle!r})"
