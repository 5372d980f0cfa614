# costsense/training/pipeline.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from costsense.core.example import CostSensitiveExample
from costsense.observability.instrumentation import Instrumentation
from costsense.observability.outcomes import OutcomeLog
from costsense.reductions.base import Outcome, Reduction
from costsense.utils.errors import ExampleError
from costsense.utils.logger import logs


@dataclass
class RunSummary:
    examples: int = 0
    labeled: int = 0
    malformed: int = 0
    weighted_loss: float = 0.0

    @property
    def average_loss(self) -> float:
        if self.labeled == 0:
            return 0.0
        return self.weighted_loss / self.labeled

    def merge(self, other: "RunSummary") -> "RunSummary":
        return RunSummary(
            examples=self.examples + other.examples,
            labeled=self.labeled + other.labeled,
            malformed=self.malformed + other.malformed,
            weighted_loss=self.weighted_loss + other.weighted_loss,
        )


class OnlinePipeline:
    """
    OnlinePipeline（ONLINE / FINAL）

    Semantics:
    - examples are consumed strictly in input order, one at a time
    - each example: predict, then learn (labeled examples only)
    - an ExampleError is fatal for that example only; the stream continues
    - the stream may carry an ExampleError in place of an example
      (a record the reader could not parse); it is skipped the same way
    - the reduction's base learner is the only state carried across examples
    """

    def __init__(
        self,
        reduction: Reduction,
        *,
        inst: Optional[Instrumentation] = None,
        outcomes: Optional[OutcomeLog] = None,
    ):
        self.reduction = reduction
        self.inst = inst if inst is not None else Instrumentation(enabled=False)
        self.outcomes = outcomes

    def run(
        self,
        examples: Iterable[Union[CostSensitiveExample, ExampleError]],
        *,
        learn: bool = True,
        task: str = "train",
    ) -> RunSummary:
        logs.info(f"[OnlinePipeline] START task={task} reduction={self.reduction.name}")
        summary = RunSummary()
        self.inst.progress.start(task)
        self.inst.metrics.incr("malformed", by=0)

        with self.inst.timer(f"{task}:{self.reduction.name}"):
            for example in examples:
                summary.examples += 1
                if isinstance(example, ExampleError):
                    self._skip(example, summary)
                    continue
                try:
                    outcome = self.reduction.process(example, learn=learn)
                except ExampleError as err:
                    self._skip(err, summary)
                    continue

                self._collect(example, outcome, summary)

        self.inst.progress.done(task)
        self.inst.metrics.record("examples", summary.examples)
        self.inst.metrics.record("average_loss", summary.average_loss)

        logs.info(
            f"[OnlinePipeline] DONE examples={summary.examples} "
            f"labeled={summary.labeled} malformed={summary.malformed} "
            f"average_loss={summary.average_loss:.6f}"
        )
        return summary

    def _skip(self, err: ExampleError, summary: RunSummary):
        summary.malformed += 1
        self.inst.metrics.incr("malformed")
        logs.warning(f"[OnlinePipeline] skip example: {err}")
        if self.outcomes is not None:
            self.outcomes.add_error(err)

    def _collect(self, example: CostSensitiveExample, outcome: Outcome, summary: RunSummary):
        if outcome.loss is not None:
            summary.labeled += 1
            summary.weighted_loss += outcome.loss

        if self.outcomes is not None:
            self.outcomes.add(outcome)

        label = "unknown" if outcome.is_test else "known"
        n_features = len(example.shared) + sum(
            len(c.features) for c in example.candidates if c.features is not None
        )
        self.inst.progress.update(
            label=label,
            predicted=outcome.prediction.label_id,
            loss=outcome.loss,
            n_features=n_features,
        )
