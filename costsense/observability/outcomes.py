# costsense/observability/outcomes.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Optional

import pandas as pd

from costsense.reductions.base import Outcome
from costsense.utils.errors import ExampleError

COLUMNS = ["index", "predicted", "score", "loss", "is_test", "error"]


@dataclass(frozen=True)
class OutcomeRecord:
    index: Optional[int]
    predicted: Optional[int]
    score: Optional[float]
    loss: Optional[float]
    is_test: bool
    error: Optional[str] = None


class OutcomeLog:
    """
    Per-example outcomes for external progress reporting.

    One row per consumed example, failed ones included (error set).
    """

    def __init__(self):
        self.records: List[OutcomeRecord] = []

    def add(self, outcome: Outcome):
        self.records.append(
            OutcomeRecord(
                index=outcome.example_index,
                predicted=outcome.prediction.label_id,
                score=outcome.prediction.score,
                loss=outcome.loss,
                is_test=outcome.is_test,
            )
        )

    def add_error(self, err: ExampleError):
        self.records.append(
            OutcomeRecord(
                index=err.example_index,
                predicted=None,
                score=None,
                loss=None,
                is_test=False,
                error=f"{type(err).__name__}: {err.reason}",
            )
        )

    def __len__(self) -> int:
        return len(self.records)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(r) for r in self.records], columns=COLUMNS)

    def write_csv(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_frame().to_csv(path, index=False)
        return path
