# costsense/utils/errors.py
from __future__ import annotations

from typing import Optional


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided config (reduction kind, paths, etc).
    Should NOT print traceback.
    """


class CostSensitiveError(RuntimeError):
    """Root of every error raised by the reduction core."""


class ExampleError(CostSensitiveError):
    """
    ExampleError（FINAL）

    Fatal for ONE example only:
      - raised before any base-learner call for that example
      - the caller logs it and moves on to the next example
    """

    def __init__(
        self,
        reason: str,
        *,
        example_index: Optional[int] = None,
        label_id: Optional[int] = None,
    ):
        self.reason = reason
        self.example_index = example_index
        self.label_id = label_id
        super().__init__(self._format())

    def _format(self) -> str:
        where = []
        if self.example_index is not None:
            where.append(f"example={self.example_index}")
        if self.label_id is not None:
            where.append(f"label={self.label_id}")
        prefix = f"[{' '.join(where)}] " if where else ""
        return f"{prefix}{self.reason}"


class MalformedExample(ExampleError):
    """No candidates, or no usable cost on an example that must be learned."""


class DuplicateLabelId(ExampleError):
    """The same label_id appears twice inside one example."""


class NonFiniteCost(ExampleError):
    """
    NaN / infinite / negative cost on a single candidate.

    Not raised by validation: collected and the candidate is excluded.
    """


class ParseError(ExampleError, ValueError):
    """A text record that cannot be turned into an example."""

    def __init__(
        self,
        reason: str,
        *,
        line_no: Optional[int] = None,
        example_index: Optional[int] = None,
    ):
        self.line_no = line_no
        super().__init__(reason, example_index=example_index)

    def _format(self) -> str:
        base = super()._format()
        return f"line {self.line_no}: {base}" if self.line_no is not None else base

    def at(self, example_index: int) -> "ParseError":
        return ParseError(self.reason, line_no=self.line_no, example_index=example_index)
