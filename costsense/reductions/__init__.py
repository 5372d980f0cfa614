"""
Cost-sensitive reductions (FINAL / FROZEN)

Exactly two implementations sit behind the Reduction interface:

- CSOAA   : one regression per candidate, argmin prediction
- WapLdf  : importance-weighted pairwise comparisons, tournament prediction

Both are built through ``setup`` / ``build_reduction`` only.
"""
from .base import LearnReport, Outcome, Reduction
from .csoaa import CSOAA
from .setup import ReductionFactory, build_reduction, setup
from .wap_ldf import WapLdf

__all__ = [
    "CSOAA",
    "LearnReport",
    "Outcome",
    "Reduction",
    "ReductionFactory",
    "WapLdf",
    "build_reduction",
    "setup",
]
