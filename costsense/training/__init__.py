"""
Online training doctrine (FINAL / FROZEN)

- TrainingUnit = one CostSensitiveExample from a stream
- Model        = the base learner state, mutated in input order
- Examples are consumed, applied and discarded; nothing else persists
"""
from .pipeline import OnlinePipeline, RunSummary

__all__ = ["OnlinePipeline", "RunSummary"]
