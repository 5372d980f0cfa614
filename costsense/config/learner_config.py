# costsense/config/learner_config.py
from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field


class BaseLearnerConfig(BaseModel):
    """
    BaseLearnerConfig（FINAL）

    语义：
      - which numeric learner sits under the reduction
      - hashing width + step-size schedule
      - params: opaque extras forwarded to the concrete learner
    """

    kind: Literal["hashed_linear", "sgd"] = "hashed_linear"

    # weight table = 2 ** bits
    bits: int = Field(18, ge=1, le=30)

    learning_rate: float = Field(0.5, gt=0)
    schedule: Literal["constant", "invscale", "adaptive"] = "invscale"
    decay: float = Field(1e-3, ge=0)
    l2: float = Field(0.0, ge=0)

    params: Dict[str, Any] = Field(default_factory=dict)
