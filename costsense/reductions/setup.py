# costsense/reductions/setup.py
from __future__ import annotations

from typing import Any, Dict, Type, Union

from costsense.config.reduction_config import ReductionConfig, ReductionKind
from costsense.learners.base import BaseLearner, BaseLearnerHandle, as_handle
from costsense.reductions.base import Reduction
from costsense.reductions.csoaa import CSOAA
from costsense.reductions.wap_ldf import WapLdf
from costsense.utils.logger import logs


class ReductionFactory:
    """
    ReductionFactory (FINAL / FROZEN)

    Registration is centralized and static:
    adding a reduction requires a deliberate change to _REGISTRY.
    """

    _REGISTRY: Dict[ReductionKind, Type[Reduction]] = {
        ReductionKind.CSOAA: CSOAA,
        ReductionKind.WAP_LDF: WapLdf,
    }

    @classmethod
    def create(
        cls,
        base: Union[BaseLearner, BaseLearnerHandle],
        strategy: Union[ReductionKind, str],
        **options: Any,
    ) -> Reduction:
        try:
            kind = ReductionKind(strategy)
        except ValueError:
            available = ", ".join(k.value for k in cls._REGISTRY)
            raise ValueError(
                f"[ReductionFactory] unknown reduction: {strategy!r}. Available: {available}"
            ) from None

        reduction_cls = cls._REGISTRY[kind]
        reduction = reduction_cls(as_handle(base), **options)

        logs.debug(f"[ReductionFactory] {kind.value} -> {reduction!r}")
        return reduction


def setup(
    base: Union[BaseLearner, BaseLearnerHandle],
    strategy: Union[ReductionKind, str],
    **options: Any,
) -> Reduction:
    """
    Bind a base learner to one reduction and return the uniform handle.

    Pass the same BaseLearnerHandle twice to stack two reductions on one
    learner; they then share its weights and its lock.
    """
    return ReductionFactory.create(base, strategy, **options)


def build_reduction(
    cfg: ReductionConfig,
    base: Union[BaseLearner, BaseLearnerHandle],
) -> Reduction:
    options: Dict[str, Any] = {}
    if cfg.kind is ReductionKind.CSOAA:
        options["ldf"] = cfg.ldf
    return setup(base, cfg.kind, **options)
