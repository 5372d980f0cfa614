from typing import Callable, Dict

from costsense.config.learner_config import BaseLearnerConfig
from costsense.learners.base import BaseLearner
from costsense.learners.hashed_linear import HashedLinearRegressor
from costsense.learners.sgd_regressor import SklearnSGDLearner

_SGD_SCHEDULES = {
    "constant": "constant",
    "invscale": "invscaling",
    "adaptive": "adaptive",
}

_LEARNER_REGISTRY: Dict[str, Callable[[BaseLearnerConfig], BaseLearner]] = {
    "hashed_linear": lambda cfg: HashedLinearRegressor(
        bits=cfg.bits,
        learning_rate=cfg.learning_rate,
        schedule=cfg.schedule,
        decay=cfg.decay,
        l2=cfg.l2,
        **cfg.params,
    ),
    "sgd": lambda cfg: SklearnSGDLearner(
        bits=cfg.bits,
        **{
            "eta0": cfg.learning_rate,
            "learning_rate": _SGD_SCHEDULES[cfg.schedule],
            "alpha": cfg.l2,
            **cfg.params,
        },
    ),
}


def resolve_base_learner(cfg: BaseLearnerConfig) -> BaseLearner:
    if cfg.kind not in _LEARNER_REGISTRY:
        available = ", ".join(sorted(_LEARNER_REGISTRY))
        raise ValueError(f"No BaseLearner for {cfg.kind!r}. Available: {available}")

    return _LEARNER_REGISTRY[cfg.kind](cfg)
