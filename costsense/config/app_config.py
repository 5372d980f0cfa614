#!filepath: costsense/config/app_config.py
from __future__ import annotations

import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .learner_config import BaseLearnerConfig
from .log_config import LogConfig
from .reduction_config import ProgressConfig, ReductionConfig

ENV_CONFIG_PATH = "COSTSENSE_CONFIG"


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    costsense/config/app_config.py → costsense/config → costsense → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    learner: BaseLearnerConfig = Field(default_factory=BaseLearnerConfig)
    reduction: ReductionConfig = Field(default_factory=ReductionConfig)
    progress: ProgressConfig = Field(default_factory=ProgressConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env

        Resolution order:
          1) explicit ``path``
          2) $COSTSENSE_CONFIG (may come from .env)
          3) packaged costsense/config/base.yml
        """
        load_dotenv(os.path.join(project_root(), ".env"))

        if path is None:
            path = os.getenv(ENV_CONFIG_PATH) or default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        return cls(**raw)
