# costsense/config/reduction_config.py
from enum import Enum

from pydantic import BaseModel


class ReductionKind(str, Enum):
    CSOAA = "csoaa"
    WAP_LDF = "wap_ldf"


class ReductionConfig(BaseModel):
    kind: ReductionKind = ReductionKind.CSOAA

    # csoaa only: label-dependent features, one regressor shared by all labels
    ldf: bool = False


class ProgressConfig(BaseModel):
    enabled: bool = True
