from .instrumentation import Instrumentation
from .metrics import MetricRecorder
from .outcomes import OutcomeLog, OutcomeRecord
from .progress import ProgressReporter

__all__ = ["Instrumentation", "MetricRecorder", "OutcomeLog", "OutcomeRecord", "ProgressReporter"]
