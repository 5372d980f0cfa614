#!filepath: costsense/observability/instrumentation.py
from __future__ import annotations

import time
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict

from costsense.observability.metrics import MetricRecorder
from costsense.observability.progress import ProgressReporter
from costsense.utils.logger import logs


@dataclass
class Instrumentation:
    """
    Instrumentation（progress + metrics + timeline）

    - timer(name) 只在 enabled 时写入 timeline
    - 热路径不打日志; report() 是冷路径
    """

    enabled: bool = True

    def __post_init__(self):
        self.progress = ProgressReporter(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    @contextmanager
    def timer(self, name: str):
        if not self.enabled:
            yield
            return

        start = time.perf_counter()
        try:
            yield
        finally:
            self.timeline[name] = self.timeline.get(name, 0.0) + (
                time.perf_counter() - start
            )

    def report(self, title: str):
        if not self.enabled:
            return
        logs.info(f"[Timeline] ===== timeline for {title} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s")
            total += sec

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")
