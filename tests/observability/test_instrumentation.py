#!filepath: tests/observability/test_instrumentation.py

import time

from loguru import logger

from costsense.observability.instrumentation import Instrumentation


def test_instrumentation_timer_accumulates():
    inst = Instrumentation(enabled=True)

    with inst.timer("pass"):
        time.sleep(0.01)
    first = inst.timeline["pass"]

    with inst.timer("pass"):
        time.sleep(0.01)

    assert first > 0
    assert inst.timeline["pass"] > first


def test_instrumentation_disabled_records_nothing():
    inst = Instrumentation(enabled=False)

    with inst.timer("pass"):
        pass
    inst.metrics.record("rows", 1)

    assert inst.timeline == {}
    assert inst.metrics.metrics == {}


def test_report():
    inst = Instrumentation(enabled=True)

    with inst.timer("train:csoaa"):
        time.sleep(0.005)

    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    inst.report("data.txt")

    logger.remove(sink_id)

    output = "\n".join(captured)

    assert "train:csoaa" in output
    assert "data.txt" in output
    assert "Total" in output
