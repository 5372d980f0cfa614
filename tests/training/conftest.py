# tests/training/conftest.py
from __future__ import annotations

import pytest

from costsense.observability.instrumentation import Instrumentation
from costsense.observability.outcomes import OutcomeLog


@pytest.fixture
def inst() -> Instrumentation:
    return Instrumentation(enabled=True)


@pytest.fixture
def outcomes() -> OutcomeLog:
    return OutcomeLog()
