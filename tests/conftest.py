import logging
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
for path in (REPO_ROOT, SRC_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from deltabeat.common.settings import MetricsConfig
from deltabeat.monitoring.registry import Registry
from deltabeat.monitoring.state import ExposedState


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def state() -> ExposedState:
    return ExposedState()


@pytest.fixture
def fast_metrics_config() -> MetricsConfig:
    return MetricsConfig(enabled=True, period_sec=0.01, totals_enabled=True)


@pytest.fixture
def reporter_logger(caplog) -> logging.Logger:
    caplog.set_level(logging.INFO, logger="test.reporter")
    return logging.getLogger("test.reporter")
