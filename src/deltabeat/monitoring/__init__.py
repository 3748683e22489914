from deltabeat.monitoring.delta import Delta, diff
from deltabeat.monitoring.formatting import (
    STATUS_KEYS,
    ZERO_STATUS_BLOCK,
    format_log_line,
    format_status_block,
    printable,
)
from deltabeat.monitoring.registry import (
    DEFAULT_REGISTRY,
    DuplicateMetricError,
    InvalidMetricNameError,
    Registry,
    RegistryError,
)
from deltabeat.monitoring.snapshot import Snapshot, capture
from deltabeat.monitoring.state import PREPARING, ExposedState

__all__ = [
    "DEFAULT_REGISTRY",
    "Delta",
    "DuplicateMetricError",
    "ExposedState",
    "InvalidMetricNameError",
    "PREPARING",
    "Registry",
    "RegistryError",
    "STATUS_KEYS",
    "Snapshot",
    "ZERO_STATUS_BLOCK",
    "capture",
    "diff",
    "format_log_line",
    "format_status_block",
    "printable",
]
