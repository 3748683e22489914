"""
Renderers for a metrics delta.

``format_log_line`` dumps every changed metric for the log stream.
``format_status_block`` renders the fixed set of publisher counters served by
the status endpoint; both it and ``ZERO_STATUS_BLOCK`` are driven by
``STATUS_KEYS``.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Tuple

ZERO_TEXT = "0"

STATUS_KEYS: Tuple[Tuple[str, str], ...] = (
    ("libbeat.logstash.publish.read_bytes", ZERO_TEXT),
    ("libbeat.logstash.publish.write_bytes", ZERO_TEXT),
    ("libbeat.logstash.call_count.PublishEvents", ZERO_TEXT),
    ("libbeat.logstash.published_and_acked_events", ZERO_TEXT),
    ("libbeat.publisher.messages_in_worker_queues", ZERO_TEXT),
    ("libbeat.publisher.published_events", ZERO_TEXT),
)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def printable(value: Any) -> str:
    if value is None:
        return ZERO_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    return str(value)


def format_log_line(delta: Mapping[str, Any]) -> str:
    parts = []
    for key in sorted(delta):
        parts.append(f" {key}={printable(delta[key])}")
    return "".join(parts)


def format_status_block(delta: Mapping[str, Any]) -> str:
    lines = []
    for key, default in sorted(STATUS_KEYS):
        value = delta.get(key)
        text = default if value is None else printable(value)
        lines.append(f"{key}: {text}\n")
    return "".join(lines)


ZERO_STATUS_BLOCK = format_status_block({})
