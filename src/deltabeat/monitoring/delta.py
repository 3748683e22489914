from __future__ import annotations

from typing import Dict

from deltabeat.monitoring.registry import MetricValue
from deltabeat.monitoring.snapshot import Snapshot

Delta = Dict[str, MetricValue]


def diff(previous: Snapshot, current: Snapshot) -> Delta:
    """
    Return the metrics that changed between two snapshots.

    Bools and strings report their new value when the name is new or the value
    moved. Ints and floats report ``current - previous``, with a missing
    previous value treated as zero, so unchanged zero counters stay silent.
    """
    out: Delta = {}

    for name, value in current.bools.items():
        if name not in previous.bools or previous.bools[name] != value:
            out[name] = value

    for name, value in current.strings.items():
        if name not in previous.strings or previous.strings[name] != value:
            out[name] = value

    for name, value in current.ints.items():
        prev = previous.ints.get(name, 0)
        if prev != value:
            out[name] = value - prev

    for name, value in current.floats.items():
        prev = previous.floats.get(name, 0.0)
        if prev != value:
            out[name] = value - prev

    return out
