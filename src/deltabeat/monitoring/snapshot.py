from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Protocol

from deltabeat.monitoring.registry import FlatValues


class MetricSource(Protocol):
    def collect_flat(self) -> FlatValues:
        ...


def _frozen(values: Mapping | None) -> Mapping:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class Snapshot:
    bools: Mapping[str, bool] = field(default_factory=dict)
    strings: Mapping[str, str] = field(default_factory=dict)
    ints: Mapping[str, int] = field(default_factory=dict)
    floats: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bools", _frozen(self.bools))
        object.__setattr__(self, "strings", _frozen(self.strings))
        object.__setattr__(self, "ints", _frozen(self.ints))
        object.__setattr__(self, "floats", _frozen(self.floats))

    @staticmethod
    def empty() -> "Snapshot":
        return Snapshot()

    def is_empty(self) -> bool:
        return not (self.bools or self.strings or self.ints or self.floats)

    def __len__(self) -> int:
        return len(self.bools) + len(self.strings) + len(self.ints) + len(self.floats)


def capture(source: MetricSource) -> Snapshot:
    bools, strings, ints, floats = source.collect_flat()
    return Snapshot(bools=bools, strings=strings, ints=ints, floats=floats)
