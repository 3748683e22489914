"""
In-process metric registry.

Hosts register typed variables under dotted names and update them from any
thread. The reporter only reads the registry through ``collect_flat``.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Tuple, Union

MetricValue = Union[bool, str, int, float]
FlatValues = Tuple[Dict[str, bool], Dict[str, str], Dict[str, int], Dict[str, float]]


class RegistryError(Exception):
    pass


class DuplicateMetricError(RegistryError):
    pass


class InvalidMetricNameError(RegistryError):
    pass


def _validate_name(name: str) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidMetricNameError(f"Invalid metric name: {name!r}")
    if name.startswith(".") or name.endswith(".") or ".." in name:
        raise InvalidMetricNameError(f"Invalid metric name: {name!r}")
    return name


@dataclass
class _Var:
    name: str
    _lock: threading.RLock = field(repr=False)


@dataclass
class IntVar(_Var):
    value: int = 0

    def get(self) -> int:
        with self._lock:
            return self.value

    def set(self, value: int) -> None:
        with self._lock:
            self.value = int(value)

    def add(self, delta: int) -> None:
        with self._lock:
            self.value += int(delta)

    def inc(self) -> None:
        self.add(1)

    def dec(self) -> None:
        self.add(-1)


@dataclass
class FloatVar(_Var):
    value: float = 0.0

    def get(self) -> float:
        with self._lock:
            return self.value

    def set(self, value: float) -> None:
        with self._lock:
            self.value = float(value)

    def add(self, delta: float) -> None:
        with self._lock:
            self.value += float(delta)


@dataclass
class BoolVar(_Var):
    value: bool = False

    def get(self) -> bool:
        with self._lock:
            return self.value

    def set(self, value: bool) -> None:
        with self._lock:
            self.value = bool(value)


@dataclass
class StringVar(_Var):
    value: str = ""

    def get(self) -> str:
        with self._lock:
            return self.value

    def set(self, value: str) -> None:
        with self._lock:
            self.value = str(value)


class Registry:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._vars: Dict[str, _Var] = {}

    def _register(self, var: _Var) -> _Var:
        with self._lock:
            if var.name in self._vars:
                raise DuplicateMetricError(f"Metric already registered: {var.name}")
            self._vars[var.name] = var
        return var

    def new_int(self, name: str, value: int = 0) -> IntVar:
        var = IntVar(_validate_name(name), self._lock, int(value))
        return self._register(var)  # type: ignore[return-value]

    def new_float(self, name: str, value: float = 0.0) -> FloatVar:
        var = FloatVar(_validate_name(name), self._lock, float(value))
        return self._register(var)  # type: ignore[return-value]

    def new_bool(self, name: str, value: bool = False) -> BoolVar:
        var = BoolVar(_validate_name(name), self._lock, bool(value))
        return self._register(var)  # type: ignore[return-value]

    def new_string(self, name: str, value: str = "") -> StringVar:
        var = StringVar(_validate_name(name), self._lock, str(value))
        return self._register(var)  # type: ignore[return-value]

    def namespace(self, prefix: str) -> "Namespace":
        return Namespace(self, _validate_name(prefix))

    def get(self, name: str) -> _Var | None:
        with self._lock:
            return self._vars.get(name)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._vars)

    def clear(self) -> None:
        with self._lock:
            self._vars.clear()

    def collect_flat(self) -> FlatValues:
        """Read every variable under one lock, split by value kind."""
        bools: Dict[str, bool] = {}
        strings: Dict[str, str] = {}
        ints: Dict[str, int] = {}
        floats: Dict[str, float] = {}
        with self._lock:
            for name, var in self._vars.items():
                if isinstance(var, BoolVar):
                    bools[name] = var.value
                elif isinstance(var, StringVar):
                    strings[name] = var.value
                elif isinstance(var, IntVar):
                    ints[name] = var.value
                elif isinstance(var, FloatVar):
                    floats[name] = var.value
        return bools, strings, ints, floats


@dataclass(frozen=True)
class Namespace:
    registry: Registry
    prefix: str

    def _name(self, name: str) -> str:
        return f"{self.prefix}.{_validate_name(name)}"

    def new_int(self, name: str, value: int = 0) -> IntVar:
        return self.registry.new_int(self._name(name), value)

    def new_float(self, name: str, value: float = 0.0) -> FloatVar:
        return self.registry.new_float(self._name(name), value)

    def new_bool(self, name: str, value: bool = False) -> BoolVar:
        return self.registry.new_bool(self._name(name), value)

    def new_string(self, name: str, value: str = "") -> StringVar:
        return self.registry.new_string(self._name(name), value)

    def namespace(self, prefix: str) -> "Namespace":
        return Namespace(self.registry, self._name(prefix))


DEFAULT_REGISTRY = Registry()
