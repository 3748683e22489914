import pytest

from deltabeat.monitoring.delta import diff
from deltabeat.monitoring.registry import Registry
from deltabeat.monitoring.snapshot import Snapshot, capture


def _snapshot(**kwargs) -> Snapshot:
    return Snapshot(**kwargs)


def test_capture_reads_every_kind(registry: Registry) -> None:
    registry.new_int("ints.a", 1)
    registry.new_float("floats.b", 2.5)
    registry.new_bool("bools.c", True)
    registry.new_string("strings.d", "x")

    snap = capture(registry)

    assert dict(snap.ints) == {"ints.a": 1}
    assert dict(snap.floats) == {"floats.b": 2.5}
    assert dict(snap.bools) == {"bools.c": True}
    assert dict(snap.strings) == {"strings.d": "x"}
    assert len(snap) == 4


def test_capture_of_empty_registry_is_empty(registry: Registry) -> None:
    assert capture(registry).is_empty()


def test_snapshot_is_immutable(registry: Registry) -> None:
    counter = registry.new_int("events", 1)
    snap = capture(registry)
    counter.set(100)

    assert snap.ints["events"] == 1
    with pytest.raises(TypeError):
        snap.ints["events"] = 2  # type: ignore[index]


def test_diff_of_identical_snapshots_is_empty() -> None:
    snap = _snapshot(
        bools={"b": True},
        strings={"s": "v"},
        ints={"i": 4},
        floats={"f": 1.5},
    )
    assert diff(snap, snap) == {}


@pytest.mark.parametrize("step", [1, 7, -3, 0 - 10**12])
def test_int_delta_is_difference(step: int) -> None:
    previous = _snapshot(ints={"m": 100, "other": 1})
    current = _snapshot(ints={"m": 100 + step, "other": 1})
    assert diff(previous, current) == {"m": step}


def test_float_delta_is_difference() -> None:
    previous = _snapshot(floats={"load": 1.5})
    current = _snapshot(floats={"load": 2.0})
    assert diff(previous, current) == {"load": 0.5}


def test_new_metrics_report_their_value_for_every_kind() -> None:
    current = _snapshot(
        bools={"b": True},
        strings={"s": "hello"},
        ints={"i": 9},
        floats={"f": 0.75},
    )
    assert diff(Snapshot.empty(), current) == {"b": True, "s": "hello", "i": 9, "f": 0.75}


def test_new_zero_counters_are_silent_but_new_bools_and_strings_are_not() -> None:
    current = _snapshot(
        bools={"b": False},
        strings={"s": ""},
        ints={"i": 0},
        floats={"f": 0.0},
    )
    assert diff(Snapshot.empty(), current) == {"b": False, "s": ""}


def test_bool_and_string_changes_report_new_value() -> None:
    previous = _snapshot(bools={"ready": False}, strings={"state": "starting"})
    current = _snapshot(bools={"ready": True}, strings={"state": "running"})
    assert diff(previous, current) == {"ready": True, "state": "running"}


def test_metrics_missing_from_current_are_ignored() -> None:
    previous = _snapshot(ints={"gone": 5}, bools={"gone_flag": True})
    assert diff(previous, Snapshot.empty()) == {}


def test_kinds_are_disjoint_namespaces() -> None:
    previous = _snapshot(ints={"same": 3})
    current = _snapshot(ints={"same": 3}, strings={"same": "3"})
    assert diff(previous, current) == {"same": "3"}


def test_totals_diff_equals_plain_diff_against_empty(registry: Registry) -> None:
    registry.new_int("libbeat.publisher.published_events", 12)
    registry.new_int("idle", 0)
    current = capture(registry)
    assert diff(Snapshot.empty(), current) == {"libbeat.publisher.published_events": 12}
