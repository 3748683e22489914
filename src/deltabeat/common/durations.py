from __future__ import annotations

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_SEC = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_SEC
_NS_PER_HOUR = 60 * _NS_PER_MIN


def _trim(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(frac).zfill(width).rstrip('0')}"


def format_duration(seconds: float) -> str:
    """Render seconds the way operators read durations: 30s, 1m30s, 1h0m0s, 250ms."""
    nanos = int(round(seconds * _NS_PER_SEC))
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos < _NS_PER_US:
        return f"{sign}{nanos}ns"
    if nanos < _NS_PER_MS:
        return f"{sign}{_trim(nanos, _NS_PER_US)}µs"
    if nanos < _NS_PER_SEC:
        return f"{sign}{_trim(nanos, _NS_PER_MS)}ms"

    hours, rem = divmod(nanos, _NS_PER_HOUR)
    minutes, rem = divmod(rem, _NS_PER_MIN)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{_trim(rem, _NS_PER_SEC)}s"
