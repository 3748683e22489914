from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from deltabeat.common.durations import format_duration
from deltabeat.common.logging import get_logger
from deltabeat.common.settings import MetricsConfig
from deltabeat.monitoring.delta import Delta, diff
from deltabeat.monitoring.formatting import (
    ZERO_STATUS_BLOCK,
    format_log_line,
    format_status_block,
)
from deltabeat.monitoring.snapshot import MetricSource, Snapshot, capture
from deltabeat.monitoring.state import ExposedState


class ReporterAlreadyRunningError(RuntimeError):
    pass


@dataclass
class MetricsReporter:
    registry: MetricSource
    state: ExposedState
    config: MetricsConfig = field(default_factory=MetricsConfig)
    logger: logging.Logger = field(default_factory=lambda: get_logger("reporter"))
    clock: Callable[[], float] = time.monotonic
    started_at: float = field(init=False)
    _thread: Optional[threading.Thread] = field(default=None, init=False, repr=False)
    _stop_event: Optional[threading.Event] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.started_at = self.clock()

    @property
    def period_text(self) -> str:
        return format_duration(self.config.period_sec)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_periodic(
        self, stop_event: Optional[threading.Event] = None, max_ticks: Optional[int] = None
    ) -> int:
        """
        Log the metrics that changed in every period until ``stop_event`` is set.

        The first tick diffs against an empty baseline, so it reports everything
        accumulated before the loop started. Returns the number of ticks run.
        """
        if not self.config.enabled:
            self.logger.info("Metrics logging disabled")
            return 0
        if stop_event is None:
            stop_event = threading.Event()

        self.logger.info(
            "Metrics logging every %s",
            self.period_text,
            extra={"period_sec": self.config.period_sec},
        )
        previous = Snapshot.empty()
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            if stop_event.wait(self.config.period_sec):
                break
            previous = self._tick(previous)
            ticks += 1
        return ticks

    def _tick(self, previous: Snapshot) -> Snapshot:
        current = capture(self.registry)
        delta = diff(previous, current)

        if not delta:
            self.logger.info("No non-zero metrics in the last %s", self.period_text)
            self.state.set(ZERO_STATUS_BLOCK)
            return current

        self.logger.info(
            "Non-zero metrics in the last %s:%s",
            self.period_text,
            format_log_line(delta),
            extra={"changed": len(delta)},
        )
        self.state.set(format_status_block(delta))
        return current

    def report_totals(self) -> Optional[Delta]:
        if not self.config.totals_enabled:
            return None

        delta = diff(Snapshot.empty(), capture(self.registry))
        uptime = self.clock() - self.started_at
        self.logger.info("Total non-zero values: %s", format_log_line(delta))
        self.logger.info(
            "Uptime: %s", format_duration(uptime), extra={"uptime_sec": round(uptime, 3)}
        )
        self.state.set(format_status_block(delta))
        return delta

    def start(self) -> bool:
        if not self.config.enabled:
            self.logger.info("Metrics logging disabled")
            return False
        if self.is_running:
            raise ReporterAlreadyRunningError("Metrics reporter already running")

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self.run_periodic,
            args=(self._stop_event,),
            name="metrics-reporter",
            daemon=True,
        )
        self._thread.start()
        return True

    def stop(self, timeout: float = 5.0) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                self.logger.warning("reporter_stop_timeout", extra={"timeout_sec": timeout})
                return
        self._thread = None
        self._stop_event = None
