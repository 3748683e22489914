from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Optional

from deltabeat.common.logging import setup_logging
from deltabeat.common.settings import MetricsConfig, Settings, StatusConfig, compute_config_hash
from deltabeat.monitoring.registry import DEFAULT_REGISTRY, Registry
from deltabeat.monitoring.state import ExposedState
from deltabeat.reporter.service import MetricsReporter
from deltabeat.status.server import StatusServer


@dataclass
class Agent:
    settings: Settings
    registry: Registry = field(default_factory=lambda: DEFAULT_REGISTRY)
    state: ExposedState = field(default_factory=ExposedState)
    period_sec: Optional[float] = None
    status_enabled: Optional[bool] = None
    status_port: Optional[int] = None

    def metrics_config(self) -> MetricsConfig:
        config = MetricsConfig.from_settings(self.settings.raw)
        if self.period_sec is None:
            return config
        return MetricsConfig(
            enabled=config.enabled,
            period_sec=float(self.period_sec),
            totals_enabled=config.totals_enabled,
        )

    def status_config(self) -> StatusConfig:
        config = StatusConfig.from_settings(self.settings.raw)
        return StatusConfig(
            enabled=config.enabled if self.status_enabled is None else self.status_enabled,
            host=config.host,
            port=config.port if self.status_port is None else int(self.status_port),
        )

    def run(self, stop_event: threading.Event) -> None:
        logger = setup_logging(self.settings.app_log_path, self.settings.log_level)
        logger.info(
            "boot_start",
            extra={
                "config_version": self.settings.config_version,
                "config_hash": compute_config_hash(self.settings.config_path),
                "environment": self.settings.environment,
            },
        )

        status_config = self.status_config()
        server: Optional[StatusServer] = None
        if status_config.enabled:
            server = StatusServer(self.state, status_config, logger=logger.getChild("status"))
            try:
                server.start()
            except OSError as exc:
                logger.error(
                    "status_server_start_failed",
                    extra={
                        "host": status_config.host,
                        "port": status_config.port,
                        "error": str(exc),
                    },
                )
                raise

        reporter = MetricsReporter(
            registry=self.registry,
            state=self.state,
            config=self.metrics_config(),
            logger=logger.getChild("reporter"),
        )

        try:
            reporter.start()
            logger.info("boot_complete")
            stop_event.wait()
            logger.info("shutdown_requested")
        finally:
            reporter.stop()
            reporter.report_totals()
            if server is not None:
                server.stop()
            logger.info("shutdown_complete")
