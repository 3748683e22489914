from deltabeat.reporter.service import MetricsReporter, ReporterAlreadyRunningError

__all__ = ["MetricsReporter", "ReporterAlreadyRunningError"]
