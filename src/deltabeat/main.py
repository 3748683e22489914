from __future__ import annotations

import argparse
import os
import signal
import sys
import threading
from pathlib import Path

import jsonschema
from dotenv import load_dotenv

from deltabeat.common.settings import load_settings
from deltabeat.orchestrator.service import Agent

PERIOD_ENV = "DELTABEAT_PERIOD_SEC"
PORT_ENV = "DELTABEAT_STATUS_PORT"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Periodic metrics delta reporter")
    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--schema",
        default="config/schema.json",
        help="Path to the settings JSON schema (default: config/schema.json)",
    )
    parser.add_argument(
        "--period-sec",
        type=float,
        default=None,
        help="Reporting period in seconds (overrides config)",
    )
    parser.add_argument(
        "--status",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Serve the status endpoint (overrides config)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Status endpoint port (overrides config)",
    )
    args = parser.parse_args(argv)
    if args.period_sec is not None and args.period_sec <= 0:
        raise SystemExit("--period-sec must be > 0")
    if args.port is not None and not 0 <= args.port <= 65535:
        raise SystemExit("--port must be between 0 and 65535")
    return args


def _install_signal_handlers(stop_event: threading.Event) -> None:
    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, lambda _sig, _frame: stop_event.set())


def _env_override(name: str, cast):
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} is not a valid {cast.__name__}: {raw!r}") from exc


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    load_dotenv()
    try:
        settings = load_settings(Path(args.config), Path(args.schema))
        period_sec = args.period_sec
        if period_sec is None:
            period_sec = _env_override(PERIOD_ENV, float)
        port = args.port
        if port is None:
            port = _env_override(PORT_ENV, int)
    except (FileNotFoundError, ValueError, jsonschema.ValidationError) as exc:
        print(f"[BOOT][FAIL] {exc}", file=sys.stderr)
        return 1
    if period_sec is not None and period_sec <= 0:
        print(f"[BOOT][FAIL] {PERIOD_ENV} must be > 0", file=sys.stderr)
        return 1
    if port is not None and not 0 <= port <= 65535:
        print(f"[BOOT][FAIL] {PORT_ENV} must be between 0 and 65535", file=sys.stderr)
        return 1

    agent = Agent(
        settings=settings,
        period_sec=period_sec,
        status_enabled=args.status,
        status_port=port,
    )
    stop_event = threading.Event()
    _install_signal_handlers(stop_event)
    try:
        agent.run(stop_event)
    except OSError as exc:
        print(f"[BOOT][FAIL] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
