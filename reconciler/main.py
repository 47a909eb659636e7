"""Main entry point for the Company Opening Reconciler."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import os
import signal
import sys
import threading
import time
from pathlib import Path
from typing import Optional, Tuple

from reconciler.config.environment import EnvironmentConfig
from reconciler.config.exceptions import ConfigurationError
from reconciler.config.loader import load_config
from reconciler.config.models import AppConfig
from reconciler.logging import get_logger
from reconciler.logging.config import configure_logging
from reconciler.pipeline import PipelineRunResult, ReconciliationPipeline
from reconciler.scheduler import SchedulerService
from reconciler.utils.timestamps import format_iso_timestamp, utc_now

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > environment > config file.

    Args:
        config_path: Path to configuration file
        log_level_override: Log level from the CLI

    Returns:
        Tuple of (AppConfig, EnvironmentConfig); env_config.log_level is always set

    Raises:
        ConfigurationError: If configuration or credentials are invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def emit_result(result: PipelineRunResult, stream=None) -> None:
    """Write a run's report (or structured error) to stdout as JSON."""
    stream = stream or sys.stdout
    stream.write(json.dumps(result.to_dict(), indent=2))
    stream.write("\n")
    stream.flush()


def _configuration_error_payload(error: ConfigurationError) -> dict:
    return {
        "error": error.message,
        "error_type": "ConfigurationError",
        "details": error.errors,
        "timestamp": format_iso_timestamp(utc_now()),
    }


def run_daemon(pipeline: ReconciliationPipeline, interval_seconds: int) -> int:
    """Run reconciliations on a schedule until SIGINT/SIGTERM."""
    shutdown_event = threading.Event()

    scheduler_service = SchedulerService(
        run_callable=pipeline.run_once,
        interval_seconds=interval_seconds,
        shutdown_event=shutdown_event,
    )

    def signal_handler(signum, frame):
        logger.info(
            f"Received signal {signum}, shutting down",
            extra={"event": "service.signal_received", "signal": signum},
        )
        scheduler_service.shutdown(wait=False)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    scheduler_service.start()
    logger.info(
        "Scheduler started. Press Ctrl+C to stop",
        extra={"event": "service.daemon_mode.started"},
    )

    try:
        shutdown_event.wait()
    except KeyboardInterrupt:
        logger.info(
            "Keyboard interrupt received, shutting down",
            extra={"event": "service.keyboard_interrupt"},
        )
        scheduler_service.shutdown(wait=False)

    return 0


def main(argv=None) -> int:
    """
    Main entry point for the Company Opening Reconciler.

    Returns:
        Exit code: 0 when the run (or daemon) completed, 1 on an aborted run
        or a configuration error
    """
    start_time = time.time()
    parser = argparse.ArgumentParser(
        description=(
            "Company Opening Reconciler - flags reference companies that "
            "currently have job postings"
        )
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--manual-run",
        action="store_true",
        help="Run one reconciliation, print the JSON report and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    args = parser.parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        environment = os.environ.get("ENVIRONMENT", "local")
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=environment,
        )

        logger.info(
            "Company Opening Reconciler starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "manual_run": args.manual_run,
                "query_count": len(app_config.search_queries),
                "scan_interval_seconds": app_config.scan_interval_seconds,
            },
        )

        pipeline = ReconciliationPipeline(app_config=app_config, env_config=env_config)

        if args.manual_run:
            result = pipeline.run_once()
            emit_result(result)

            logger.info(
                "Company Opening Reconciler stopped",
                extra={
                    "event": "service.stopping",
                    "succeeded": result.succeeded,
                    "had_errors": result.had_errors,
                    "uptime_seconds": round(time.time() - start_time, 2),
                },
            )
            return 0 if result.succeeded else 1

        exit_code = run_daemon(pipeline, app_config.scan_interval_seconds)
        logger.info(
            "Company Opening Reconciler stopped",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return exit_code

    except ConfigurationError as e:
        print(json.dumps(_configuration_error_payload(e), indent=2))
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during startup",
            extra={
                "event": "service.startup.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
