"""
Structured logging for versioncheck.

Console output goes to stderr so stdout stays reserved for reports; a daily
file is written only when a log directory is configured. The logger also
counts runtime lookups per source for the --metrics summary.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=DATE_FORMAT))
    return handler


class StructuredLogger:
    """
    Logger with keyword context and per-source lookup counters.

    metrics maps a source name to its raw counters:
    {"attempts": int, "successes": int, "failures": int, "errors": {type: int}}
    """

    def __init__(
        self,
        name: str = "versioncheck",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for the daily log file (default: logs/)
            enable_file: Write logs to file
            enable_console: Write logs to stderr
        """
        level_no = getattr(logging, level.upper())
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level_no)
        self.logger.handlers.clear()
        self.metrics: Dict[str, dict] = {}

        if enable_console:
            self.logger.addHandler(_handler(logging.StreamHandler(sys.stderr), level_no, CONSOLE_FORMAT))

        if enable_file:
            log_dir = log_dir or Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / f"versioncheck_{datetime.now().strftime('%Y%m%d')}.log"
            # File gets everything regardless of console level
            self.logger.addHandler(
                _handler(logging.FileHandler(log_file, encoding='utf-8'), logging.DEBUG, FILE_FORMAT)
            )

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context):
        """Log a warning; keyword context is appended as JSON."""
        self._log(logging.WARNING, message, context)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    def _source(self, source: str) -> dict:
        return self.metrics.setdefault(
            source, {"attempts": 0, "successes": 0, "failures": 0, "errors": {}}
        )

    def record_lookup_attempt(self, source: str):
        """Count a runtime lookup against a source."""
        self._source(source)["attempts"] += 1

    def record_lookup_success(self, source: str):
        """Count a lookup that resolved an identity."""
        self._source(source)["successes"] += 1

    def record_lookup_failure(self, source: str, error_type: str):
        """Count a failed lookup under its source and error type."""
        stats = self._source(source)
        stats["failures"] += 1
        stats["errors"][error_type] = stats["errors"].get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """
        Snapshot of the counters with totals and success rates.

        Builds new dicts; the live counters are never modified.
        """
        sources = {}
        errors_by_type: Dict[str, int] = {}
        for source, stats in self.metrics.items():
            attempts = stats["attempts"]
            sources[source] = {
                "attempts": attempts,
                "successes": stats["successes"],
                "failures": stats["failures"],
                "errors": dict(stats["errors"]),
                "success_rate": round(stats["successes"] / attempts, 3) if attempts else 0.0,
            }
            for error_type, count in stats["errors"].items():
                errors_by_type[error_type] = errors_by_type.get(error_type, 0) + count

        return {
            "lookups_attempted": sum(s["attempts"] for s in sources.values()),
            "lookups_successful": sum(s["successes"] for s in sources.values()),
            "lookups_failed": sum(s["failures"] for s in sources.values()),
            "errors_by_type": errors_by_type,
            "sources": sources,
        }

    def log_metrics_summary(self):
        metrics = self.get_metrics()
        attempted = metrics["lookups_attempted"]
        successful = metrics["lookups_successful"]
        overall = round(successful / attempted * 100, 1) if attempted else 0

        self.info("=== Version Check Metrics ===")
        self.info(f"Lookups: {successful}/{attempted} ({overall}% success)")
        for source, stats in metrics["sources"].items():
            line = f"  {source}: {stats['successes']}/{stats['attempts']} ({stats['success_rate'] * 100:.1f}%)"
            if stats["errors"]:
                line += " " + ", ".join(f"{name}: {count}" for name, count in stats["errors"].items())
            self.info(line)


_global_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "versioncheck", level: str = "INFO", **kwargs) -> StructuredLogger:
    """
    Get or create the process-wide logger.

    Arguments only apply when the logger is first created; call
    reset_logger() to reconfigure.
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Drop the process-wide logger (the next get_logger() builds a new one)."""
    global _global_logger
    _global_logger = None
