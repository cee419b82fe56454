"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Iterable

import structlog

_LOGGING_INITIALISED = False
LOGGER_NAME = "dex_catalog"


def _file_handlers(log_dir: Path) -> dict[str, dict[str, Any]]:
    log_dir.mkdir(parents=True, exist_ok=True)
    catalog_log = log_dir / "catalog.log"
    error_log = log_dir / "error.log"
    catalog_log.touch(exist_ok=True)
    error_log.touch(exist_ok=True)
    return {
        "catalog_file": {
            "class": "logging.FileHandler",
            "level": "INFO",
            "filename": str(catalog_log),
            "formatter": "plain",
            "encoding": "utf-8",
        },
        "error_file": {
            "class": "logging.FileHandler",
            "level": "ERROR",
            "filename": str(error_log),
            "formatter": "plain",
            "encoding": "utf-8",
        },
    }


def configure_logging(verbose: bool = False, log_dir: Path | None = None) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return application logger.

    Only the first call installs handlers; later calls just hand back the
    bound logger so library code can call this freely.
    """

    global _LOGGING_INITIALISED
    if not _LOGGING_INITIALISED:
        level = "DEBUG" if verbose else "INFO"
        handlers: dict[str, dict[str, Any]] = {
            "console": {
                "class": "logging.StreamHandler",
                "level": level if verbose else "WARNING",
                "formatter": "plain",
            },
        }
        if log_dir is not None:
            handlers.update(_file_handlers(log_dir))
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "plain": {
                        "()": "pythonjsonlogger.json.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                    }
                },
                "handlers": handlers,
                "loggers": {
                    LOGGER_NAME: {
                        "handlers": list(handlers),
                        "level": level,
                        "propagate": False,
                    },
                },
            }
        )

        # Forward structlog events to stdlib; JSON rendering happens in the handler formatter
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger(LOGGER_NAME)


def get_logger(component: str) -> structlog.BoundLogger:
    """Return a logger namespaced under the application logger."""

    return structlog.get_logger(f"{LOGGER_NAME}.{component}")


def tail_log(path: Path, line_count: int = 100) -> list[str]:
    """Return the last N lines from a log file."""

    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="ignore") as stream:
        lines = stream.readlines()
    return lines[-line_count:]


def available_logs(log_dir: Path) -> Iterable[Path]:
    """Yield available log file paths."""

    if not log_dir.exists():
        return []
    return sorted(p for p in log_dir.glob("*.log"))


__all__ = ["available_logs", "configure_logging", "get_logger", "tail_log"]
