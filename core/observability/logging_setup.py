"""Book store logging setup.

Application logging goes through loguru:
- configure_logging() installs the console/file sinks and routes stdlib
  logging (uvicorn, SQLAlchemy) into loguru; called once by the entry point
- LoggerService is the info/warn/error sink handed to controllers
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from loguru import logger

from core.config import Settings

_PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # request logging middleware already covers access logs
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging(settings: Settings) -> None:
    """Reset loguru and install sinks for the given settings."""
    cfg = settings.logging
    verbose_tracebacks = not settings.is_production

    logger.remove()
    logger.configure(extra={"request_id": "-"})

    logger.add(
        sys.stderr,
        level=cfg.level,
        format=_PLAIN_FORMAT,
        colorize=True,
        backtrace=verbose_tracebacks,
        diagnose=verbose_tracebacks,
    )

    if cfg.file:
        path = Path(cfg.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        is_json = cfg.format == "json"
        logger.add(
            str(path),
            level=cfg.level,
            format="{message}" if is_json else _PLAIN_FORMAT,
            serialize=is_json,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=verbose_tracebacks,
            diagnose=verbose_tracebacks,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)

    logger.info(
        "Logging configured (level={}, file={}, environment={})",
        cfg.level,
        cfg.file,
        settings.environment,
    )


class LoggerService:
    """Info/warning/error sink used by controllers.

    Wraps a bound loguru logger so callers never touch the global one
    directly; tests can pass ``bind`` values to tell services apart.
    """

    def __init__(self, **bind):
        self._logger = logger.bind(**bind)

    def log_info(self, message: str) -> None:
        self._logger.opt(depth=1).info(message)

    def log_warn(self, message: str) -> None:
        self._logger.opt(depth=1).warning(message)

    def log_error(self, message: str) -> None:
        self._logger.opt(depth=1).error(message)
