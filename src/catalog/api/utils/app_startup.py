"""Process-wide logging setup shared by the web app and the CLI."""

import logging
import sys
from pathlib import Path

from loguru import logger

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# stdlib loggers that are too chatty at the application level
_QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.CRITICAL,
}


class StdlibInterceptHandler(logging.Handler):
    """Forward records from the ``logging`` module into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Requests are already logged by the HTTP middleware
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _with_request_id(record) -> None:
    record["extra"].setdefault("request_id", "-")


def _add_file_sink(path: Path, config: ConfigData, verbose_errors: bool) -> None:
    cfg = config.logging
    as_json = cfg.format == "json"
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(path),
        level=cfg.level,
        format="{message}" if as_json else PLAIN_FORMAT,
        serialize=as_json,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=verbose_errors,
        diagnose=verbose_errors,
    )


def _route_stdlib_logging() -> None:
    logging.basicConfig(handlers=[StdlibInterceptHandler()], level=0, force=True)

    for name in list(logging.root.manager.loggerDict):
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = []
        stdlib_logger.propagate = True

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


def configure_logging(config: ConfigData | None = None) -> None:
    """Replace loguru's default sink with the configured console and file sinks.

    Every record carries a ``request_id`` extra, ``-`` outside of a request.
    Tracebacks include local variables except in production.
    """
    config = config or get_config()
    verbose_errors = config.app.environment != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"}, patcher=_with_request_id)
    logger.add(
        sys.stderr,
        level=config.logging.level,
        format=PLAIN_FORMAT,
        colorize=True,
        backtrace=verbose_errors,
        diagnose=verbose_errors,
    )
    if config.logging.file:
        _add_file_sink(Path(config.logging.file), config, verbose_errors)

    _route_stdlib_logging()

    logger.bind(
        level=config.logging.level,
        file=config.logging.file,
        environment=config.app.environment,
    ).info("Logging configured")
