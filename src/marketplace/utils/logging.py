"""Logging for the marketplace.

stdlib ``logging`` owns the handlers and structlog renders the events. Every
event carries the domain name plus whatever request context the API bound
(request id, acting user), so a withdrawal or a delivery can be traced
across the log lines it produced.

Environment:
    LOG_LEVEL   overrides the level derived from the environment name
    LOG_DIR     directory for rotating log files; empty disables file logging
    ENV / ENVIRONMENT / PROTEAN_ENV   environment name
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

DOMAIN_NAME = "marketplace"

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

# Environments that ship logs to an aggregator and want one JSON object per line
_JSON_ENVS = {"production", "staging"}

_MAX_BYTES = 10 * 1024 * 1024
_BACKUPS = 5


def current_env() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(current_env(), "INFO")).upper()


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(level: str, log_dir: str | None) -> None:
    """Route everything through the root logger: stdout plus optional files."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_rotating_file(log_path / f"{DOMAIN_NAME}.log", level))
        root_logger.addHandler(_rotating_file(log_path / f"{DOMAIN_NAME}_error.log", logging.ERROR))

    # Library chatter
    for noisy in ("urllib3", "asyncio", "protean", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _add_domain(logger, method_name, event_dict):
    event_dict.setdefault("domain", DOMAIN_NAME)
    return event_dict


def setup_structlog(json_output: bool) -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _add_domain,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors += [
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    """Configure logging once, from the environment."""
    setup_stdlib_logging(level=get_log_level(), log_dir=os.getenv("LOG_DIR", "logs"))
    setup_structlog(json_output=current_env() in _JSON_ENVS)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request(**kwargs: Any) -> None:
    """Attach request-scoped fields (request id, actor) to every later event."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**{key: value for key, value in kwargs.items() if value is not None})


def clear_request() -> None:
    structlog.contextvars.clear_contextvars()
