"""
Structured logging for the Pincast Expo service.

Every record carries the service name and deployment environment so that
catalog, review and ingest logs from several replicas can be told apart.
Request-scoped fields (request_id, listing_id, user_id) are bound through
contextvars by the request middleware and the use cases.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog

if TYPE_CHECKING:
    from pincast_expo.infra.config.settings import Settings

# Third-party loggers that are chatty at INFO; pinned to WARNING unless the
# service itself runs at DEBUG.
NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "aiosqlite")


def _service_fields(service: str, environment: str):
    def add_service(_logger: Any, _method: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        event_dict.setdefault("service", service)
        event_dict.setdefault("env", environment)
        return event_dict

    return add_service


def _quiet_third_party(level: int, echo_sql: bool) -> None:
    floor = level if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(floor)
    # SQLAlchemy echoes through its own logger when DATABASE_ECHO is on
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if echo_sql else logging.WARNING
    )


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    settings: Optional["Settings"] = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Level name such as "INFO". Falls back to LOG_LEVEL.
        log_format: "json" for production, "console" for local runs.
            Falls back to LOG_FORMAT.
        settings: Settings of the app being configured; the cached
            process settings are used when omitted.
    """
    from pincast_expo.infra.config.settings import get_settings

    settings = settings or get_settings()
    level = logging.getLevelName((log_level or settings.log_level).upper())
    if not isinstance(level, int):
        level = logging.INFO
    render_json = (log_format or settings.log_format).lower() == "json"

    logging.basicConfig(level=level, format="%(message)s")
    _quiet_third_party(level, settings.debug_sql)

    processors = [
        structlog.contextvars.merge_contextvars,
        _service_fields(settings.app_name, settings.environment),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if render_json:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=settings.debug))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None):
    """Return a structlog logger, named after the component when given."""
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
