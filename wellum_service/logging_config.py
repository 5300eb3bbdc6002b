"""structlog setup shared by application code and third-party stdlib loggers.

Both go through one stdout handler with a ``ProcessorFormatter``, so uvicorn,
SQLAlchemy and alembic records get the same service/env/correlation fields
and renderer as ``structlog.get_logger()`` events.
"""

import logging
import sys

import sentry_sdk
import structlog
from asgi_correlation_id.context import correlation_id
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from structlog.contextvars import merge_contextvars

from .config import Settings, get_settings

# Chatty at INFO; kept at WARNING unless LOG_LEVEL is stricter
QUIET_LOGGERS = ("aiosqlite", "sqlalchemy.engine", "alembic.runtime.migration")


def _stamp_service(settings: Settings):
    service, env = settings.SERVICE_NAME, settings.APP_ENV

    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", service)
        event_dict.setdefault("env", env)
        return event_dict

    return processor


def _add_correlation_id(logger, method_name, event_dict):
    cid = correlation_id.get(None)
    if cid is None:
        return event_dict
    event_dict["correlation_id"] = cid
    if sentry_sdk.get_client().is_active():
        sentry_sdk.set_tag("correlation_id", cid)
    return event_dict


def init_sentry(settings: Settings) -> bool:
    if not settings.SENTRY_DSN:
        return False
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.APP_ENV,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=False,
    )
    sentry_sdk.set_tag("service", settings.SERVICE_NAME)
    return True


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    init_sentry(settings)

    shared_processors = [
        merge_contextvars,
        _stamp_service(settings),
        _add_correlation_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if settings.is_dev:
        render = [structlog.dev.ConsoleRenderer()]
    else:
        render = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *render],
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
