"""Log setup for the club API.

The entries worth watching in production are the storefront ones:
``checkout_session_created``, ``stripe_webhook_received``, ``inventory_decremented``,
``checkout_fulfilment_failed`` and ``email_send_failed``. Each carries the
request's X-Request-ID as ``correlation_id`` and ``service="club-api"``, so a
webhook delivery can be followed from signature check to receipt e-mail.

Stripe, boto3 and aiosmtplib log their own request traffic through stdlib
logging; those records go through the same formatter but are held at WARNING.
"""

import logging
import logging.config

import structlog
from asgi_correlation_id.context import correlation_id

SERVICE_NAME = "club-api"

# SDK chatter (per-request HTTP lines, SMTP dialogue, SQL echo) held back.
NOISY_LOGGERS: dict[str, str] = {
    "uvicorn.access": "WARNING",
    "httpx": "WARNING",
    "stripe": "WARNING",
    "botocore": "WARNING",
    "aiosmtplib": "WARNING",
    "sqlalchemy.engine": "WARNING",
}


def add_correlation_id(logger, method, event_dict):
    cid = correlation_id.get(None)
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def add_service_name(logger, method, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_structlog(log_level: str = "INFO", json_logs: bool = True) -> None:
    """Route club API and SDK logs to stdout.

    Called from ``club_api.main`` ahead of the route imports; module-level
    loggers bind their processor chain the first time they emit.

    Args:
        log_level: Level for the club API's own loggers ("DEBUG" in debug mode)
        json_logs: One JSON object per line for the log shipper; console
            rendering when False
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_correlation_id,
        add_service_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        render_chain = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        render_chain = [structlog.dev.ConsoleRenderer()]

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    *render_chain,
                ],
                "foreign_pre_chain": shared_processors,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["stdout"], "level": log_level},
        "loggers": {name: {"level": level} for name, level in NOISY_LOGGERS.items()},
    })

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
