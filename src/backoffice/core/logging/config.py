"""structlog configuration shared by the API and the CLI."""

import logging

import structlog

from backoffice.config import settings


def configure_logging(json_logs: bool | None = None) -> None:
    """Configure structlog once for the process.

    Args:
        json_logs: Force JSON output. Defaults to JSON in production and the
            console renderer everywhere else.
    """
    if json_logs is None:
        json_logs = settings.is_production

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
