"""structlog setup for orderbot.

Every module logs through ``structlog.get_logger(__name__)``; events end up
on one stderr handler, rendered for humans or as JSON lines (--log-json).
Application events stay at WARNING unless --verbose is given.
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "orderbot"

# Third-party loggers that would otherwise follow the app's verbosity.
_QUIET_LOGGERS = ("sqlalchemy",)


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging to a single stderr handler.

    Safe to call more than once; each call replaces the previous handler.

    Args:
        verbose: Show the app's DEBUG and INFO events.
        log_json: One JSON object per line instead of console output.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _render_chain(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        # JSON cannot carry an exc_info tuple; flatten it to a string first.
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]
