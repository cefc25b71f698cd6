from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping, cast

import structlog

from stay_with_friends.config import LOG_LEVEL

Processor = Callable[[Any, str, MutableMapping[str, Any]], Any]

# Invitation tokens grant account creation; they never reach a log line.
REDACTED_KEYS = frozenset({"token", "invitation_token", "invitation_url"})


def redact_secrets(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    for key in REDACTED_KEYS & event_dict.keys():
        event_dict[key] = "[redacted]"
    return event_dict


def setup_logging() -> None:
    """
    Configure stdlib logging and structlog for the service.

    LOG_LEVEL=INFO renders one JSON object per line for aggregation; any other
    level renders colored console output. Request ids bound by
    RequestIDMiddleware are merged into every event.
    """
    logging.basicConfig(
        format="[%(asctime)s] %(levelname)s in %(name)s:%(lineno)d: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        level=LOG_LEVEL,
    )

    # SQL echo and per-request access lines only at DEBUG
    quiet_level = logging.DEBUG if LOG_LEVEL == "DEBUG" else logging.WARNING
    for name in ("sqlalchemy.engine", "uvicorn.access", "alembic.runtime.migration"):
        logging.getLogger(name).setLevel(quiet_level)

    renderer = cast(
        Processor,
        (
            structlog.processors.JSONRenderer()
            if LOG_LEVEL == "INFO"
            else structlog.dev.ConsoleRenderer(colors=True)
        ),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            redact_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(LOG_LEVEL)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
