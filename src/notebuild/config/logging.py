"""structlog setup for the notebuild CLI.

stdout carries command results, so every log line goes to stderr, either
as console text or as JSON lines (``--log-json``). Events from the
``notebuild`` logger tree are tagged ``notes-build: <event>``; stdlib
``logging`` calls get the same treatment through ``foreign_pre_chain``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog
from structlog.types import Processor

LOGGER_NAME = "notebuild"
EVENT_PREFIX = "notes-build"

_HANDLER_NAME = "notebuild-stderr"


def _prefix_event(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    event = event_dict.get("event")
    name = event_dict.get("logger", "")
    if isinstance(event, str) and (name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}.")):
        event_dict["event"] = f"{EVENT_PREFIX}: {event}"
    return event_dict


def _pre_chain() -> list[Processor]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _prefix_event,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _stderr_handler(log_json: bool) -> logging.Handler:
    renderer: Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> logging.Logger:
    """Route ``notebuild`` logs to stderr and return the configured logger.

    Only WARNING and above are shown unless *verbose*. Calling this again
    replaces the previous handler, so per-invocation flags take effect.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    app_logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in app_logger.handlers if h.get_name() == _HANDLER_NAME]:
        app_logger.removeHandler(handler)
    app_logger.addHandler(_stderr_handler(log_json))
    app_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    app_logger.propagate = False
    return app_logger
