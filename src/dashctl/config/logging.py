"""structlog configuration for dashctl.

Store recoveries, self-heals and writes are logged through stdlib loggers
under ``dashctl.*``; telemetry spans log through structlog directly. Both
end up in one stderr handler:

- Human (default): colored console lines when stderr is a terminal
- JSON (--log-json): one JSON object per line, for log shippers

Every event carries a ``component`` field (``store``, ``service``,
``cli``, ...) derived from the logger name, so JSON output can be
filtered without parsing logger paths.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog

# Third-party loggers that stay at WARNING even with --verbose.
_QUIET_LOGGERS = ("asyncio",)

_COMPONENTS = {
    "dashctl.infrastructure": "store",
    "dashctl.services": "service",
    "dashctl.commands": "cli",
    "dashctl.telemetry": "telemetry",
}


def _add_component(
    _logger: Any, _method: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    name = str(event_dict.get("logger", ""))
    for prefix, component in _COMPONENTS.items():
        if name.startswith(prefix):
            event_dict.setdefault("component", component)
            break
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Route all dashctl logging to one handler. Safe to call repeatedly.

    Args:
        verbose: DEBUG for ``dashctl.*`` loggers; WARNING otherwise.
        log_json: JSON lines instead of console lines.
        stream: Destination, defaults to the current ``sys.stderr``.
    """
    stream = stream or sys.stderr

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_component,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("dashctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
