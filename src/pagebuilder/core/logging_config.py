"""
Structured Logging
structlog on top of the standard logging module.

Builder code logs snake_case events with keyword fields. The page and node
being edited are bound once per operation through ``LogContext`` and show up
on every event logged inside it, including events from the tree, storage and
rendering layers.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, Optional

import structlog
from pythonjsonlogger import jsonlogger

if TYPE_CHECKING:
    from .config import Settings

# Fields moved to the front of console output so edits are easy to follow
CONTEXT_KEYS = ("page_id", "node_id")


def _context_first(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    leading = {key: event_dict.pop(key) for key in CONTEXT_KEYS if key in event_dict}
    return {**leading, **event_dict} if leading else event_dict


def _handler(json_logs: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s"))
    return handler


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structured logging for the builder.

    Args:
        level: Log level name; unknown names fall back to INFO
        json_logs: Emit one JSON object per event instead of console lines
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[_handler(json_logs)],
        force=True,
    )

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _context_first,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: Optional["Settings"] = None) -> None:
    """Configure logging from ``log_level`` and ``json_logs`` of the settings."""
    if settings is None:
        from .config import get_settings

        settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


class LogContext:
    """
    Bind fields (e.g. page_id, node_id) to every event logged in scope.

    Nested contexts restore the outer values on exit.
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self._bound: Any = None

    def __enter__(self) -> "LogContext":
        self._bound = structlog.contextvars.bound_contextvars(**self.context)
        self._bound.__enter__()
        return self

    def __exit__(self, *args: Any) -> None:
        self._bound.__exit__(*args)
