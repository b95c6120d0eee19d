# src/sinkadmin/core/logging.py
"""Logging for the sink admin client.

Every sinkadmin module logs through get_logger(), which tags events with
``client="sinkadmin"`` so they can be picked out of an application's
stream. Nothing is configured on import; an application calls
configure_logging() once, or sets ``logging.configure`` in the settings
and lets SinkAdmin.from_settings do it.

Once configured, structlog events and stdlib records (httpx, httpcore,
the application's own loggers) share one ProcessorFormatter on stderr.
Credentials are masked before rendering: values under keys such as
``authorization`` or ``auth_token``, at any depth, and bearer/basic
credentials inside strings.
"""

import logging
import re
import sys
from collections.abc import Mapping
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter
from structlog.typing import EventDict, WrappedLogger

REDACTED = "**********"

_SECRET_KEYS = frozenset({"authorization", "proxy-authorization", "auth_token", "token", "password"})

_CREDENTIAL_PATTERN = re.compile(r"\b(Bearer|Basic)\s+[^\s\"',;]+", re.IGNORECASE)

# Log connection and header detail at DEBUG
_HTTP_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "asyncio")


def _redact(value: Any) -> Any:
    if isinstance(value, str):
        return _CREDENTIAL_PATTERN.sub(lambda m: f"{m.group(1)} {REDACTED}", value)
    if isinstance(value, Mapping):
        return {k: REDACTED if str(k).lower() in _SECRET_KEYS else _redact(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_redact(item) for item in value]
    return value


def redact_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credentials anywhere in the event, including nested header maps."""
    for key in list(event_dict):
        if key.startswith("_"):
            continue
        if key.lower() in _SECRET_KEYS:
            event_dict[key] = REDACTED
        else:
            event_dict[key] = _redact(event_dict[key])
    return event_dict


def configure_logging(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route structlog and stdlib logging to stderr through one renderer.

    Replaces the root logger's handlers. The HTTP stack's loggers are held
    at WARNING, or at ``level`` when that is stricter.

    Args:
        json_output: One JSON object per line instead of console output
        level: Root log level name, any case
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"unknown log level: {level!r}")

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_secrets,
    ]

    render_chain: list[Any] = [ProcessorFormatter.remove_processors_meta]
    if json_output:
        render_chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        render_chain.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers must pick up a later reconfiguration
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=render_chain,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Logger for a sinkadmin module.

    The logger stays lazy, so it follows whatever configuration is active
    when it first emits.

    Args:
        name: Module name (``__name__``)
        **context: Extra key/values bound to every event
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name, client="sinkadmin", **context)
    return logger
