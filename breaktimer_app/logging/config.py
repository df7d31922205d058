"""
Logging setup for the break timer.

Every module logs through structlog on top of the stdlib ``logging`` module.
Call ``configure_logging`` once at process start, typically with the
``LoggingParams`` section of the loaded configuration.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger, Processor


def _build_processors(format_json: bool, include_timestamp: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog for the whole process.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: Render JSON lines instead of console output
        include_timestamp: Prefix records with an ISO timestamp
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=_build_processors(format_json, include_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a structlog logger; ``name`` is usually ``__name__``."""
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """Logger for timer state transitions, tagged for the audit trail."""
    return get_logger(name).bind(subsystem="timer_engine", audit_trail=True)


def log_state_transition(
    logger: FilteringBoundLogger,
    session_id: Optional[int],
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a timer state transition in the standard shape.

    Args:
        logger: Structlog logger instance
        session_id: Start timestamp identifying the session (None when stopped)
        from_state: State before the transition
        to_state: State after the transition
        trigger: What caused it (start, stop, tick, resume)
        context: Extra fields such as the work duration
    """
    bound = logger.bind(
        session_id=session_id,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )
    if context:
        bound = bound.bind(context=context)

    bound.info("State transition")
