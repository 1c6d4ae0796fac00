"""
Structured logging for the investor screener.

structlog is configured once per process. Console rendering is the default;
the HTTP service switches to JSON with LOG_JSON=true.

Log entries inside a screening run carry the run id, client name and the
investor being screened, taken from context variables set by
``logging_context``. Stage timings from ``PipelineTimer`` are flattened into
``<stage>_ms`` fields so each result log line is self-contained.
"""

import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generator

import structlog
from structlog.types import Processor

from .config import config

# Context fields, in the order they appear on log entries
_CONTEXT: dict[str, ContextVar[str | None]] = {
    'run_id': ContextVar('run_id', default=None),
    'client_name': ContextVar('client_name', default=None),
    'investor': ContextVar('investor', default=None),
}

# Libraries that log every request at INFO
_NOISY_LOGGERS = ('httpx', 'httpcore', 'openai')


def get_run_id() -> str | None:
    return _CONTEXT['run_id'].get()


def get_client_name() -> str | None:
    return _CONTEXT['client_name'].get()


def get_investor() -> str | None:
    """Name of the investor currently being screened, if any."""
    return _CONTEXT['investor'].get()


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor copying the screening context onto each entry."""
    for name, var in _CONTEXT.items():
        value = var.get()
        if value:
            event_dict[name] = value
    return event_dict


def configure_logging(
    json_output: bool = False,
    log_level: str | None = None,
) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        json_output: Render JSON lines (production) instead of the
            colored console format
        log_level: Level name; defaults to config.LOG_LEVEL
    """
    level = log_level or config.LOG_LEVEL
    level_num = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stdout,
        level=level_num,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level_num, logging.WARNING))

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_context_info,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Structured logger, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    run_id: str | None = None,
    client_name: str | None = None,
    investor: str | None = None,
) -> Generator[None, None, None]:
    """
    Scope screening context for every log entry emitted inside the block.

    Only the fields passed are changed; nested blocks add to the outer
    context and the previous values come back on exit.

    Usage:
        with logging_context(run_id=run_id, client_name='Acme Robotics'):
            with logging_context(investor='Northwind Ventures'):
                logger.info('screen.investor_complete')
    """
    updates = {'run_id': run_id, 'client_name': client_name, 'investor': investor}
    previous = {name: var.get() for name, var in _CONTEXT.items()}

    try:
        for name, value in updates.items():
            if value is not None:
                _CONTEXT[name].set(value)
        yield
    finally:
        for name, value in previous.items():
            _CONTEXT[name].set(value)


class PipelineTimer:
    """
    Wall-clock timings for the stages of one investor's screening.

    Usage:
        timer = PipelineTimer()
        with timer.stage('fetch'):
            ...
        with timer.stage('pass_one'):
            ...
        logger.info('screen.investor_complete', **timer.summary())
    """

    def __init__(self):
        self.stages: dict[str, float] = {}
        self.start_time: float = time.perf_counter()

    @contextmanager
    def stage(self, name: str) -> Generator[None, None, None]:
        """Time a block; the duration is kept even if the block raises."""
        started = time.perf_counter()
        try:
            yield
        finally:
            self.stages[name] = (time.perf_counter() - started) * 1000

    @property
    def total_ms(self) -> float:
        """Milliseconds since the timer was created."""
        return (time.perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, float]:
        """Flat timing fields: ``total_ms`` plus ``<stage>_ms`` per stage."""
        fields = {f'{name}_ms': round(ms, 2) for name, ms in self.stages.items()}
        fields['total_ms'] = round(self.total_ms, 2)
        return fields


# Console logging until the service configures its own format
configure_logging(json_output=False)
