"""structlog setup for the analysis core and the calling layer around it.

Library code only asks for loggers via ``get_logger``; applications call
``setup_logging`` once at startup (typically with ``AppSettings.log_level``
and ``AppSettings.log_format``).
"""

import logging
from contextlib import AbstractContextManager

import structlog

_RENDERERS = {
    "json": structlog.processors.JSONRenderer,
    "console": structlog.dev.ConsoleRenderer,
}


def _pre_chain() -> list[structlog.types.Processor]:
    # Applied to structlog events before they reach the stdlib handler.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def setup_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Route structlog through one root stream handler.

    Unknown formats fall back to console output; unknown levels to INFO.
    Calling it again replaces the previous handler.
    """
    renderer_cls = _RENDERERS.get(log_format.lower(), structlog.dev.ConsoleRenderer)

    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer_cls(),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def symbol_context(symbol: str) -> AbstractContextManager[None]:
    """Bind ``symbol`` to every event logged inside the block.

    contextvars-backed, so concurrent analyses of different symbols do not
    see each other's binding.
    """
    return structlog.contextvars.bound_contextvars(symbol=symbol)
