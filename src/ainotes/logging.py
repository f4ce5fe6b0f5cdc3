import logging

import structlog

from ainotes.config import Config

# Client libraries that log every request or heartbeat at INFO/DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "LiteLLM", "pymongo")


def setup_logging(config: Config) -> None:
    """Route stdlib and structlog records to stderr.

    Debug mode renders colored console lines, otherwise one JSON object per line.
    """
    logging.basicConfig(level=logging.DEBUG if config.debug else logging.INFO, format="%(message)s")
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer: structlog.types.Processor = (
        structlog.dev.ConsoleRenderer() if config.debug else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
