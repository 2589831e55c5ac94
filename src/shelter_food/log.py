import logging
import os
import sys

import structlog

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_level(level: str | None = None) -> str:
    """Pick the log level from the argument or ``SHELTER_FOOD_LOG_LEVEL``.

    Raises ``ValueError`` for names stdlib logging does not know.
    """
    level_name = (level or os.environ.get("SHELTER_FOOD_LOG_LEVEL") or "WARNING").strip().upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level_name!r}; choose one of {', '.join(LOG_LEVELS)}")
    return level_name


def configure_logging(level: str | None = None) -> None:
    """Route structlog through stdlib logging on stderr.

    Stdout stays reserved for command output. ``SHELTER_FOOD_LOG_JSON=1``
    switches to JSON lines.
    """
    level_name = resolve_level(level)
    logging.basicConfig(stream=sys.stderr, level=level_name, format="%(message)s")
    logging.getLogger("shelter_food").setLevel(level_name)

    json_logs = os.environ.get("SHELTER_FOOD_LOG_JSON", "").lower() in {"1", "true", "yes"}
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
