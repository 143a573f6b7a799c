import logging
import logging.config

from hyperlink.config import get_settings

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(level: str, debug: bool = False) -> str:
    """Map a configured level name to a logging level, DEBUG wins when debug is on."""
    if debug:
        return "DEBUG"
    normalized = (level or "").strip().upper()
    if normalized == "WARN":
        normalized = "WARNING"
    if normalized not in _LOG_LEVELS:
        return "INFO"
    return normalized


def setup_logging():
    """
    Configure global log format
    All loggers, uvicorn included, write to stdout through the root handler.
    """
    settings = get_settings()
    log_level = resolve_log_level(settings.LOG_LEVEL, settings.DEBUG)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"handlers": ["console"], "level": "INFO"},
            "loggers": {
                "hyperlink": {"level": log_level},
            },
        }
    )

    if (settings.LOG_LEVEL or "").strip().upper() not in _LOG_LEVELS + ("WARN",):
        logging.getLogger("hyperlink").error(
            f"Unknown log level {settings.LOG_LEVEL}, defaulting to INFO"
        )
