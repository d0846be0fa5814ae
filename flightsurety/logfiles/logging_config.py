"""logging module config."""
import logging

LEVEL_COLORS = [
    "\033[0m",  # No Set
    "\033[36m",  # Debug
    "\033[34m",  # Info
    "\033[33m",  # Warning
    "\033[31m",  # Error
    "\033[1;31m",  # Critical
]

LOG_FORMAT = (
    "%(level_color)s[%(name)s:%(levelname)s]%(end_color)s [%(asctime)s] %(message)s"
)


def get_log_config(logging_section):
    """get log_config."""
    logging_section = logging_section or {}
    log_level = getattr(logging, logging_section.get("verbosity", "INFO"), logging.INFO)
    formatter = "json" if logging_section.get("json") else "standard"

    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            },
            "json": {
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
                "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
            },
        },
        "handlers": {
            "standard": {"class": "logging.StreamHandler", "formatter": formatter}
        },
        "loggers": {
            "": {"handlers": ["standard"], "level": log_level},
            "web3": {"level": max(log_level, logging.INFO)},
        },
    }

    return log_config
