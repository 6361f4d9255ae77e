import logging.config
import sys

from .config import LOG_LEVEL


def configure_logging(level: str | None = None):
    level = (level or LOG_LEVEL).upper()
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,

        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
        },

        # stdout is the game screen
        "handlers": {
            "console": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": sys.stderr,
            },
        },

        "loggers": {
            "torque": {
                "handlers": ["console"],
                "level": level,
                "propagate": False
            },
        }
    }

    logging.config.dictConfig(logging_config)
