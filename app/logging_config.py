import logging.config
import sys

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,

    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
            "json_ensure_ascii": False,
        },
    },

    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": sys.stdout,
        },
    },

    "loggers": {
        "paystack_verify": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },

    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}


def configure_logging(level="INFO"):
    """
    Configure JSON logging to stdout for the application loggers.

    Args:
        level (str): Level for the ``paystack_verify`` logger tree.
    """
    config = dict(LOGGING_CONFIG)
    config["loggers"] = {
        "paystack_verify": dict(LOGGING_CONFIG["loggers"]["paystack_verify"], level=level),
    }
    logging.config.dictConfig(config)
    return logging.getLogger("paystack_verify")
