import logging
import logging.config

from pythonjsonlogger.json import JsonFormatter

JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s %(module)s %(lineno)d %(process)d"


def init_logging(level: str = "INFO") -> None:
    """
    Send every record, uvicorn's included, through one JSON console handler.

    uvicorn's own access log is silenced because log_requests in main.py
    already writes one record per request with its status and duration.
    """
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JsonFormatter,
                "fmt": JSON_FIELDS,
                "rename_fields": {"levelname": "level", "name": "logger"},
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "level": level,
            }
        },
        "loggers": {
            "uvicorn": {"handlers": ["console"], "level": level, "propagate": False},
            "uvicorn.error": {"level": level},
            "uvicorn.access": {"handlers": [], "level": "WARNING", "propagate": False},
        },
        "root": {
            "handlers": ["console"],
            "level": level
        }
    }

    logging.config.dictConfig(logging_config)
