# museum_inventory/core/logging.py

import os
import sys
from logging.config import dictConfig
from museum_inventory.core.config import APP_ENV
from museum_inventory.utils.logger import ROOT_LOGGER_NAME

LOG_LEVEL = os.getenv("LOG_LEVEL") or ("DEBUG" if APP_ENV == "development" else "INFO")


def setup_logging(level: str = LOG_LEVEL):
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,

            # -----------------
            # FORMATTERS
            # -----------------
            "formatters": {
                "default": {
                    "format": (
                        "%(asctime)s | %(levelname)s | "
                        "%(name)s | %(message)s"
                    ),
                },
                "access": {
                    "format": (
                        "%(asctime)s | ACCESS | "
                        "%(client_addr)s | %(method)s | "
                        "%(path)s | %(status_code)s | "
                        "%(process_time_ms)sms"
                    ),
                },
            },

            # -----------------
            # HANDLERS
            # -----------------
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "default",
                },
                "access_console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "access",
                },
            },

            # -----------------
            # LOGGERS
            # -----------------
            "loggers": {
                ROOT_LOGGER_NAME: {
                    "level": level,
                },
                # request_logging_middleware writes here
                "access": {
                    "handlers": ["access_console"],
                    "level": "INFO",
                    "propagate": False,
                },
                "sqlalchemy.engine": {
                    "level": "WARNING",
                },
            },

            # -----------------
            # ROOT LOGGER
            # -----------------
            "root": {
                "level": "INFO",
                "handlers": ["console"],
            },
        }
    )
