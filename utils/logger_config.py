import logging.config
import sys


def configure_logging(level: str = "INFO", error_file: str = "app_errors.log"):
    """ Console logging at level, errors also go to a rotating error_file"""
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,

        # Formatters: How the logs look
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
        },

        # Handlers: Where the logs go
        "handlers": {
            "console": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": sys.stdout,
            },
            "file": {
                "level": "ERROR",
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "standard",
                "filename": error_file,
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
            },
        },

        # Loggers: The configuration for specific modules
        "loggers": {
            "": {  # The "root" logger (captures everything)
                "handlers": ["console", "file"],
                "level": level,
                "propagate": True
            },
            "uvicorn.access": {
                "handlers": ["console"],
                "level": "WARNING",  # Set to INFO to see every request
                "propagate": False
            },
        }
    }

    logging.config.dictConfig(logging_config)
