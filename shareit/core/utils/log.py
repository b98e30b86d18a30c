import logging
import logging.config
import queue
from enum import Enum
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Any

import uvicorn

from shareit.core.utils.config import Settings

DATE_FORMAT = "%d-%b-%y %H:%M:%S"


class ColoredConsoleFormatter(uvicorn.logging.DefaultFormatter):
    """
    Console formatter of both tiers, the level is written in bold and the message in the color of its level
    """

    class ConsoleColors(str, Enum):
        """See https://talyian.github.io/ansicolors/"""

        DEBUG = "\033[38;5;12m"
        INFO = "\033[38;5;10m"
        WARNING = "\033[38;5;11m"
        ERROR = "\033[38;5;9m"
        CRITICAL = "\033[38;5;1m"
        BOLD = "\033[1m"
        END = "\033[0m"

    def __init__(self, *args, **kwargs):
        super().__init__(datefmt=DATE_FORMAT)

        colors = self.ConsoleColors
        self.formatters = {
            level: logging.Formatter(
                f"%(asctime)s - %(name)s - {colors.BOLD.value}%(levelname)s{colors.END.value}"
                f" - {colors[logging.getLevelName(level)].value}%(message)s{colors.END.value}",
                self.datefmt,
            )
            for level in (
                logging.DEBUG,
                logging.INFO,
                logging.WARNING,
                logging.ERROR,
                logging.CRITICAL,
            )
        }

    def format(self, record: logging.LogRecord) -> str:
        formatter: logging.Formatter = self.formatters.get(
            record.levelno,
            self.formatters[logging.ERROR],
        )
        return formatter.format(record)


def rotating_file_handler(filename: str, max_mb: int, backup_count: int) -> dict[str, Any]:
    return {
        "formatter": "default",
        "class": "logging.handlers.RotatingFileHandler",
        "filename": f"logs/{filename}",
        "maxBytes": 1024 * 1024 * max_mb,
        "backupCount": backup_count,
        "level": "INFO",
    }


class LogConfig:
    """
    Logging configuration shared by the ShareIt server and gateway.

    Call `LogConfig().initialize_loggers(settings)` once, when the application is built.
    """

    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def get_config_dict(self, settings: Settings) -> dict[str, Any]:
        """
        See https://docs.python.org/3/library/logging.config.html#logging-config-dictschema
        """
        MINIMUM_LOG_LEVEL: str = "DEBUG" if settings.LOG_DEBUG_MESSAGES else "INFO"

        return {
            "version": 1,
            # In debug mode, SQLAlchemy and httpx loggers are kept
            "disable_existing_loggers": not settings.LOG_DEBUG_MESSAGES,
            "formatters": {
                "default": {
                    "format": self.LOG_FORMAT,
                    "datefmt": DATE_FORMAT,
                },
                "console_formatter": {
                    "()": "shareit.core.utils.log.ColoredConsoleFormatter",
                },
            },
            "handlers": {
                "console": {
                    "formatter": "console_formatter",
                    "class": "logging.StreamHandler",
                    "level": MINIMUM_LOG_LEVEL,
                },
                # Startup, shutdown, conflicts and unexpected errors of both tiers
                "file_errors": rotating_file_handler("errors.log", 10, 20),
                # One line per request, with its request id
                "file_access": rotating_file_handler("access.log", 40, 50),
                # Calls forwarded by the gateway to the server
                "file_gateway": rotating_file_handler("gateway.log", 40, 50),
            },
            "loggers": {
                "root": {
                    "level": "DEBUG",
                    "handlers": ["console"],
                },
                "shareit": {
                    "propagate": False,
                },
                "shareit.access": {
                    "handlers": ["file_access", "console"],
                    "level": MINIMUM_LOG_LEVEL,
                },
                "shareit.error": {
                    "handlers": ["file_errors", "console"],
                    "level": MINIMUM_LOG_LEVEL,
                },
                "shareit.gateway": {
                    "handlers": ["file_gateway", "console"],
                    "level": MINIMUM_LOG_LEVEL,
                },
                # Replaced by shareit.access, which carries the request id
                "uvicorn.access": {"handlers": []},
                "uvicorn.error": {
                    "handlers": ["file_errors", "console"],
                    "level": MINIMUM_LOG_LEVEL,
                    "propagate": False,
                },
            },
        }

    def initialize_loggers(self, settings: Settings) -> None:
        """
        Apply the dict configuration, then move the handlers of each configured logger behind a QueueHandler.

        Records are written by a QueueListener thread, so endpoints never wait on log files.
        See https://rob-blackbourn.medium.com/how-to-use-python-logging-queuehandler-with-dictconfig-1e8b1284e27a
        """
        # RotatingFileHandler does not create missing directories
        Path("logs/").mkdir(parents=True, exist_ok=True)

        config_dict = self.get_config_dict(settings=settings)
        logging.config.dictConfig(config_dict)

        for name in config_dict["loggers"]:
            logger = logging.getLogger(name)
            if not logger.handlers:
                continue

            log_queue: queue.Queue[Any] = queue.Queue(-1)
            QueueListener(
                log_queue,
                *logger.handlers,
                respect_handler_level=True,
            ).start()

            logger.handlers = [QueueHandler(log_queue)]
