import logging
import sys

from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from twelvefactor._internal import settings


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging():
    formatters = {
        "rich": logging.Formatter(fmt="%(message)s", datefmt="[%X]"),
        "standard": logging.Formatter(
            fmt="%(levelname)s %(asctime)s.%(msecs)03d %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        ),
        "json": JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            json_ensure_ascii=False,
            rename_fields={"name": "logger", "asctime": "timestamp", "levelname": "level"},
        ),
    }
    if settings.LOG_FORMAT not in formatters:
        raise ValueError(f"Invalid settings.LOG_FORMAT: {settings.LOG_FORMAT}")
    if settings.LOG_FORMAT == "rich":
        handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatters[settings.LOG_FORMAT])
    root_logger = logging.getLogger(None)
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.ROOT_LOG_LEVEL)
    twelvefactor_logger = logging.getLogger("twelvefactor")
    twelvefactor_logger.setLevel(settings.LOG_LEVEL)
    # botocore logs every retried request at debug level
    logging.getLogger("botocore").setLevel(logging.WARNING)
