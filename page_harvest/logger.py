"""Логирование PageHarvest.

Все модули пишут в один именованный логгер::

    from page_harvest.logger import logger
    logger.info("Visiting %s", url)

Вывод идёт в stdout; при ``log_file`` добавляется файл с ротацией.
CLI перенастраивает логгер через :func:`init_logging` при каждом запуске.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "PageHarvest"

# aiohttp.web access lines from local test servers drown the crawl log
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("aiohttp.access", "aiohttp.server")

_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

Level = Union[int, str]


def _formatted(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    *,
    level: Level = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Настроить логгер ``PageHarvest`` и вернуть его.

    ``replace_handlers=False`` оставляет уже подключённые обработчики,
    новые добавляются к ним.
    """
    harvest_log = logging.getLogger(LOGGER_NAME)
    harvest_log.setLevel(level)
    if replace_handlers:
        harvest_log.handlers.clear()

    harvest_log.addHandler(_formatted(logging.StreamHandler(sys.stdout), log_format))
    if log_file is not None:
        rotating = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_LOG_BACKUPS,
            encoding="utf-8",
        )
        harvest_log.addHandler(_formatted(rotating, log_format))
    harvest_log.propagate = False

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return harvest_log


def init_logging(
    level: Level = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Used by the CLI on every invocation."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
