"""
Structured JSON logging

Единый формат логов для wire-моделей: JSON через python-json-logger
(для сборщиков логов) или текст для локальной разработки.

Переменные окружения:
- LOG_LEVEL: DEBUG / INFO / WARNING / ERROR / CRITICAL (default: WARNING)
- LOG_FORMAT: json / text (default: json)
"""

import logging
import os
import sys
from typing import Final

from pythonjsonlogger.json import JsonFormatter


# Корневой логгер пакета: все модули логируют в его потомков (src.core.wire.*)
ROOT_LOGGER_NAME: Final[str] = "src"

LOG_LEVELS: Final[dict[str, int]] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class WireJsonFormatter(JsonFormatter):
    """
    JSON formatter с фиксированным набором полей контекста.

    Добавляет: timestamp, level, logger, module, function.
    Поля из extra={...} попадают в запись как есть (entity, field, index).
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname

        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Настройка логгера с handler в stdout.

    Повторный вызов заменяет handlers, а не дублирует их.

    Args:
        name: Имя логгера (default: корневой логгер пакета)
        level: Уровень логирования (default: LOG_LEVEL или WARNING)
        format_type: "json" или "text" (default: LOG_FORMAT или json)

    Returns:
        Настроенный логгер
    """
    level_str = level or os.getenv("LOG_LEVEL", "WARNING")
    log_level = LOG_LEVELS.get(level_str.upper(), logging.WARNING)
    format_type = (format_type or os.getenv("LOG_FORMAT", "json")).lower()

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format_type == "json":
        formatter: logging.Formatter = WireJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Логгер модуля без handlers (сообщения уходят в корневой логгер пакета).

    Args:
        name: Имя логгера, обычно __name__

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
