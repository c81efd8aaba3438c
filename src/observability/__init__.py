"""
Observability — логирование.

Библиотечный код получает логгеры через get_logger() и не добавляет handlers;
приложение один раз вызывает setup_logger() для вывода в JSON или текст.
"""

from .logger import LOG_LEVELS, ROOT_LOGGER_NAME, get_logger, setup_logger

__all__ = [
    "LOG_LEVELS",
    "ROOT_LOGGER_NAME",
    "get_logger",
    "setup_logger",
]
