"""
Тесты для structured logging

Проверяет:
1. Уровень и формат из параметров и переменных окружения
2. JSON формат содержит поля контекста
3. Повторная настройка не дублирует handlers
4. Логгеры модулей не имеют собственных handlers
"""

import json
import logging

import pytest

from src.observability import get_logger, setup_logger
from src.observability.logger import WireJsonFormatter


@pytest.fixture
def logger_name() -> str:
    name = "src.tests.logger"
    yield name
    logging.getLogger(name).handlers.clear()


class TestSetupLogger:
    """setup_logger"""

    def test_explicit_level(self, logger_name: str) -> None:
        logger = setup_logger(logger_name, level="DEBUG", format_type="text")
        assert logger.level == logging.DEBUG

    def test_level_from_env(self, logger_name: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert setup_logger(logger_name).level == logging.ERROR

    def test_unknown_level_falls_back_to_warning(self, logger_name: str) -> None:
        assert setup_logger(logger_name, level="VERBOSE").level == logging.WARNING

    def test_json_format_by_default(self, logger_name: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        logger = setup_logger(logger_name)
        assert isinstance(logger.handlers[0].formatter, WireJsonFormatter)

    def test_text_format_from_env(self, logger_name: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_FORMAT", "text")
        logger = setup_logger(logger_name)
        assert not isinstance(logger.handlers[0].formatter, WireJsonFormatter)

    def test_no_duplicate_handlers(self, logger_name: str) -> None:
        setup_logger(logger_name)
        logger = setup_logger(logger_name)
        assert len(logger.handlers) == 1


class TestJsonFormatter:
    """WireJsonFormatter"""

    def test_context_fields(self) -> None:
        formatter = WireJsonFormatter(fmt="%(timestamp)s %(level)s %(message)s")
        record = logging.LogRecord(
            name="src.core.wire.validation",
            level=logging.DEBUG,
            pathname=__file__,
            lineno=1,
            msg="Validation failed",
            args=(),
            exc_info=None,
        )
        record.field = "bid"
        payload = json.loads(formatter.format(record))
        assert payload["message"] == "Validation failed"
        assert payload["level"] == "DEBUG"
        assert payload["logger"] == "src.core.wire.validation"
        assert payload["field"] == "bid"
        assert "timestamp" in payload


class TestGetLogger:
    """get_logger"""

    def test_module_logger_has_no_handlers(self) -> None:
        logger = get_logger("src.core.wire.transform")
        assert logger.handlers == []
        assert logger.propagate
