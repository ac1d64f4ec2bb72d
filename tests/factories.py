"""Factories для создания тестовых данных."""
from datetime import datetime, timezone
from typing import Any

from sentry_logging.models import Field, LogLevel, LogRecord


TEST_TIMESTAMP = datetime(2024, 5, 17, 12, 30, tzinfo=timezone.utc)

TEST_LOGGER = "test"


def create_record(
    level: LogLevel = LogLevel.ERROR,
    message: str = "Тестовое сообщение",
    logger_name: str = TEST_LOGGER
) -> LogRecord:
    """Создаёт запись лога с фиксированным временем.

    Args:
        level: Уровень записи
        message: Текст сообщения
        logger_name: Имя логгера

    Returns:
        LogRecord
    """
    return LogRecord(
        level=level,
        message=message,
        timestamp=TEST_TIMESTAMP,
        logger_name=logger_name,
    )


def create_fields(**values: Any) -> list:
    """Создаёт список полей из именованных аргументов."""
    return Field.from_mapping(values)
