"""Конфигурация для pytest."""
import sys
from pathlib import Path

import pytest

# Добавляем корневую директорию в путь
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from sentry_logging.core import SentryCore, new_core
from sentry_logging.levels import LevelThreshold
from sentry_logging.memory_sink import MemoryEventSink
from sentry_logging.models import LogLevel


def pytest_configure(config):
    """Регистрация кастомных маркеров."""
    config.addinivalue_line(
        "markers", "unit: юнит-тесты"
    )
    config.addinivalue_line(
        "markers", "integration: интеграционные тесты"
    )


def pytest_collection_modifyitems(config, items):
    """Автоматическая маркировка тестов по расположению."""
    for item in items:
        try:
            path = str(item.fspath)
        except AttributeError:
            # Для некоторых версий pytest
            path = str(item.path)

        if "test_handler" in path or "test_hub_sink" in path:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def memory_sink() -> MemoryEventSink:
    """Приёмник событий в памяти."""
    return MemoryEventSink()


@pytest.fixture
def core(memory_sink: MemoryEventSink) -> SentryCore:
    """SentryCore, пропускающий все уровни."""
    return new_core(memory_sink, LevelThreshold(LogLevel.DEBUG))
