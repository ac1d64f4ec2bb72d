"""Отправка структурированных логов в Sentry.

Пакет предоставляет:
- SentryCore: sink конвейера логирования, превращающий записи в события Sentry
- Разделение полей на теги (префикс "#") и extra
- Неизменяемое добавление контекста через derive_with()
- Handler для стандартного logging и конфигурацию из переменных окружения
"""
from sentry_logging.models import Field, LogLevel, LogRecord, RemoteEvent, SentryLevel
from sentry_logging.errors import ClientUnavailableError, FlushTimeoutError, SentryCoreError
from sentry_logging.levels import LevelEnabler, LevelThreshold, to_sentry_level
from sentry_logging.sink import LoggerSink, RemoteEventSink
from sentry_logging.checked import CheckedRecord
from sentry_logging.core import DEFAULT_TAG_PREFIX, FLUSH_TIMEOUT, SentryCore, new_core
from sentry_logging.memory_sink import MemoryEventSink
from sentry_logging.hub_sink import HubEventSink
from sentry_logging.config import SentryLoggingConfig, get_config
from sentry_logging.handler import SentryHandler

__all__ = [
    "Field",
    "LogLevel",
    "LogRecord",
    "RemoteEvent",
    "SentryLevel",
    "ClientUnavailableError",
    "FlushTimeoutError",
    "SentryCoreError",
    "LevelEnabler",
    "LevelThreshold",
    "to_sentry_level",
    "LoggerSink",
    "RemoteEventSink",
    "CheckedRecord",
    "DEFAULT_TAG_PREFIX",
    "FLUSH_TIMEOUT",
    "SentryCore",
    "new_core",
    "MemoryEventSink",
    "HubEventSink",
    "SentryLoggingConfig",
    "get_config",
    "SentryHandler",
]
