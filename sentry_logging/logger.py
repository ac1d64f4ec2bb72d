"""Подключение отправки логов в Sentry к стандартному logging.

Примеры использования:
    ```python
    import logging
    from sentry_logging.logger import setup_sentry_logging, shutdown_sentry_logging

    # Конфигурация из переменных окружения (SENTRY_DSN, SENTRY_LOG_LEVEL, ...)
    setup_sentry_logging()

    logging.getLogger("app").error("Ошибка оплаты", extra={"#region": "eu", "order": 7})

    # Перед завершением процесса
    shutdown_sentry_logging()
    ```

Примечания:
    - Повторный вызов для того же логгера возвращает уже установленный handler
    - Thread-safe: можно вызывать из разных потоков
"""
import logging
import threading
from typing import Dict, Optional

from sentry_logging.config import SentryLoggingConfig, get_config
from sentry_logging.core import SentryCore, new_core
from sentry_logging.handler import SentryHandler
from sentry_logging.hub_sink import HubEventSink
from sentry_logging.levels import LevelThreshold
from sentry_logging.sink import RemoteEventSink


logger = logging.getLogger(__name__)

# Установленные handler-ы по имени логгера
_handlers: Dict[str, SentryHandler] = {}
# Блокировка для thread-safe установки
_handlers_lock = threading.Lock()


def build_core(
    config: SentryLoggingConfig,
    event_sink: Optional[RemoteEventSink] = None
) -> SentryCore:
    """Создаёт SentryCore по конфигурации.

    Args:
        config: Конфигурация адаптера
        event_sink: Приёмник событий (None - клиент sentry_sdk из конфигурации)

    Returns:
        Новый SentryCore
    """
    if event_sink is None:
        event_sink = HubEventSink.from_config(config)
    return new_core(event_sink, LevelThreshold(config.level), tag_prefix=config.tag_prefix)


def setup_sentry_logging(
    config: Optional[SentryLoggingConfig] = None,
    event_sink: Optional[RemoteEventSink] = None
) -> SentryHandler:
    """Устанавливает SentryHandler на логгер из конфигурации.

    Args:
        config: Конфигурация (None - из переменных окружения)
        event_sink: Приёмник событий (None - клиент sentry_sdk)

    Returns:
        Установленный SentryHandler
    """
    if config is None:
        config = get_config()

    name = config.logger_name

    # Первая проверка без блокировки (быстрый путь)
    handler = _handlers.get(name)
    if handler is not None:
        return handler

    with _handlers_lock:
        handler = _handlers.get(name)
        if handler is None:
            handler = SentryHandler(build_core(config, event_sink))
            logging.getLogger(name or None).addHandler(handler)
            _handlers[name] = handler
            logger.debug(
                "SentryHandler установлен на логгер %r (уровень %s)",
                name or "root",
                config.level.value,
            )

    return handler


def get_sentry_handler(name: str = "") -> Optional[SentryHandler]:
    """Возвращает установленный handler для логгера (или None)."""
    return _handlers.get(name)


def shutdown_sentry_logging() -> None:
    """Сбрасывает события и отключает все установленные handler-ы."""
    with _handlers_lock:
        installed = list(_handlers.items())
        _handlers.clear()

    for name, handler in installed:
        logging.getLogger(name or None).removeHandler(handler)
        handler.close()
