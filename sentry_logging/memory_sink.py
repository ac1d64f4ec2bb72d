"""MemoryEventSink - хранение событий Sentry в памяти для тестов и отладки."""
import threading
import uuid
from typing import Callable, List, Optional

from sentry_logging.models import RemoteEvent


class MemoryEventSink:
    """Приёмник событий, хранящий их в памяти вместо отправки в Sentry.

    Используется для:
    - Тестирования (проверка отправленных событий)
    - Отладки без DSN

    Особенности:
    - Потокобезопасное хранение
    - Ограничение размера буфера
    - Подписки на события через callback-и
    - Имитация недоступного клиента и таймаута flush
    """

    def __init__(
        self,
        max_events: int = 1000,
        callbacks: Optional[List[Callable[[RemoteEvent], None]]] = None,
        available: bool = True,
        flush_result: bool = True
    ) -> None:
        """Инициализация MemoryEventSink.

        Args:
            max_events: Максимальное количество событий в буфере
            callbacks: Список callback-функций для подписки на события
            available: Принимать ли события (False - capture_event вернёт None)
            flush_result: Что возвращает flush()
        """
        self.max_events = max_events
        self.available = available
        self.flush_result = flush_result
        self.flush_calls: List[float] = []
        self._events: List[RemoteEvent] = []
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[RemoteEvent], None]] = callbacks or []

    def capture_event(self, event: RemoteEvent) -> Optional[str]:
        """Сохраняет событие в памяти.

        Args:
            event: Событие для хранения

        Returns:
            Идентификатор события или None, если sink недоступен
        """
        if not self.available:
            return None

        with self._lock:
            self._events.append(event)

            # Ограничиваем размер буфера (удаляем самые старые)
            if len(self._events) > self.max_events:
                self._events = self._events[-self.max_events:]

            callbacks = list(self._callbacks)

        for callback in callbacks:
            try:
                callback(event)
            except Exception:
                # Игнорируем ошибки в callback-ах
                pass

        return uuid.uuid4().hex

    def flush(self, timeout: float) -> bool:
        with self._lock:
            self.flush_calls.append(timeout)
        return self.flush_result

    def subscribe(self, callback: Callable[[RemoteEvent], None]) -> None:
        """Подписывает callback на новые события."""
        with self._lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)

    def unsubscribe(self, callback: Callable[[RemoteEvent], None]) -> None:
        """Отписывает callback от событий."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def get_events(
        self,
        level: Optional[str] = None,
        logger: Optional[str] = None,
        tag: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[RemoteEvent]:
        """Получает события из буфера с фильтрацией.

        Args:
            level: Фильтр по уровню Sentry ("error", "warning", ...)
            logger: Фильтр по имени логгера
            tag: Оставить только события с этим тегом
            limit: Максимальное количество событий (None = все)

        Returns:
            Список отфильтрованных событий
        """
        with self._lock:
            events = self._events.copy()

        filtered = []
        for event in events:
            if level and event.level.value != level:
                continue
            if logger is not None and event.logger != logger:
                continue
            if tag and (not event.tags or tag not in event.tags):
                continue
            filtered.append(event)

        if limit is not None:
            filtered = filtered[-limit:]

        return filtered

    def clear(self) -> None:
        """Очищает буфер событий."""
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
