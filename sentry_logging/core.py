"""SentryCore - sink, отправляющий записи лога в Sentry.

Преобразует запись и её структурированные поля в событие Sentry.
Поля, ключ которых начинается с префикса тегов (по умолчанию "#"),
становятся тегами, остальные попадают в extra.

Примеры использования:
    ```python
    from sentry_logging import HubEventSink, LevelThreshold, LogLevel, LogRecord, new_core

    core = new_core(HubEventSink(), LevelThreshold(LogLevel.ERROR))
    request_core = core.derive_with([("#env", "prod"), ("request_id", "abc")])

    record = LogRecord(level=LogLevel.ERROR, message="Не удалось сохранить заказ")
    if request_core.admits(record):
        request_core.emit(record, [("order_id", 42)])

    request_core.flush()
    ```

Примечания:
    - Экземпляр после создания не изменяется, его можно использовать
      из разных потоков без блокировок
    - При тегировании отрезается ровно один первый символ ключа, даже если
      префикс длиннее одного символа (поведение сохранено для совместимости)
    - Сам SentryCore ничего не логирует
"""
import copy
import itertools
from typing import Any, Dict, Iterable, Optional, Tuple

from sentry_logging.errors import ClientUnavailableError, FlushTimeoutError
from sentry_logging.levels import LevelEnabler, to_sentry_level
from sentry_logging.models import (
    Field,
    FieldLike,
    LogLevel,
    LogRecord,
    RemoteEvent,
    to_fields,
)
from sentry_logging.sink import LoggerSink, RemoteEventSink


DEFAULT_TAG_PREFIX = "#"

# Время ожидания flush() в секундах
FLUSH_TIMEOUT = 5.0


def resolve_tag_prefix(tag_prefix: Optional[str]) -> str:
    """Возвращает действующий префикс тегов (DEFAULT_TAG_PREFIX для пустого)."""
    return tag_prefix or DEFAULT_TAG_PREFIX


def split_fields(
    fields: Iterable[Field],
    tag_prefix: str = DEFAULT_TAG_PREFIX
) -> Tuple[Dict[str, str], Dict[str, Any]]:
    """Разделяет поля на теги и extra.

    Поля сводятся в словарь по ключу: более поздние значения перекрывают
    ранние. Ключ с префиксом становится тегом без первого символа,
    значение тега всегда строка. Остальные поля сохраняют исходный тип.

    Args:
        fields: Поля в порядке добавления
        tag_prefix: Префикс ключей-тегов

    Returns:
        Кортеж (теги, extra)
    """
    merged: Dict[str, Field] = {}
    for item in fields:
        merged[item.key] = item

    tags: Dict[str, str] = {}
    extra: Dict[str, Any] = {}
    for key, item in merged.items():
        if key.startswith(tag_prefix):
            tags[key[1:]] = item.as_text()
            continue
        extra[key] = item.value

    return tags, extra


class SentryCore(LoggerSink):
    """Sink конвейера логирования, отправляющий записи в Sentry.

    Атрибуты:
        tag_prefix: Префикс ключей полей, которые становятся тегами Sentry
    """

    def __init__(
        self,
        event_sink: RemoteEventSink,
        enabler: LevelEnabler,
        fields: Iterable[FieldLike] = (),
        tag_prefix: str = DEFAULT_TAG_PREFIX
    ) -> None:
        """Инициализация SentryCore.

        Args:
            event_sink: Приёмник событий (клиент Sentry)
            enabler: Фильтр уровней
            fields: Начальный структурированный контекст
            tag_prefix: Префикс тегов (пустая строка - DEFAULT_TAG_PREFIX)
        """
        self._event_sink = event_sink
        self._enabler = enabler
        self._fields: Tuple[Field, ...] = to_fields(fields)
        self.tag_prefix = tag_prefix

    @property
    def fields(self) -> Tuple[Field, ...]:
        """Накопленный контекст (неизменяемый кортеж)."""
        return self._fields

    @property
    def event_sink(self) -> RemoteEventSink:
        return self._event_sink

    def enabled(self, level: LogLevel) -> bool:
        return self._enabler.enabled(level)

    def derive_with(self, fields: Iterable[FieldLike]) -> 'SentryCore':
        """Возвращает копию core с добавленными полями.

        Фильтр и приёмник событий общие с исходным экземпляром,
        кортеж полей - новый: старые поля, затем новые.

        Args:
            fields: Добавляемые поля

        Returns:
            Новый экземпляр SentryCore
        """
        clone = copy.copy(self)
        clone._fields = self._fields + to_fields(fields)
        return clone

    def build_event(self, record: LogRecord, fields: Iterable[FieldLike] = ()) -> RemoteEvent:
        """Строит событие Sentry из записи, накопленных и переданных полей.

        Args:
            record: Запись лога
            fields: Поля из места вызова

        Returns:
            Событие Sentry
        """
        event = RemoteEvent(
            message=record.message,
            timestamp=record.timestamp,
            level=to_sentry_level(record.level),
            logger=record.logger_name,
        )

        tags, extra = split_fields(
            itertools.chain(self._fields, to_fields(fields)),
            resolve_tag_prefix(self.tag_prefix),
        )

        if tags:
            event.tags = tags

        if extra:
            event.extra = extra

        return event

    def emit(self, record: LogRecord, fields: Iterable[FieldLike] = ()) -> None:
        """Отправляет запись в Sentry.

        Args:
            record: Запись лога
            fields: Поля из места вызова

        Raises:
            ClientUnavailableError: Приёмник не вернул идентификатор события
        """
        event_id = self._event_sink.capture_event(self.build_event(record, fields))
        if event_id is None:
            raise ClientUnavailableError()

    def flush(self) -> None:
        """Ожидает отправки событий не дольше FLUSH_TIMEOUT.

        Raises:
            FlushTimeoutError: Сброс не завершился вовремя
        """
        if not self._event_sink.flush(FLUSH_TIMEOUT):
            raise FlushTimeoutError(FLUSH_TIMEOUT)

    def __repr__(self) -> str:
        return (
            f"SentryCore(enabler={self._enabler!r}, fields={len(self._fields)}, "
            f"tag_prefix={self.tag_prefix!r})"
        )


def new_core(
    event_sink: RemoteEventSink,
    enabler: LevelEnabler,
    *fields: FieldLike,
    tag_prefix: str = DEFAULT_TAG_PREFIX
) -> SentryCore:
    """Создаёт SentryCore.

    Args:
        event_sink: Приёмник событий
        enabler: Фильтр уровней
        *fields: Начальный структурированный контекст
        tag_prefix: Префикс тегов

    Returns:
        Новый SentryCore
    """
    return SentryCore(event_sink, enabler, fields, tag_prefix=tag_prefix)
