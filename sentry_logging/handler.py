"""SentryHandler - подключение SentryCore к стандартному logging.

Примеры использования:
    ```python
    import logging
    from sentry_logging import SentryHandler

    handler = SentryHandler(core)
    logging.getLogger().addHandler(handler)

    # Поля передаются через extra: "#" - тег, остальное - extra
    logging.getLogger("billing").error(
        "Платёж отклонён",
        extra={"#env": "prod", "amount": 100}
    )
    ```
"""
import logging
import sys
from datetime import datetime, timezone
from typing import Any, List

from sentry_logging.checked import CheckedRecord
from sentry_logging.errors import FlushTimeoutError
from sentry_logging.models import Field, LogLevel, LogRecord
from sentry_logging.sink import LoggerSink


# Логгеры, записи которых не отправляются (иначе возможна рекурсия)
IGNORED_LOGGERS = ("sentry_logging", "sentry_sdk")

# Стандартные атрибуты logging.LogRecord - всё остальное пришло из extra
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}


def level_from_stdlib(levelno: int) -> LogLevel:
    """Возвращает LogLevel для числового уровня logging.

    Args:
        levelno: Уровень из logging (DEBUG, INFO, ...)

    Returns:
        Соответствующий LogLevel (CRITICAL -> FATAL)
    """
    if levelno >= logging.CRITICAL:
        return LogLevel.FATAL
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARN
    if levelno >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


def _is_ignored(name: str) -> bool:
    return any(name == prefix or name.startswith(prefix + ".") for prefix in IGNORED_LOGGERS)


class SentryHandler(logging.Handler):
    """Handler для logging, передающий записи в LoggerSink (обычно SentryCore)."""

    def __init__(self, core: LoggerSink, level: int = logging.NOTSET) -> None:
        """Инициализация SentryHandler.

        Args:
            core: Sink, в который передаются записи
            level: Уровень handler-а (фильтр logging поверх фильтра core)
        """
        super().__init__(level)
        self.core = core

    def bind(self, **fields: Any) -> 'SentryHandler':
        """Возвращает новый handler с добавленным контекстом.

        Исходный handler не изменяется.
        """
        bound = type(self)(self.core.derive_with(Field.from_mapping(fields)), self.level)
        bound.filters = list(self.filters)
        return bound

    def to_record(self, record: logging.LogRecord) -> LogRecord:
        return LogRecord(
            level=level_from_stdlib(record.levelno),
            message=record.getMessage(),
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
            logger_name=record.name,
        )

    def fields_of(self, record: logging.LogRecord) -> List[Field]:
        """Извлекает поля, переданные через extra, и исключение (если есть)."""
        fields = [
            Field(key, value)
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS
        ]
        if record.exc_info and record.exc_info[1] is not None:
            fields.append(Field("error", str(record.exc_info[1])))
        return fields

    def emit(self, record: logging.LogRecord) -> None:
        if _is_ignored(record.name):
            return

        try:
            entry = self.to_record(record)
            checked = CheckedRecord(entry)
            if not self.core.admits(entry, checked):
                return
            errors = checked.write(*self.fields_of(record))
            if errors:
                raise errors[0]
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        try:
            self.core.flush()
        except FlushTimeoutError as e:
            # logging.shutdown() не ожидает исключений из flush()
            if logging.raiseExceptions:
                sys.stderr.write(f"⚠️ {e}\n")

    def close(self) -> None:
        try:
            self.flush()
        finally:
            super().close()
