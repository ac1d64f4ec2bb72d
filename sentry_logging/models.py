"""Модели данных для адаптера Sentry."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union


class LogLevel(str, Enum):
    """Уровни логирования (источник записей)."""
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    DPANIC = "dpanic"
    PANIC = "panic"
    FATAL = "fatal"

    @property
    def order(self) -> int:
        """Порядковый номер уровня (чем больше, тем серьёзнее)."""
        return _LEVEL_ORDER[self]


_LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
    LogLevel.DPANIC: 4,
    LogLevel.PANIC: 5,
    LogLevel.FATAL: 6,
}


class SentryLevel(str, Enum):
    """Уровни событий Sentry."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


@dataclass(frozen=True)
class LogRecord:
    """Одна запись лога.

    Атрибуты:
        level: Уровень записи
        message: Текст сообщения
        timestamp: Время создания записи (UTC)
        logger_name: Имя логгера, создавшего запись
    """
    level: LogLevel = LogLevel.INFO
    message: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    logger_name: str = ""


_UNPRINTABLE = "<unprintable value>"


@dataclass(frozen=True)
class Field:
    """Структурированное поле: ключ и значение произвольного типа."""
    key: str
    value: Any = None

    def as_text(self) -> str:
        """Возвращает значение в виде строки.

        Строки возвращаются как есть, остальные значения приводятся
        через str(), затем repr(). Булевы значения дают "True"/"False"
        (не "true"/"false"), это видно в значениях тегов Sentry.
        Метод никогда не бросает исключений.

        Returns:
            Текстовое представление значения
        """
        if isinstance(self.value, str):
            return self.value
        try:
            return str(self.value)
        except Exception:
            pass
        try:
            return repr(self.value)
        except Exception:
            return _UNPRINTABLE

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> List['Field']:
        """Создаёт поля из словаря с сохранением порядка ключей.

        Args:
            values: Словарь ключ -> значение

        Returns:
            Список полей
        """
        return [cls(key, value) for key, value in values.items()]


FieldLike = Union[Field, Tuple[str, Any]]


def to_fields(items: Iterable[FieldLike]) -> Tuple[Field, ...]:
    """Приводит последовательность полей или пар (ключ, значение) к кортежу Field."""
    return tuple(
        item if isinstance(item, Field) else Field(item[0], item[1])
        for item in items
    )


@dataclass
class RemoteEvent:
    """Событие для отправки в Sentry.

    Атрибуты:
        message: Текст сообщения
        timestamp: Время записи
        level: Уровень события Sentry
        logger: Имя логгера
        tags: Теги (только строковые значения), None если тегов нет
        extra: Дополнительный контекст с исходными типами, None если пуст
    """
    message: str
    timestamp: datetime
    level: SentryLevel
    logger: str = ""
    tags: Optional[Dict[str, str]] = None
    extra: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Преобразует событие в payload Sentry.

        Returns:
            Словарь с данными события
        """
        result: Dict[str, Any] = {
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "logger": self.logger,
        }

        if self.tags is not None:
            result["tags"] = dict(self.tags)

        if self.extra is not None:
            result["extra"] = dict(self.extra)

        return result
