"""Абстрактные интерфейсы sink-ов."""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Optional, Protocol

from sentry_logging.models import FieldLike, LogLevel, LogRecord, RemoteEvent

if TYPE_CHECKING:
    from sentry_logging.checked import CheckedRecord


class RemoteEventSink(Protocol):
    """Интерфейс приёмника событий удалённого сервиса (Sentry)."""

    def capture_event(self, event: RemoteEvent) -> Optional[str]:
        """Принимает событие.

        Args:
            event: Событие для отправки

        Returns:
            Идентификатор события или None, если событие не принято
        """
        ...

    def flush(self, timeout: float) -> bool:
        """Блокирующий сброс накопленных событий.

        Args:
            timeout: Максимальное время ожидания в секундах

        Returns:
            False если сброс не завершился за timeout
        """
        ...


class LoggerSink(ABC):
    """Абстрактный базовый класс sink-а в конвейере логирования.

    Экземпляры логически неизменяемы: добавление контекста через
    derive_with() создаёт новый sink, не затрагивая исходный.
    """

    @abstractmethod
    def enabled(self, level: LogLevel) -> bool:
        """Проверяет, обрабатывает ли sink записи данного уровня."""
        pass

    @abstractmethod
    def derive_with(self, fields: Iterable[FieldLike]) -> 'LoggerSink':
        """Возвращает новый sink с добавленным структурированным контекстом.

        Args:
            fields: Поля, добавляемые к накопленному контексту

        Returns:
            Новый экземпляр sink-а
        """
        pass

    def admits(self, record: LogRecord, checked: Optional['CheckedRecord'] = None) -> bool:
        """Проверяет, должна ли запись попасть в этот sink.

        Если запись проходит фильтр и передан checked, sink регистрируется
        в нём для последующей записи.

        Args:
            record: Запись лога
            checked: Регистратор sink-ов для записи (опционально)

        Returns:
            True если sink будет вызван для этой записи
        """
        if not self.enabled(record.level):
            return False
        if checked is not None:
            checked.add_sink(self)
        return True

    @abstractmethod
    def emit(self, record: LogRecord, fields: Iterable[FieldLike] = ()) -> None:
        """Отправляет запись и её поля в sink.

        Args:
            record: Запись лога
            fields: Поля, переданные в месте вызова
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """Сбрасывает буферы (если есть) в sink."""
        pass

    def close(self) -> None:
        """Закрывает sink, предварительно сбросив буферы."""
        self.flush()

    def __enter__(self) -> 'LoggerSink':
        """Поддержка контекстного менеджера."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Автоматическое закрытие при выходе из контекста."""
        self.close()
