"""CheckedRecord - запись, прошедшая проверку уровня, и sink-и для неё."""
from typing import List, Tuple

from sentry_logging.models import FieldLike, LogRecord
from sentry_logging.sink import LoggerSink


class CheckedRecord:
    """Запись лога вместе с sink-ами, которые согласились её принять.

    Sink-и регистрируются через LoggerSink.admits(), после чего
    write() передаёт запись каждому из них.
    """

    def __init__(self, record: LogRecord) -> None:
        self.record = record
        self._sinks: List[LoggerSink] = []

    def add_sink(self, sink: LoggerSink) -> 'CheckedRecord':
        """Регистрирует sink для записи.

        Args:
            sink: Sink, прошедший проверку уровня

        Returns:
            Этот же CheckedRecord (для цепочек вызовов)
        """
        self._sinks.append(sink)
        return self

    @property
    def sinks(self) -> Tuple[LoggerSink, ...]:
        return tuple(self._sinks)

    def __bool__(self) -> bool:
        return bool(self._sinks)

    def write(self, *fields: FieldLike) -> List[Exception]:
        """Передаёт запись всем зарегистрированным sink-ам.

        Ошибка одного sink-а не мешает записи в остальные.

        Args:
            *fields: Поля, переданные в месте вызова

        Returns:
            Список ошибок sink-ов (пустой, если все записали успешно)
        """
        errors: List[Exception] = []
        for sink in self._sinks:
            try:
                sink.emit(self.record, fields)
            except Exception as e:
                errors.append(e)
        return errors
