"""Тесты для MemoryEventSink."""
from sentry_logging.memory_sink import MemoryEventSink
from sentry_logging.models import RemoteEvent, SentryLevel
from tests.factories import TEST_TIMESTAMP


def make_event(message: str, level: SentryLevel = SentryLevel.ERROR, **kwargs) -> RemoteEvent:
    return RemoteEvent(message=message, timestamp=TEST_TIMESTAMP, level=level, **kwargs)


class TestMemoryEventSink:
    """Тесты хранения событий в памяти."""

    def test_capture_returns_id(self) -> None:
        """Тест что принятое событие получает идентификатор."""
        sink = MemoryEventSink()

        first = sink.capture_event(make_event("Событие 1"))
        second = sink.capture_event(make_event("Событие 2"))

        assert first and second
        assert first != second
        assert len(sink) == 2

    def test_unavailable(self) -> None:
        """Тест имитации недоступного клиента."""
        sink = MemoryEventSink(available=False)

        assert sink.capture_event(make_event("Событие")) is None
        assert len(sink) == 0

    def test_filtering(self) -> None:
        """Тест фильтрации событий."""
        sink = MemoryEventSink()
        sink.capture_event(make_event("Ошибка", logger="billing", tags={"env": "prod"}))
        sink.capture_event(make_event("Предупреждение", level=SentryLevel.WARNING, logger="billing"))
        sink.capture_event(make_event("Другая ошибка", logger="auth"))

        assert len(sink.get_events(level="error")) == 2
        assert len(sink.get_events(logger="billing")) == 2
        assert [e.message for e in sink.get_events(tag="env")] == ["Ошибка"]
        assert [e.message for e in sink.get_events(limit=1)] == ["Другая ошибка"]

    def test_max_events(self) -> None:
        """Тест ограничения размера буфера."""
        sink = MemoryEventSink(max_events=3)

        for i in range(5):
            sink.capture_event(make_event(f"Сообщение {i}"))

        events = sink.get_events()
        assert len(events) == 3
        assert events[0].message == "Сообщение 2"
        assert events[2].message == "Сообщение 4"

    def test_callbacks(self) -> None:
        """Тест подписки на события."""
        received = []
        sink = MemoryEventSink()
        sink.subscribe(received.append)

        sink.capture_event(make_event("Тест"))
        sink.unsubscribe(received.append)
        sink.capture_event(make_event("Тест 2"))

        assert [e.message for e in received] == ["Тест"]

    def test_flush_and_clear(self) -> None:
        """Тест flush() и очистки буфера."""
        sink = MemoryEventSink(flush_result=False)
        sink.capture_event(make_event("Тест"))

        assert sink.flush(1.5) is False
        assert sink.flush_calls == [1.5]

        sink.clear()
        assert sink.get_events() == []

    def test_failing_callback_isolated(self) -> None:
        """Тест что ошибка в callback-е не мешает сохранению и другим подписчикам."""
        received = []

        def failing(event: RemoteEvent) -> None:
            raise RuntimeError("callback failed")

        sink = MemoryEventSink(callbacks=[failing, received.append])

        assert sink.capture_event(make_event("Тест")) is not None
        assert len(sink) == 1
        assert [e.message for e in received] == ["Тест"]
