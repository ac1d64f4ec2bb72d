"""Тесты HubEventSink поверх sentry_sdk."""
from unittest.mock import Mock, patch

import pytest
import sentry_sdk
from sentry_sdk.transport import Transport

from sentry_logging.config import SentryLoggingConfig
from sentry_logging.core import new_core
from sentry_logging.errors import ClientUnavailableError, FlushTimeoutError
from sentry_logging.hub_sink import HubEventSink
from sentry_logging.levels import LevelThreshold
from sentry_logging.models import Field, LogLevel
from tests.factories import create_record


TEST_DSN = "https://public@sentry.example.invalid/1"


class MemoryTransport(Transport):
    """Транспорт sentry_sdk, сохраняющий конверты в памяти."""

    def __init__(self) -> None:
        super().__init__()
        self.envelopes = []

    def capture_envelope(self, envelope) -> None:
        self.envelopes.append(envelope)


def create_client(event_id="abc123", active=True) -> Mock:
    """Создаёт mock клиента sentry_sdk."""
    client = Mock()
    client.is_active.return_value = active
    client.capture_event.return_value = event_id
    return client


@pytest.fixture
def sent_events():
    """События, прошедшие через before_send настоящего клиента sentry_sdk."""
    events = []

    def before_send(event, hint):
        events.append(event)
        return event

    with sentry_sdk.isolation_scope():
        yield events, before_send


def create_sdk_client(before_send, drop: bool = False) -> sentry_sdk.Client:
    """Создаёт настоящий клиент sentry_sdk без сетевого транспорта."""
    def send(event, hint):
        before_send(event, hint)
        return None if drop else event

    return sentry_sdk.Client(
        dsn=TEST_DSN,
        before_send=send,
        transport=MemoryTransport(),
        default_integrations=False,
    )


class TestHubEventSink:
    """Тесты отправки через клиент sentry_sdk."""

    def test_capture_event_payload(self, sent_events) -> None:
        """Тест что клиент получает payload события."""
        events, before_send = sent_events
        core = new_core(HubEventSink(create_sdk_client(before_send)), LevelThreshold(LogLevel.DEBUG))

        core.emit(create_record(message="Сбой"), [Field("#env", "prod"), Field("count", 3)])

        assert len(events) == 1
        assert events[0]["message"] == "Сбой"
        assert events[0]["level"] == "error"
        assert events[0]["logger"] == "test"
        assert events[0]["tags"] == {"env": "prod"}
        assert events[0]["extra"] == {"count": 3}

    def test_explicit_client_applies_scope(self, sent_events) -> None:
        """Тест что теги и пользователь из scope попадают в событие явного клиента."""
        events, before_send = sent_events
        core = new_core(HubEventSink(create_sdk_client(before_send)), LevelThreshold(LogLevel.DEBUG))

        sentry_sdk.set_tag("release_train", "blue")
        sentry_sdk.set_user({"id": "u-1"})
        core.emit(create_record(), [("#env", "prod")])

        assert events[0]["tags"] == {"env": "prod", "release_train": "blue"}
        assert events[0]["user"] == {"id": "u-1"}

    def test_global_client_applies_scope(self, sent_events) -> None:
        """Тест что глобальный клиент из sentry_sdk.init() применяет теги scope."""
        events, before_send = sent_events
        sentry_sdk.init(
            dsn=TEST_DSN,
            before_send=before_send,
            transport=MemoryTransport(),
            default_integrations=False,
        )
        try:
            sentry_sdk.set_tag("release_train", "blue")
            core = new_core(HubEventSink(), LevelThreshold(LogLevel.DEBUG))

            core.emit(create_record(), [("#env", "prod")])
        finally:
            sentry_sdk.get_global_scope().set_client(None)

        assert len(events) == 1
        assert events[0]["tags"]["env"] == "prod"
        assert events[0]["tags"]["release_train"] == "blue"

    def test_dropped_event(self, sent_events) -> None:
        """Тест что событие, отброшенное клиентом, считается непринятым."""
        _, before_send = sent_events
        core = new_core(HubEventSink(create_sdk_client(before_send, drop=True)), LevelThreshold(LogLevel.DEBUG))

        with pytest.raises(ClientUnavailableError):
            core.emit(create_record())

    def test_inactive_client(self) -> None:
        """Тест что неактивный клиент приводит к ClientUnavailableError."""
        client = create_client(active=False)
        core = new_core(HubEventSink(client), LevelThreshold(LogLevel.DEBUG))

        with pytest.raises(ClientUnavailableError):
            core.emit(create_record())

        client.capture_event.assert_not_called()

    def test_flush_in_time(self) -> None:
        """Тест успешного flush."""
        client = create_client()
        sink = HubEventSink(client)

        with patch("sentry_logging.hub_sink.time") as fake_time:
            fake_time.monotonic.side_effect = [10.0, 10.5]
            assert sink.flush(5.0) is True

        client.flush.assert_called_once_with(timeout=5.0)

    def test_flush_used_whole_timeout(self) -> None:
        """Тест что flush, занявший весь timeout, считается незавершённым."""
        client = create_client()
        core = new_core(HubEventSink(client), LevelThreshold(LogLevel.DEBUG))

        with patch("sentry_logging.hub_sink.time") as fake_time:
            fake_time.monotonic.side_effect = [10.0, 15.0]
            with pytest.raises(FlushTimeoutError):
                core.flush()

    def test_flush_exactly_timeout(self) -> None:
        """Тест что flush длительностью ровно timeout считается незавершённым."""
        sink = HubEventSink(create_client())

        with patch("sentry_logging.hub_sink.time") as fake_time:
            fake_time.monotonic.side_effect = [10.0, 15.0]
            assert sink.flush(5.0) is False

    def test_global_client(self) -> None:
        """Тест использования глобального клиента sentry_sdk."""
        client = create_client()

        with patch("sentry_logging.hub_sink.sentry_sdk.get_client", return_value=client):
            assert HubEventSink().client is client

    def test_from_config(self) -> None:
        """Тест создания клиента по конфигурации."""
        config = SentryLoggingConfig(environment="production", release="1.2.3")

        with patch("sentry_logging.hub_sink.sentry_sdk.Client") as client_cls:
            sink = HubEventSink.from_config(config)

        client_cls.assert_called_once_with(
            dsn=None,
            environment="production",
            release="1.2.3",
            debug=False,
        )
        assert sink.client is client_cls.return_value
