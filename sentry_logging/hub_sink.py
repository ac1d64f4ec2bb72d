"""HubEventSink - приёмник событий поверх sentry_sdk."""
import time
from typing import TYPE_CHECKING, Any, Optional

import sentry_sdk

from sentry_logging.models import RemoteEvent

if TYPE_CHECKING:
    from sentry_logging.config import SentryLoggingConfig


class HubEventSink:
    """Отправляет события через клиент sentry_sdk.

    Если клиент не передан, используется текущий глобальный клиент
    (тот, что настроен через sentry_sdk.init()).
    """

    def __init__(self, client: Optional[Any] = None) -> None:
        """Инициализация HubEventSink.

        Args:
            client: Клиент sentry_sdk (None - глобальный клиент)
        """
        self._client = client

    @classmethod
    def from_config(cls, config: 'SentryLoggingConfig') -> 'HubEventSink':
        """Создаёт отдельный клиент sentry_sdk по конфигурации.

        Args:
            config: Конфигурация адаптера

        Returns:
            HubEventSink со своим клиентом
        """
        client = sentry_sdk.Client(
            dsn=config.dsn or None,
            environment=config.environment,
            release=config.release,
            debug=config.debug,
        )
        return cls(client)

    @property
    def client(self) -> Any:
        if self._client is not None:
            return self._client
        return sentry_sdk.get_client()

    def capture_event(self, event: RemoteEvent) -> Optional[str]:
        """Передаёт событие в Sentry через текущий scope.

        К событию применяются теги, пользователь, контексты и breadcrumbs
        глобального, изоляционного и текущего scope. Явно переданный клиент
        подставляется в ответвлённый текущий scope.

        Returns:
            Идентификатор события или None, если клиент неактивен
            или отбросил событие
        """
        client = self.client
        if not client.is_active():
            return None
        if self._client is None:
            return sentry_sdk.capture_event(event.to_dict())

        with sentry_sdk.new_scope() as scope:
            scope.set_client(self._client)
            return scope.capture_event(event.to_dict())

    def flush(self, timeout: float) -> bool:
        """Ждёт отправки событий клиентом.

        sentry_sdk не сообщает результат flush(), поэтому сброс считается
        незавершённым, если он занял весь отведённый timeout.

        Args:
            timeout: Максимальное время ожидания в секундах

        Returns:
            True если сброс завершился раньше timeout
        """
        # Сброс, занявший весь timeout (включая ровно timeout), считается незавершённым
        started = time.monotonic()
        self.client.flush(timeout=timeout)
        return time.monotonic() - started < timeout
