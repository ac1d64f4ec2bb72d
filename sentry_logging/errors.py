"""Ошибки, возникающие при отправке логов в Sentry."""


class SentryCoreError(Exception):
    """Базовое исключение адаптера Sentry."""
    pass


class ClientUnavailableError(SentryCoreError):
    """Клиент или scope Sentry недоступен: событие не принято."""

    def __init__(self, message: str = "Клиент или scope Sentry недоступен") -> None:
        super().__init__(message)


class FlushTimeoutError(SentryCoreError):
    """Сброс событий в Sentry не завершился за отведённое время."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Таймаут flush() Sentry ({timeout:g} с)")
