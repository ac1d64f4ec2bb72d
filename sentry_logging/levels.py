"""Маппинг уровней логирования на уровни Sentry и фильтры уровней."""
from types import MappingProxyType
from typing import Mapping, Protocol, Union

from sentry_logging.models import LogLevel, SentryLevel


# Panic и Fatal отправляются как обычные ошибки: эскалация и завершение
# процесса остаются за системой логирования, а не за адаптером.
LEVEL_MAP: Mapping[LogLevel, SentryLevel] = MappingProxyType({
    LogLevel.DEBUG: SentryLevel.DEBUG,
    LogLevel.INFO: SentryLevel.INFO,
    LogLevel.WARN: SentryLevel.WARNING,
    LogLevel.ERROR: SentryLevel.ERROR,
    LogLevel.DPANIC: SentryLevel.ERROR,
    LogLevel.PANIC: SentryLevel.ERROR,
    LogLevel.FATAL: SentryLevel.ERROR,
})

FALLBACK_LEVEL = SentryLevel.ERROR


def to_sentry_level(level: Union[LogLevel, str]) -> SentryLevel:
    """Возвращает уровень Sentry для уровня логирования.

    Args:
        level: Уровень записи (LogLevel или его строковое значение)

    Returns:
        Уровень Sentry; для неизвестных уровней - FALLBACK_LEVEL
    """
    try:
        return LEVEL_MAP[LogLevel(level)]
    except (ValueError, TypeError, KeyError):
        return FALLBACK_LEVEL


class LevelEnabler(Protocol):
    """Интерфейс фильтра уровней."""

    def enabled(self, level: LogLevel) -> bool:
        """Проверяет, нужно ли обрабатывать записи данного уровня.

        Args:
            level: Уровень записи

        Returns:
            True если записи этого уровня обрабатываются
        """
        ...


class LevelThreshold:
    """Фильтр, пропускающий записи не ниже минимального уровня."""

    def __init__(self, min_level: Union[LogLevel, str] = LogLevel.ERROR) -> None:
        """Инициализация фильтра.

        Args:
            min_level: Минимальный уровень для обработки
        """
        self.min_level = LogLevel(min_level)

    def enabled(self, level: LogLevel) -> bool:
        try:
            return LogLevel(level).order >= self.min_level.order
        except (ValueError, TypeError):
            return False

    def __repr__(self) -> str:
        return f"LevelThreshold({self.min_level.value!r})"
