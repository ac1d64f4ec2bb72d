"""Конфигурация отправки логов в Sentry из переменных окружения.

Примеры использования:
    ```python
    from sentry_logging.config import get_config

    config = get_config()

    dsn = config.dsn
    level = config.level          # LogLevel, по умолчанию ERROR
    prefix = config.tag_prefix    # "#"
    ```

Переменные окружения:
    - SENTRY_DSN: DSN проекта Sentry (без него события не отправляются)
    - SENTRY_ENVIRONMENT: окружение (development/production)
    - SENTRY_RELEASE: версия релиза
    - SENTRY_LOG_LEVEL: минимальный уровень (debug/info/warn/error/...)
    - SENTRY_TAG_PREFIX: префикс полей-тегов
    - SENTRY_LOGGER: имя логгера, к которому подключается handler ("" - root)
    - SENTRY_DEBUG: режим отладки SDK

Примечания:
    - Конфигурация кэшируется (lru_cache), для перечитывания
      используйте get_config.cache_clear()
    - Уровень принимает и имена из logging: warning -> warn, critical -> fatal
"""
import os
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sentry_logging.models import LogLevel


_LEVEL_ALIASES = {
    "warning": "warn",
    "critical": "fatal",
}


class SentryLoggingConfig(BaseModel):
    """Настройки адаптера Sentry."""

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    dsn: Optional[str] = Field(default=None, alias="SENTRY_DSN")
    environment: str = Field(default="development", alias="SENTRY_ENVIRONMENT")
    release: Optional[str] = Field(default=None, alias="SENTRY_RELEASE")
    debug: bool = Field(default=False, alias="SENTRY_DEBUG")

    # Логирование
    level: LogLevel = Field(default=LogLevel.ERROR, alias="SENTRY_LOG_LEVEL")
    tag_prefix: str = Field(default="#", alias="SENTRY_TAG_PREFIX")
    logger_name: str = Field(default="", alias="SENTRY_LOGGER")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, LogLevel):
            name = value.strip().lower()
            return _LEVEL_ALIASES.get(name, name)
        return value

    @classmethod
    def from_env(cls) -> 'SentryLoggingConfig':
        """Создаёт конфигурацию из переменных окружения.

        Returns:
            Экземпляр SentryLoggingConfig
        """
        env_dict: Dict[str, Any] = {}
        for field_name, field_info in cls.model_fields.items():
            alias = field_info.alias or field_name.upper()
            value = os.getenv(alias)

            if value is None:
                continue

            if field_info.annotation is bool:
                env_dict[field_name] = value.lower() in ('true', '1', 'yes', 'on')
            else:
                env_dict[field_name] = value

        return cls(**env_dict)

    @classmethod
    def for_dev(cls) -> 'SentryLoggingConfig':
        """Конфигурация для разработки: всё от WARN, отладка SDK."""
        return cls(
            environment="development",
            level=LogLevel.WARN,
            debug=True,
        )

    @classmethod
    def for_prod(cls) -> 'SentryLoggingConfig':
        """Конфигурация для продакшена: только ошибки."""
        return cls(
            environment="production",
            level=LogLevel.ERROR,
            debug=False,
        )

    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache(maxsize=1)
def get_config() -> SentryLoggingConfig:
    """Возвращает кэшированную конфигурацию из переменных окружения.

    Returns:
        Экземпляр SentryLoggingConfig
    """
    return SentryLoggingConfig.from_env()
