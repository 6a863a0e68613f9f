"""
Config — настройки expensebook core

pydantic-settings: значения берутся из переменных окружения EXPENSEBOOK_*
(или файла .env), значения по умолчанию совпадают со встроенными лимитами.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expensebook.core.numeric_limits import MAX_AMOUNT, MAX_DECIMAL_PLACES, AmountLimits

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CoreSettings(BaseSettings):
    """Настройки проверки сумм и логирования."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_amount: float = Field(
        MAX_AMOUNT,
        gt=0,
        description="Максимальная сумма по модулю в поле amount",
    )
    max_decimal_places: int = Field(
        MAX_DECIMAL_PLACES,
        ge=0,
        le=6,
        description="Цифр после десятичной точки в литерале суммы",
    )
    log_level: str = Field("INFO", description="Уровень root логгера")
    json_logs: bool = Field(False, description="JSON вместо консольных строк")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {v!r}")
        return level

    def amount_limits(self) -> AmountLimits:
        return AmountLimits.from_settings(self)


@lru_cache
def get_settings() -> CoreSettings:
    """Кэшированный экземпляр настроек; get_settings.cache_clear() перечитывает окружение."""
    return CoreSettings()
