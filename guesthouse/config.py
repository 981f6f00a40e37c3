from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DAYS_IN_WEEK: int = 7

# Логи
BYTES_IN_MB: int = 1024**2
LOG_FILE_SIZE_MB: int = 5
COUNT_FILES: int = 10
MAX_BYTES: int = BYTES_IN_MB * LOG_FILE_SIZE_MB

# Пути
BASE_DIR: Path = Path(__file__).resolve().parent.parent


class AppSettings(BaseSettings):
    """Настройки приложения."""

    TITLE: str = Field(default='Guest House Availability')
    DEBUG: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix='APP_',
        env_file='.env',
        env_file_encoding='utf-8',
    )


class AvailabilitySettings(BaseSettings):
    """Настройки проверки доступности номеров."""

    # False - старое поведение фронтенда: битая дата не даёт пересечения
    STRICT_DATES: bool = Field(default=True)
    WEEK_STARTS_ON_SUNDAY: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix='AVAILABILITY_',
        env_file='.env',
        env_file_encoding='utf-8',
    )


class LoggingSettings(BaseSettings):
    """Настройки логирования."""

    DIR: Path = Field(default=BASE_DIR / 'logs')
    LEVEL: str = Field(default='INFO')

    model_config = SettingsConfigDict(
        env_prefix='LOGGING_',
        env_file='.env',
        env_file_encoding='utf-8',
    )


class Settings(BaseSettings):
    """Корневой класс настроек."""

    app: AppSettings = AppSettings()
    availability: AvailabilitySettings = AvailabilitySettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
    )


settings = Settings()
