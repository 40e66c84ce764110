"""
Pydantic схемы для валидации config.yaml.

Валидация происходит при загрузке конфигурации.
Ошибки валидации выбрасывают ConfigError.

Пример использования:
    from server_inventory.core.config_schema import validate_config

    config_dict = yaml.safe_load(open("config.yaml"))
    validated = validate_config(config_dict)  # raises ConfigError on failure
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .exceptions import ConfigError


class ExportConfig(BaseModel):
    """Настройки экспорта во внешнюю систему учёта."""
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    interfaces_field: str = Field(default="NetworkInterfaces", min_length=1)
    include_interfaces: bool = True
    skip_invalid: bool = True
    json_ensure_ascii: bool = False

    @field_validator("timestamp_format")
    @classmethod
    def validate_timestamp_format(cls, v: str) -> str:
        """Проверяет что формат содержит директивы strftime."""
        if "%" not in v:
            raise PydanticCustomError(
                "invalid_timestamp_format",
                "timestamp_format должен содержать директивы strftime (%Y, %m, ...)",
            )
        datetime(2000, 1, 1).strftime(v)
        return v


class LoggingConfig(BaseModel):
    """Настройки логирования."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_format: bool = False
    console: bool = True
    file_path: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """debug -> DEBUG (как в LogConfig.from_dict)."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class AppConfig(BaseModel):
    """Полная конфигурация приложения."""
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _to_config_error(e: ValidationError, config_file: str, prefix: str = "") -> ConfigError:
    """Форматирует ошибку Pydantic в читаемый ConfigError."""
    key = None
    error_msg = str(e)
    errors = e.errors()
    if errors:
        first_error = errors[0]
        loc = [prefix] if prefix else []
        loc.extend(str(x) for x in first_error.get("loc", []))
        key = ".".join(loc)
        msg = first_error.get("msg", "Unknown error")
        error_msg = f"{key}: {msg}"

    return ConfigError(
        message=f"Ошибка валидации конфигурации: {error_msg}",
        config_file=config_file,
        key=key,
    )


def validate_config(config_dict: dict, config_file: str = "config.yaml") -> AppConfig:
    """
    Валидирует словарь конфигурации.

    Args:
        config_dict: Словарь из YAML
        config_file: Имя файла для сообщения об ошибке

    Returns:
        AppConfig: Валидированная конфигурация

    Raises:
        ConfigError: При ошибке валидации
    """
    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise _to_config_error(e, config_file) from e


def validate_export_config(export_dict: dict, config_file: str = "config.yaml") -> ExportConfig:
    """
    Валидирует только секцию export.

    Экспорт не зависит от остальных секций, поэтому ошибка в logging
    не мешает выгрузке.

    Raises:
        ConfigError: При ошибке валидации (key начинается с "export.")
    """
    try:
        return ExportConfig.model_validate(export_dict if export_dict is not None else {})
    except ValidationError as e:
        raise _to_config_error(e, config_file, prefix="export") from e
