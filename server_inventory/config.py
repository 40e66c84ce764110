"""
Загрузчик конфигурации из config.yaml.

Предоставляет доступ к настройкам через точку:
    config.export.timestamp_format
    config.export.interfaces_field
    config.logging.level

Порядок: значения по умолчанию → YAML → переменные окружения.
"""

import os
import logging
from typing import Any, Optional

from .core.config_schema import AppConfig, ExportConfig, validate_config, validate_export_config

logger = logging.getLogger(__name__)

# Путь к файлу конфигурации
CONFIG_FILE = os.path.join(os.path.dirname(__file__), "config.yaml")

# Переменные окружения -> (секция, ключ)
ENV_OVERRIDES = {
    "SERVER_INVENTORY_TIMESTAMP_FORMAT": ("export", "timestamp_format"),
    "SERVER_INVENTORY_LOG_LEVEL": ("logging", "level"),
}


class ConfigSection:
    """Секция конфигурации с доступом через точку."""

    def __init__(self, data: dict = None):
        self._data = data or {}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            super().__setattr__(name, value)
        else:
            self._data[name] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Получить значение с дефолтом."""
        return self._data.get(key, default)

    def __repr__(self) -> str:
        return f"ConfigSection({self._data})"


class Config:
    """
    Главный класс конфигурации.

    Загружает настройки из config.yaml и предоставляет доступ через точку.

    Пример:
        config.export.timestamp_format  # "%Y-%m-%d %H:%M:%S"
        config.logging.level            # "INFO"
    """

    def __init__(self, config_file: Optional[str] = None):
        self._config_file = ""
        self._data = self._get_defaults()
        self._load_yaml(config_file)
        self._load_env()

    def _get_defaults(self) -> dict:
        """Значения по умолчанию."""
        return AppConfig().model_dump()

    def _load_yaml(self, config_file: Optional[str] = None) -> None:
        """Загружает настройки из YAML файла."""
        if not config_file:
            # Ищем config.yaml
            search_paths = [
                CONFIG_FILE,
                "config.yaml",
                "config.yml",
                ".server_inventory.yaml",
            ]
            for path in search_paths:
                if os.path.exists(path):
                    config_file = path
                    break

        if not config_file or not os.path.exists(config_file):
            return

        import yaml

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ошибка чтения {config_file}: {e}")
            return

        if not isinstance(yaml_data, dict):
            logger.warning(f"Ожидался словарь в {config_file}, пропускаем")
            return

        # Мержим с дефолтами
        self._merge_dict(self._data, yaml_data)
        self._config_file = config_file
        logger.debug(f"Конфигурация загружена из {config_file}")

    def _load_env(self) -> None:
        """Загружает настройки из переменных окружения."""
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                self._data.setdefault(section, {})[key] = value

    def _merge_dict(self, base: dict, override: dict) -> None:
        """Рекурсивно мержит словари."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_dict(base[key], value)
            else:
                base[key] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def validated(self) -> AppConfig:
        """
        Возвращает валидированную конфигурацию.

        Raises:
            ConfigError: Значения не проходят схему
        """
        return validate_config(self._data, config_file=self._config_file or "config.yaml")

    def export_settings(self) -> ExportConfig:
        """
        Валидированная секция export.

        Остальные секции не проверяются: экспорту они не нужны.

        Raises:
            ConfigError: Значения export не проходят схему
        """
        return validate_export_config(
            self._data.get("export"),
            config_file=self._config_file or "config.yaml",
        )

    def reload(self, config_file: Optional[str] = None) -> None:
        """Перезагружает конфигурацию."""
        self._config_file = ""
        self._data = self._get_defaults()
        self._load_yaml(config_file)
        self._load_env()


# Глобальный экземпляр
config = Config()


def get_export_config() -> ExportConfig:
    """Валидированная секция export глобального экземпляра."""
    return config.export_settings()
