"""
Типизированные исключения для Server Inventory.

Иерархия:
    InventoryError (базовый)
    ├── InvalidArgumentError (невалидный аргумент: пустая строка, MAC, IP, VLAN)
    ├── InvalidStateError (операция недопустима в текущем состоянии)
    └── ConfigError (конфигурация)

Пример использования:
    from server_inventory.core.exceptions import InvalidArgumentError

    try:
        nic.add_network_connection("Production-Web", 5000)
    except InvalidArgumentError as e:
        logger.error(f"VLAN: {e.field} - {e.message}")
"""

from typing import Optional, Any


class InventoryError(Exception):
    """
    Базовое исключение для всех ошибок Server Inventory.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов/отчётов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(InventoryError, ValueError):
    """
    Невалидный аргумент конструктора или метода.

    Attributes:
        field: Имя параметра с ошибкой
        value: Значение которое не прошло валидацию

    Пример:
        raise InvalidArgumentError("Invalid MAC address", field="mac", value="zz:zz")
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[dict] = None,
    ):
        self.field = field
        self.value = value
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)[:100]  # Ограничиваем размер
        super().__init__(message, details)


class InvalidStateError(InventoryError):
    """
    Операция недопустима для текущего состояния объекта.

    Attributes:
        state: Текущее состояние (например тип сервера)

    Пример:
        raise InvalidStateError("Virtualization details require VM", state="Physical")
    """

    def __init__(
        self,
        message: str,
        state: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.state = state
        details = details or {}
        if state:
            details["state"] = state
        super().__init__(message, details)


class ConfigError(InventoryError):
    """
    Ошибка конфигурации.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("Invalid value", config_file="config.yaml", key="export.timestamp_format")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, InventoryError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"
