"""
Structured Logging для Server Inventory.

Библиотека только пишет в логгеры, handlers настраивает вызывающий код
(скрипт сбора, синхронизация с системой учёта).

Пример использования:
    from server_inventory.core.logging import setup_logging, get_logger

    # Настройка в начале программы
    setup_logging(json_format=True)

    # Логирование с контекстом
    logger = get_logger(__name__)
    logger.info("Экспорт актива", asset="VMware_Production_web_01", platform="VMware")

Формат вывода (JSON):
    {"timestamp": "2025-12-27T10:30:15.123456", "level": "INFO",
     "message": "Экспорт актива", "asset": "VMware_Production_web_01",
     "platform": "VMware"}
"""

import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, List


class LogLevel(str, Enum):
    """Уровни логирования."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LogConfig:
    """
    Конфигурация логирования.

    Attributes:
        level: Уровень логирования (DEBUG, INFO, etc.)
        json_format: JSON формат (True) или human-readable (False)
        console: Выводить в консоль
        file_path: Путь к файлу логов (None = без файла)
    """
    level: int = logging.INFO
    json_format: bool = False
    console: bool = True
    file_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogConfig":
        """Создаёт конфигурацию из словаря (секция logging в config.yaml)."""
        level = data.get("level", "INFO")
        if isinstance(level, str):
            level = getattr(logging, level.upper(), logging.INFO)

        return cls(
            level=level,
            json_format=data.get("json_format", False),
            console=data.get("console", True),
            file_path=data.get("file_path") or None,
        )


class JSONFormatter(logging.Formatter):
    """
    JSON форматтер для logging.

    Стандартные поля: timestamp, level, message, logger.
    Дополнительные поля из extra логируются как есть.
    """

    # Поля logging.LogRecord которые не нужно включать в JSON
    RESERVED_ATTRS = {
        "args", "asctime", "created", "exc_info", "exc_text",
        "filename", "funcName", "levelname", "levelno", "lineno",
        "module", "msecs", "msg", "name", "pathname", "process",
        "processName", "relativeCreated", "stack_info", "thread",
        "threadName", "taskName", "message",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Форматирует запись лога в JSON."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        for key, value in record.__dict__.items():
            if key not in self.RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable форматтер с поддержкой extra полей.

    Формат: TIMESTAMP - LEVEL - MESSAGE (asset=X, platform=Y)
    """

    EXTRA_FIELDS = ("asset", "platform", "operation", "field")

    def format(self, record: logging.LogRecord) -> str:
        """Форматирует запись для человека."""
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        message = record.getMessage()

        extras = []
        for attr in self.EXTRA_FIELDS:
            value = getattr(record, attr, None)
            if value:
                extras.append(f"{attr}={value}")
        extra_str = f" ({', '.join(extras)})" if extras else ""

        result = f"{timestamp} - {level} - {message}{extra_str}"

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


class StructuredLogger:
    """
    Обёртка над logging.Logger с поддержкой структурированных полей.

    Позволяет логировать с именованными параметрами:
        logger.info("Интерфейс добавлен", asset="web-01", operation="add_nic")
    """

    def __init__(self, name: str, default_extra: Optional[Dict[str, Any]] = None):
        self._logger = logging.getLogger(name)
        self._default_extra = default_extra or {}

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        extra = {**self._default_extra, **kwargs}
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log DEBUG."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log INFO."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log WARNING."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log ERROR."""
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log ERROR с traceback."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """
        Создаёт новый логгер с дополнительными default полями.

        Example:
            asset_logger = logger.bind(asset="web-01", platform="VMware")
            asset_logger.debug("ID сгенерирован")
        """
        new_extra = {**self._default_extra, **kwargs}
        return StructuredLogger(self._logger.name, default_extra=new_extra)

    @property
    def name(self) -> str:
        return self._logger.name


# Кэш логгеров
_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """
    Получает или создаёт StructuredLogger.

    Args:
        name: Имя логгера (обычно __name__)
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def _reset_root_handlers(root_logger: logging.Logger) -> None:
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)


def setup_logging(
    json_format: bool = False,
    level: int = logging.INFO,
    stream: Any = None,
) -> None:
    """
    Универсальная настройка логирования в поток.

    Args:
        json_format: True для JSON, False для human-readable
        level: Уровень логирования
        stream: Поток вывода (по умолчанию sys.stderr)
    """
    if stream is None:
        stream = sys.stderr

    root_logger = logging.getLogger()
    _reset_root_handlers(root_logger)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())

    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def setup_logging_from_config(config: LogConfig) -> None:
    """
    Настраивает логирование из конфигурации.

    Консоль всегда human-readable, файл — в выбранном формате.
    """
    root_logger = logging.getLogger()
    _reset_root_handlers(root_logger)

    handlers: List[logging.Handler] = []

    if config.console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(HumanFormatter())
        handlers.append(console_handler)

    if config.file_path:
        log_path = Path(config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(config.level)
        file_handler.setFormatter(JSONFormatter() if config.json_format else HumanFormatter())
        handlers.append(file_handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    root_logger.setLevel(config.level)
