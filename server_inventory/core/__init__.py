"""
Core модули Server Inventory.

- validators: проверка MAC, IP, VLAN
- models: сетевые интерфейсы, физические хосты, enums
- domain: Asset, Server, PlatformMapper
- export: плоский экспорт для системы учёта
- clock: источник времени
- Structured Logging: JSON/Human-readable логирование
- exceptions: типизированные ошибки
"""

from .clock import Clock, SystemClock, FixedClock
from .exceptions import (
    InventoryError,
    InvalidArgumentError,
    InvalidStateError,
    ConfigError,
    format_error_for_log,
)
from .validators import (
    validate_mac,
    validate_ip,
    validate_vlan_id,
    is_blank,
)
from .models import (
    Environment,
    ServerType,
    PowerState,
    LifecycleStatus,
    ComplianceStatus,
    LicenseType,
    IPConfiguration,
    NetworkConnection,
    NetworkInterface,
    PhysicalHost,
    ComplianceNote,
)
from .logging import (
    get_logger,
    setup_logging,
    setup_logging_from_config,
    StructuredLogger,
    JSONFormatter,
    HumanFormatter,
    LogLevel,
    LogConfig,
)
from .domain import Asset, Server, PlatformMapper
from .export import export_assets, CANONICAL_FIELDS

__all__ = [
    # Clock
    "Clock",
    "SystemClock",
    "FixedClock",
    # Exceptions
    "InventoryError",
    "InvalidArgumentError",
    "InvalidStateError",
    "ConfigError",
    "format_error_for_log",
    # Validators
    "validate_mac",
    "validate_ip",
    "validate_vlan_id",
    "is_blank",
    # Models
    "Environment",
    "ServerType",
    "PowerState",
    "LifecycleStatus",
    "ComplianceStatus",
    "LicenseType",
    "IPConfiguration",
    "NetworkConnection",
    "NetworkInterface",
    "PhysicalHost",
    "ComplianceNote",
    # Structured Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
    "StructuredLogger",
    "JSONFormatter",
    "HumanFormatter",
    "LogLevel",
    "LogConfig",
    # Domain
    "Asset",
    "Server",
    "PlatformMapper",
    # Export
    "export_assets",
    "CANONICAL_FIELDS",
]
