"""
Domain Layer для Server Inventory.

- Asset: корневой агрегат инвентаризации
- Server: строгий вариант Asset (обязательные поля при создании)
- PlatformMapper: создание Asset из сырых данных платформы

Использование:
    from server_inventory.core.domain import PlatformMapper

    mapper = PlatformMapper()
    asset = mapper.from_platform_data("VMware", raw_record)
"""

from .asset import Asset, sanitize_name
from .server import Server
from .platform_mapper import PlatformMapper

__all__ = [
    "Asset",
    "Server",
    "PlatformMapper",
    "sanitize_name",
]
