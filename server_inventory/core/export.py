"""
Экспорт активов в плоскую структуру для внешней системы учёта.

Система учёта принимает только плоские словари, поэтому интерфейсы
вкладываются одним полем в виде JSON строки.

Пример использования:
    from server_inventory.core.export import export_assets

    payload = export_assets(assets)  # List[Dict[str, Any]]
"""

import json
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, TYPE_CHECKING

from .config_schema import ExportConfig
from .logging import get_logger

if TYPE_CHECKING:
    from .domain.asset import Asset
    from .models import NetworkInterface

logger = get_logger(__name__)

# Канонический набор полей экспорта (порядок сохраняется)
CANONICAL_FIELDS = (
    "AssetID",
    "Name",
    "FQDN",
    "Type",
    "Platform",
    "Cluster",
    "Datacenter",
    "OperatingSystem",
    "OSVersion",
    "Environment",
    "Owner",
    "Application",
    "CostCenter",
    "PhysicalHost",
    "PhysicalHostCores",
    "vCPU",
    "MemoryGB",
    "PowerState",
    "PrimaryIP",
    "PrimaryVLAN",
    "AuthDomain",
    "ComplianceStatus",
    "LifecycleStatus",
    "RequiresLicensing",
    "LicensingCores",
    "LastInventory",
)


def resolve_settings(settings: Optional[ExportConfig] = None) -> ExportConfig:
    """Возвращает переданные настройки или секцию export глобального конфига."""
    if settings is not None:
        return settings
    from ..config import get_export_config
    return get_export_config()


def format_timestamp(value: Optional[datetime], fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """Форматирует дату для экспорта ("" если не задана)."""
    if value is None:
        return ""
    return value.strftime(fmt)


def serialize_interfaces(
    interfaces: Sequence["NetworkInterface"],
    ensure_ascii: bool = False,
) -> str:
    """Сериализует интерфейсы в JSON строку."""
    return json.dumps(
        [nic.to_dict() for nic in interfaces],
        ensure_ascii=ensure_ascii,
    )


def build_export_mapping(
    canonical: Dict[str, Any],
    interfaces: Sequence["NetworkInterface"],
    custom_attributes: Dict[str, Any],
    settings: ExportConfig,
) -> Dict[str, Any]:
    """
    Собирает итоговый словарь экспорта.

    Порядок: канонические поля → интерфейсы (если есть) → custom attributes.
    Custom attributes добавляются последними и перезаписывают совпадающие ключи.
    """
    mapping = dict(canonical)
    if interfaces and settings.include_interfaces:
        mapping[settings.interfaces_field] = serialize_interfaces(
            interfaces, ensure_ascii=settings.json_ensure_ascii
        )
    mapping.update(custom_attributes)
    return mapping


def export_assets(
    assets: Iterable["Asset"],
    settings: Optional[ExportConfig] = None,
) -> List[Dict[str, Any]]:
    """
    Экспортирует набор активов.

    Невалидные активы (is_valid() == False) пропускаются с предупреждением,
    если settings.skip_invalid включён.

    Returns:
        List[Dict]: Словари для отправки в систему учёта
    """
    settings = resolve_settings(settings)
    result = []
    skipped = 0
    for asset in assets:
        if settings.skip_invalid and not asset.is_valid():
            skipped += 1
            logger.warning(
                "Актив не готов к экспорту, пропускаем",
                asset=asset.asset_id or asset.asset_name,
                operation="export",
            )
            continue
        result.append(asset.to_export_mapping(settings))

    logger.info(
        f"Экспортировано активов: {len(result)}, пропущено: {skipped}",
        operation="export",
    )
    return result
