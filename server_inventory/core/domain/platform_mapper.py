"""
Маппинг сырых данных платформы в Asset.

Сборщики (VMware, Hyper-V, Azure, ...) отдают словари с
произвольными ключами. Mapper забирает известные ключи,
остальные игнорирует.

Известные ключи:
    Name   -> asset_name
    OS     -> operating_system
    vCPU   -> vcpu
    Memory -> memory_gb

Пример:
    mapper = PlatformMapper()
    asset = mapper.from_platform_data("VMware", {"Name": "web-01", "vCPU": 4})
"""

from typing import Any, Dict, Iterable, List, Optional

from ..clock import Clock
from ..exceptions import InvalidArgumentError, format_error_for_log
from ..logging import get_logger
from ..validators import is_blank, to_int, to_number
from .asset import Asset

logger = get_logger(__name__)


class PlatformMapper:
    """
    Создание Asset из данных платформы.

    Args:
        clock: Источник времени для создаваемых активов
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock

    def from_platform_data(self, platform: str, data: Dict[str, Any]) -> Asset:
        """
        Создаёт Asset из словаря платформы.

        Отсутствующие (или пустые) ключи оставляют значения по умолчанию.
        После заполнения проставляется last_inventory и генерируется ID.

        Args:
            platform: Имя платформы (VMware, Hyper-V, Azure)
            data: Сырые данные

        Returns:
            Asset: Заполненный актив

        Raises:
            InvalidArgumentError: Пустая платформа или невалидное значение известного ключа
        """
        data = data or {}
        asset = Asset(clock=self._clock)
        asset.set_platform(platform)

        name = data.get("Name")
        if not is_blank(name):
            asset.set_identity(str(name))

        os_name = data.get("OS")
        if not is_blank(os_name):
            asset.set_operating_system(str(os_name))

        vcpu = data.get("vCPU")
        memory = data.get("Memory")
        asset.set_compute(
            vcpu=to_int(vcpu, "vCPU") if not is_blank(vcpu) else None,
            memory_gb=to_number(memory, "Memory") if not is_blank(memory) else None,
        )

        asset.mark_inventoried()
        asset.generate_asset_id()
        return asset

    def map_records(self, platform: str, records: Iterable[Dict[str, Any]]) -> List[Asset]:
        """
        Маппит набор записей одной платформы.

        Первая невалидная запись логируется и прерывает обработку.
        """
        assets = []
        for index, record in enumerate(records):
            try:
                assets.append(self.from_platform_data(platform, record))
            except InvalidArgumentError as e:
                logger.error(
                    f"Запись #{index} не смаплена: {format_error_for_log(e)}",
                    platform=platform,
                    operation="map_records",
                )
                raise
        logger.info(
            f"Смаплено записей: {len(assets)}",
            platform=platform,
            operation="map_records",
        )
        return assets
