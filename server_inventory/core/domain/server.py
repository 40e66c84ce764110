"""
Server — строгий вариант Asset.

Отличия от Asset:
- Имя, стек приложения и владелец обязательны уже при создании
- Детали виртуализации (хост, гипервизор, hardware ID) допустимы только для VM
- Аппаратные характеристики должны быть >= 1

Использование:
    server = Server("web-server-01", "LAMP", "Web Team")
    server.set_virtualization_details("esx-01", "ESXi 8.0", "vm-1234")
    server.set_hardware_specs(cpu_cores=4, memory_gb=16, storage_gb=100)
"""

from typing import Any, Dict, Optional

from ..clock import Clock
from ..config_schema import ExportConfig
from ..exceptions import InvalidArgumentError, InvalidStateError
from ..logging import get_logger
from ..models import ServerType
from ..validators import require_non_blank, require_positive
from .asset import Asset

logger = get_logger(__name__)


class Server(Asset):
    """
    Сервер с обязательными атрибутами.

    Args:
        name: Имя сервера
        application_stack: Стек приложения (LAMP, .NET, Java). Экспортируется
            как ApplicationStack и не заполняет Application: бизнес-приложение
            задаётся отдельно через set_organization(application=...)
        owner: Команда-владелец
        server_type: Тип (по умолчанию VM)
        clock: Источник времени

    Raises:
        InvalidArgumentError: Пустое имя, стек или владелец
    """

    def __init__(
        self,
        name: str,
        application_stack: str,
        owner: str,
        server_type: Any = ServerType.VM,
        clock: Optional[Clock] = None,
    ):
        require_non_blank(name, "name")
        require_non_blank(application_stack, "application_stack")
        require_non_blank(owner, "owner")
        parsed_type = ServerType.parse(server_type, "server_type")

        super().__init__(clock=clock)

        self._application_stack = application_stack
        self._virtual_host = ""
        self._hypervisor = ""
        self._hardware_id = ""
        self._cpu_cores = 0

        self._asset_name = name
        self._owning_team = owner
        self._asset_type = parsed_type

    @property
    def application_stack(self) -> str:
        return self._application_stack

    @property
    def server_type(self) -> ServerType:
        return self._asset_type

    @property
    def virtual_host(self) -> str:
        return self._virtual_host

    @property
    def hypervisor(self) -> str:
        return self._hypervisor

    @property
    def hardware_id(self) -> str:
        return self._hardware_id

    @property
    def cpu_cores(self) -> int:
        return self._cpu_cores

    def set_application_stack(self, application_stack: str) -> None:
        self._application_stack = require_non_blank(application_stack, "application_stack")
        self._touch()

    def set_server_type(self, server_type: Any) -> None:
        """
        Меняет тип сервера.

        При уходе с VM детали виртуализации очищаются.
        """
        self._apply_asset_type(ServerType.parse(server_type, "server_type"))
        self._touch()

    def _apply_asset_type(self, asset_type: ServerType) -> None:
        if asset_type != ServerType.VM and self._virtual_host:
            logger.debug(
                f"Тип изменён на {asset_type.value}, детали виртуализации очищены",
                asset=self._asset_name,
                operation="set_server_type",
            )
            self._virtual_host = ""
            self._hypervisor = ""
            self._hardware_id = ""
        self._asset_type = asset_type

    def set_virtualization_details(self, virtual_host: str, hypervisor: str, hardware_id: str) -> None:
        """
        Устанавливает хост виртуализации, гипервизор и hardware ID.

        Raises:
            InvalidStateError: Тип сервера не VM
            InvalidArgumentError: Пустой аргумент (с именем параметра)
        """
        if self._asset_type != ServerType.VM:
            raise InvalidStateError(
                "Детали виртуализации допустимы только для VM",
                state=self._asset_type.value,
            )
        require_non_blank(virtual_host, "virtual_host")
        require_non_blank(hypervisor, "hypervisor")
        require_non_blank(hardware_id, "hardware_id")

        self._virtual_host = virtual_host
        self._hypervisor = hypervisor
        self._hardware_id = hardware_id
        self._touch()

    def set_hardware_specs(self, cpu_cores: int, memory_gb: float, storage_gb: float) -> None:
        """
        Устанавливает аппаратные характеристики.

        Raises:
            InvalidArgumentError: Значение < 1 (с именем параметра)
        """
        require_positive(cpu_cores, "cpu_cores")
        if isinstance(cpu_cores, float):
            raise InvalidArgumentError("cpu_cores должен быть целым", field="cpu_cores", value=cpu_cores)
        require_positive(memory_gb, "memory_gb")
        require_positive(storage_gb, "storage_gb")

        self._cpu_cores = cpu_cores
        self._memory_gb = memory_gb
        self._storage_gb = storage_gb
        self._touch()

    def _canonical_fields(self, settings: ExportConfig) -> Dict[str, Any]:
        fields = super()._canonical_fields(settings)
        fields.update({
            "ApplicationStack": self._application_stack,
            "VirtualHost": self._virtual_host,
            "Hypervisor": self._hypervisor,
            "HardwareID": self._hardware_id,
            "CPUCores": self._cpu_cores,
            "StorageGB": self._storage_gb,
        })
        return fields
