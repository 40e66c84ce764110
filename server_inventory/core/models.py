"""
Data Models для Server Inventory.

Сетевые и вспомогательные модели, из которых собирается Asset/Server:
- IPConfiguration: адрес/маска/шлюз + флаг DHCP
- NetworkConnection: сеть + VLAN ID
- NetworkInterface: NIC с IP-конфигурациями и VLAN-подключениями
- PhysicalHost: физический хост (нужен для расчёта лицензий)
- ComplianceNote: запись журнала compliance

Все проверки выполняются в конструкторах и методах: объект
никогда не находится в невалидном состоянии.

Использование:
    from server_inventory.core.models import NetworkInterface

    nic = NetworkInterface("eth0", "00:50:56:12:34:56")
    nic.add_ip_address("10.10.10.50", "255.255.255.0")
    nic.add_network_connection("Production-Web", 100)
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, List, Dict, Any

from .exceptions import InvalidArgumentError
from .validators import (
    is_blank,
    require_ip,
    require_mac,
    require_non_blank,
    require_non_negative,
    require_vlan_id,
    to_int,
)

# Формат дат в экспорте и в журнале compliance (yyyy-MM-dd HH:mm:ss)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _enum_key(value: str) -> str:
    return re.sub(r"[\s_\-]", "", value).lower()


class ParsableEnum(str, Enum):
    """Enum с разбором строк без учёта регистра и разделителей."""

    @classmethod
    def parse(cls, value: Any, field: Optional[str] = None) -> "ParsableEnum":
        """
        Преобразует строку (имя или значение) в элемент enum.

        Raises:
            InvalidArgumentError: Неизвестное значение
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = _enum_key(value)
            for member in cls:
                if key in (_enum_key(member.value), _enum_key(member.name)):
                    return member
        raise InvalidArgumentError(
            f"Неизвестное значение {cls.__name__}",
            field=field or cls.__name__,
            value=value,
        )


class Environment(ParsableEnum):
    """Окружение."""
    DEVELOPMENT = "Development"
    STAGING = "Staging"
    PRODUCTION = "Production"


class ServerType(ParsableEnum):
    """Тип вычислительного ресурса."""
    VM = "VM"
    PHYSICAL = "Physical"
    CONTAINER = "Container"
    HYPERVISOR = "Hypervisor"
    BARE_METAL = "BareMetal"


class PowerState(ParsableEnum):
    """Состояние питания."""
    POWERED_ON = "PoweredOn"
    POWERED_OFF = "PoweredOff"
    SUSPENDED = "Suspended"
    UNKNOWN = "Unknown"


class LifecycleStatus(ParsableEnum):
    """Статус жизненного цикла. Вывод из эксплуатации — статус, не удаление."""
    PLANNED = "Planned"
    ACTIVE = "Active"
    MAINTENANCE = "Maintenance"
    DECOMMISSIONED = "Decommissioned"


class ComplianceStatus(ParsableEnum):
    """Статус соответствия политикам."""
    UNKNOWN = "Unknown"
    COMPLIANT = "Compliant"
    NON_COMPLIANT = "NonCompliant"
    EXEMPT = "Exempt"


class LicenseType(ParsableEnum):
    """Тип лицензии ОС."""
    NONE = "None"
    VOLUME = "Volume"
    OEM = "OEM"
    RETAIL = "Retail"
    SUBSCRIPTION = "Subscription"
    OPEN_SOURCE = "OpenSource"


class IPConfiguration:
    """
    IP-конфигурация интерфейса.

    Маска проверяется тем же валидатором что и адрес (только синтаксис).

    Attributes:
        address: IPv4/IPv6 адрес
        subnet_mask: Маска подсети
        gateway: Шлюз ("" если не задан)
        dhcp: Адрес получен по DHCP
    """

    def __init__(self, address: str, mask: str, dhcp: bool = False):
        self._address = require_ip(address, "address")
        self._subnet_mask = require_ip(mask, "mask")
        self._gateway = ""
        self._dhcp = bool(dhcp)

    @property
    def address(self) -> str:
        return self._address

    @property
    def subnet_mask(self) -> str:
        return self._subnet_mask

    @property
    def gateway(self) -> str:
        return self._gateway

    @property
    def dhcp(self) -> bool:
        return self._dhcp

    def set_gateway(self, gateway: Optional[str]) -> None:
        """
        Устанавливает шлюз.

        Пустое значение (или None) очищает шлюз.

        Raises:
            InvalidArgumentError: Непустой и невалидный адрес
        """
        if is_blank(gateway):
            self._gateway = ""
            return
        self._gateway = require_ip(gateway, "gateway")

    def set_dhcp(self, dhcp: bool) -> None:
        self._dhcp = bool(dhcp)

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь для экспорта."""
        return {
            "Address": self._address,
            "SubnetMask": self._subnet_mask,
            "Gateway": self._gateway,
            "DHCP": self._dhcp,
        }

    def __repr__(self) -> str:
        return f"IPConfiguration({self._address!r}, {self._subnet_mask!r})"


@dataclass(frozen=True)
class NetworkConnection:
    """
    Подключение интерфейса к сети (VLAN).

    Attributes:
        network_name: Имя сети (Production-Web)
        vlan_id: VLAN ID (1-4094)
        description: Описание
    """
    network_name: str
    vlan_id: int
    description: str = ""

    def __post_init__(self):
        require_non_blank(self.network_name, "network_name")
        require_vlan_id(self.vlan_id)
        if self.description is None:
            object.__setattr__(self, "description", "")

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь для экспорта."""
        return {
            "Name": self.network_name,
            "VLAN": self.vlan_id,
            "Description": self.description,
        }


class NetworkInterface:
    """
    Сетевой интерфейс.

    IP-конфигурации и подключения только добавляются, порядок
    добавления сохраняется. Удаления нет.

    Attributes:
        name: Имя интерфейса (eth0)
        mac_address: MAC-адрес
        enabled: Интерфейс включён
        speed: Скорость (10 Gbit)
    """

    def __init__(self, name: str, mac: str, enabled: bool = True, speed: str = ""):
        self._name = require_non_blank(name, "name")
        self._mac_address = require_mac(mac)
        self._enabled = bool(enabled)
        self._speed = speed or ""
        self._ip_configurations: List[IPConfiguration] = []
        self._network_connections: List[NetworkConnection] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def mac_address(self) -> str:
        return self._mac_address

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def speed(self) -> str:
        return self._speed

    @property
    def ip_configurations(self) -> Tuple[IPConfiguration, ...]:
        return tuple(self._ip_configurations)

    @property
    def network_connections(self) -> Tuple[NetworkConnection, ...]:
        return tuple(self._network_connections)

    @property
    def primary_address(self) -> str:
        """Адрес первой IP-конфигурации ("" если адресов нет)."""
        if self._ip_configurations:
            return self._ip_configurations[0].address
        return ""

    @property
    def primary_vlan(self) -> Optional[int]:
        """VLAN первого подключения (None если подключений нет)."""
        if self._network_connections:
            return self._network_connections[0].vlan_id
        return None

    def add_ip_address(self, address: str, mask: str) -> IPConfiguration:
        """
        Добавляет IP-конфигурацию.

        Args:
            address: IP-адрес
            mask: Маска подсети

        Returns:
            IPConfiguration: Добавленная конфигурация

        Raises:
            InvalidArgumentError: Невалидный адрес или маска
        """
        ip_config = IPConfiguration(address, mask)
        self._ip_configurations.append(ip_config)
        return ip_config

    def add_network_connection(
        self,
        name: str,
        vlan_id: int,
        description: str = "",
    ) -> NetworkConnection:
        """
        Добавляет подключение к сети.

        Raises:
            InvalidArgumentError: Пустое имя или VLAN вне 1-4094
        """
        connection = NetworkConnection(name, vlan_id, description)
        self._network_connections.append(connection)
        return connection

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)

    def set_speed(self, speed: str) -> None:
        self._speed = speed or ""

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь для экспорта."""
        return {
            "Name": self._name,
            "MACAddress": self._mac_address,
            "Enabled": self._enabled,
            "Speed": self._speed,
            "IPAddresses": [c.to_dict() for c in self._ip_configurations],
            "Networks": [c.to_dict() for c in self._network_connections],
        }

    def __repr__(self) -> str:
        return f"NetworkInterface({self._name!r}, {self._mac_address!r})"


@dataclass(frozen=True)
class PhysicalHost:
    """
    Физический хост (гипервизор).

    Attributes:
        name: Имя хоста
        cores: Количество физических ядер (для лицензирования)
        sockets: Количество сокетов
        cpu_model: Модель CPU
        hypervisor: Гипервизор (ESXi 8.0, Hyper-V)
        cluster: Кластер
    """
    name: str
    cores: int = 0
    sockets: int = 0
    cpu_model: str = ""
    hypervisor: str = ""
    cluster: str = ""

    def __post_init__(self):
        require_non_blank(self.name, "name")
        require_non_negative(self.cores, "cores")
        require_non_negative(self.sockets, "sockets")
        for field in ("cores", "sockets"):
            value = getattr(self, field)
            if isinstance(value, float):
                raise InvalidArgumentError(f"{field} должен быть целым", field=field, value=value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhysicalHost":
        """
        Создаёт PhysicalHost из словаря платформы.

        Raises:
            InvalidArgumentError: Нечисловые или дробные cores/sockets
        """
        cores = data.get("Cores", data.get("cores"))
        sockets = data.get("Sockets", data.get("sockets"))
        return cls(
            name=data.get("Name") or data.get("name") or "",
            cores=to_int(cores, "cores") if not is_blank(cores) else 0,
            sockets=to_int(sockets, "sockets") if not is_blank(sockets) else 0,
            cpu_model=data.get("CPUModel") or data.get("cpu_model") or "",
            hypervisor=data.get("Hypervisor") or data.get("hypervisor") or "",
            cluster=data.get("Cluster") or data.get("cluster") or "",
        )


@dataclass(frozen=True)
class ComplianceNote:
    """
    Запись журнала compliance. Неизменяемая.

    str(note) -> "[2025-01-15 10:30:00] Patched CVE-2024-1234"
    """
    created_at: datetime
    text: str

    def __str__(self) -> str:
        return f"[{self.created_at.strftime(TIMESTAMP_FORMAT)}] {self.text}"
