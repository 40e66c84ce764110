"""
Asset — корневой агрегат инвентаризации.

Вычислительный ресурс (VM, физический сервер, контейнер, гипервизор)
с сетевыми интерфейсами, данными ОС, организационными метаданными,
жизненным циклом и журналом compliance.

Все поля доступны только на чтение. Изменение — через методы set_*,
каждый из которых сначала проверяет все аргументы, потом применяет
изменения и обновляет last_modified. Ошибка валидации оставляет
объект без изменений.

В методах set_* аргумент None означает "не менять".

Использование:
    asset = Asset()
    asset.set_identity("web-server-01")
    asset.set_platform("VMware")
    asset.set_organization(application="Portal", owning_team="Web", environment="Production")
    asset.generate_asset_id()  # VMware_Production_web_server_01
"""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..clock import Clock, DEFAULT_CLOCK
from ..config_schema import ExportConfig
from ..exceptions import InvalidArgumentError
from ..export import build_export_mapping, format_timestamp, resolve_settings
from ..logging import get_logger
from ..models import (
    ComplianceNote,
    ComplianceStatus,
    Environment,
    LicenseType,
    LifecycleStatus,
    NetworkInterface,
    PhysicalHost,
    PowerState,
    ServerType,
)
from ..validators import is_blank, require_non_blank, require_non_negative

logger = get_logger(__name__)

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def sanitize_name(name: str) -> str:
    """Заменяет всё кроме [A-Za-z0-9] на "_"."""
    return _NON_ALNUM.sub("_", name or "")


def _optional_str(value: Optional[str], field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{field} должен быть строкой", field=field, value=value)
    return value


class Asset:
    """
    Запись инвентаризации вычислительного ресурса.

    Args:
        clock: Источник времени (по умолчанию системное время)
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or DEFAULT_CLOCK
        now = self._clock.now()

        # Идентификация
        self._asset_id = ""
        self._asset_name = ""
        self._fqdn = ""
        self._asset_type = ServerType.VM

        # Размещение
        self._platform = ""
        self._cluster = ""
        self._datacenter = ""

        # Ресурсы
        self._vcpu = 0
        self._memory_gb = 0
        self._storage_gb = 0
        self._power_state = PowerState.UNKNOWN

        # Физический хост
        self._physical_host_name = ""
        self._physical_host_cores = 0
        self._physical_host_sockets = 0
        self._physical_host_cpu_model = ""

        # ОС и лицензирование
        self._operating_system = ""
        self._os_version = ""
        self._os_edition = ""
        self._license_type = LicenseType.NONE
        self._requires_licensing = False

        # Сеть
        self._network_interfaces: List[NetworkInterface] = []
        self._primary_assigned = False
        self._primary_ip_address = ""
        self._primary_vlan: Optional[int] = None
        self._auth_domain = ""

        # Организация
        self._application = ""
        self._owning_team = ""
        self._environment: Optional[Environment] = None
        self._cost_center = ""

        # Жизненный цикл
        self._created_at = now
        self._last_modified = now
        self._last_inventory: Optional[datetime] = None
        self._lifecycle_status = LifecycleStatus.ACTIVE

        # Compliance
        self._compliance_status = ComplianceStatus.UNKNOWN
        self._compliance_notes: List[ComplianceNote] = []

        self._custom_attributes: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Свойства (только чтение)
    # ------------------------------------------------------------------

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def asset_id(self) -> str:
        return self._asset_id

    @property
    def asset_name(self) -> str:
        return self._asset_name

    @property
    def fqdn(self) -> str:
        return self._fqdn

    @property
    def asset_type(self) -> ServerType:
        return self._asset_type

    @property
    def platform(self) -> str:
        return self._platform

    @property
    def cluster(self) -> str:
        return self._cluster

    @property
    def datacenter(self) -> str:
        return self._datacenter

    @property
    def vcpu(self) -> int:
        return self._vcpu

    @property
    def memory_gb(self) -> float:
        return self._memory_gb

    @property
    def storage_gb(self) -> float:
        return self._storage_gb

    @property
    def power_state(self) -> PowerState:
        return self._power_state

    @property
    def physical_host_name(self) -> str:
        return self._physical_host_name

    @property
    def physical_host_cores(self) -> int:
        return self._physical_host_cores

    @property
    def physical_host_sockets(self) -> int:
        return self._physical_host_sockets

    @property
    def physical_host_cpu_model(self) -> str:
        return self._physical_host_cpu_model

    @property
    def operating_system(self) -> str:
        return self._operating_system

    @property
    def os_version(self) -> str:
        return self._os_version

    @property
    def os_edition(self) -> str:
        return self._os_edition

    @property
    def license_type(self) -> LicenseType:
        return self._license_type

    @property
    def requires_licensing(self) -> bool:
        return self._requires_licensing

    @property
    def network_interfaces(self) -> Tuple[NetworkInterface, ...]:
        return tuple(self._network_interfaces)

    @property
    def primary_ip_address(self) -> str:
        return self._primary_ip_address

    @property
    def primary_vlan(self) -> Optional[int]:
        return self._primary_vlan

    @property
    def auth_domain(self) -> str:
        return self._auth_domain

    @property
    def application(self) -> str:
        return self._application

    @property
    def owning_team(self) -> str:
        return self._owning_team

    @property
    def environment(self) -> Optional[Environment]:
        return self._environment

    @property
    def cost_center(self) -> str:
        return self._cost_center

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def last_modified(self) -> datetime:
        return self._last_modified

    @property
    def last_inventory(self) -> Optional[datetime]:
        return self._last_inventory

    @property
    def lifecycle_status(self) -> LifecycleStatus:
        return self._lifecycle_status

    @property
    def compliance_status(self) -> ComplianceStatus:
        return self._compliance_status

    @property
    def compliance_notes(self) -> Tuple[ComplianceNote, ...]:
        return tuple(self._compliance_notes)

    @property
    def custom_attributes(self) -> Dict[str, Any]:
        return dict(self._custom_attributes)

    # ------------------------------------------------------------------
    # Изменение состояния
    # ------------------------------------------------------------------

    def _touch(self) -> None:
        self._last_modified = self._clock.now()

    def set_identity(
        self,
        name: str,
        fqdn: Optional[str] = None,
        asset_type: Optional[Any] = None,
    ) -> None:
        """
        Устанавливает имя, FQDN и тип.

        Raises:
            InvalidArgumentError: Пустое имя или неизвестный тип
        """
        name = require_non_blank(name, "name")
        fqdn = _optional_str(fqdn, "fqdn")
        new_type = ServerType.parse(asset_type, "asset_type") if asset_type is not None else None

        self._asset_name = name
        if fqdn is not None:
            self._fqdn = fqdn
        if new_type is not None:
            self._apply_asset_type(new_type)
        self._touch()

    def _apply_asset_type(self, asset_type: ServerType) -> None:
        self._asset_type = asset_type

    def set_platform(
        self,
        platform: str,
        cluster: Optional[str] = None,
        datacenter: Optional[str] = None,
    ) -> None:
        """Устанавливает платформу (VMware, Hyper-V, Azure...), кластер и ЦОД."""
        platform = require_non_blank(platform, "platform")
        cluster = _optional_str(cluster, "cluster")
        datacenter = _optional_str(datacenter, "datacenter")

        self._platform = platform
        if cluster is not None:
            self._cluster = cluster
        if datacenter is not None:
            self._datacenter = datacenter
        self._touch()

    def set_compute(
        self,
        vcpu: Optional[int] = None,
        memory_gb: Optional[float] = None,
        storage_gb: Optional[float] = None,
        power_state: Optional[Any] = None,
    ) -> None:
        """
        Устанавливает ресурсы: vCPU, память, диск, питание.

        Raises:
            InvalidArgumentError: Отрицательное или нечисловое значение
        """
        if vcpu is not None:
            require_non_negative(vcpu, "vcpu")
            if isinstance(vcpu, float):
                raise InvalidArgumentError("vcpu должен быть целым", field="vcpu", value=vcpu)
        if memory_gb is not None:
            require_non_negative(memory_gb, "memory_gb")
        if storage_gb is not None:
            require_non_negative(storage_gb, "storage_gb")
        new_state = PowerState.parse(power_state, "power_state") if power_state is not None else None

        if vcpu is not None:
            self._vcpu = vcpu
        if memory_gb is not None:
            self._memory_gb = memory_gb
        if storage_gb is not None:
            self._storage_gb = storage_gb
        if new_state is not None:
            self._power_state = new_state
        self._touch()

    def set_power_state(self, power_state: Any) -> None:
        self._power_state = PowerState.parse(power_state, "power_state")
        self._touch()

    def set_physical_host(self, host: PhysicalHost) -> None:
        """
        Привязывает актив к физическому хосту.

        Копирует имя, ядра, сокеты и модель CPU (нужны для расчёта лицензий).
        """
        if not isinstance(host, PhysicalHost):
            raise InvalidArgumentError("Ожидался PhysicalHost", field="host", value=host)

        self._physical_host_name = host.name
        self._physical_host_cores = host.cores
        self._physical_host_sockets = host.sockets
        self._physical_host_cpu_model = host.cpu_model
        self._touch()

    def set_operating_system(
        self,
        name: str,
        version: Optional[str] = None,
        edition: Optional[str] = None,
        license_type: Optional[Any] = None,
        requires_licensing: Optional[bool] = None,
    ) -> None:
        """Устанавливает ОС, версию, редакцию и параметры лицензирования."""
        name = require_non_blank(name, "operating_system")
        version = _optional_str(version, "version")
        edition = _optional_str(edition, "edition")
        new_license = (
            LicenseType.parse(license_type, "license_type") if license_type is not None else None
        )

        self._operating_system = name
        if version is not None:
            self._os_version = version
        if edition is not None:
            self._os_edition = edition
        if new_license is not None:
            self._license_type = new_license
        if requires_licensing is not None:
            self._requires_licensing = bool(requires_licensing)
        self._touch()

    def set_requires_licensing(self, requires_licensing: bool) -> None:
        self._requires_licensing = bool(requires_licensing)
        self._touch()

    def set_organization(
        self,
        application: Optional[str] = None,
        owning_team: Optional[str] = None,
        environment: Optional[Any] = None,
        cost_center: Optional[str] = None,
    ) -> None:
        """
        Устанавливает организационные метаданные.

        Raises:
            InvalidArgumentError: Пустая команда-владелец или неизвестное окружение
        """
        application = _optional_str(application, "application")
        if owning_team is not None:
            require_non_blank(owning_team, "owning_team")
        cost_center = _optional_str(cost_center, "cost_center")
        new_env = Environment.parse(environment, "environment") if environment is not None else None

        if application is not None:
            self._application = application
        if owning_team is not None:
            self._owning_team = owning_team
        if new_env is not None:
            self._environment = new_env
        if cost_center is not None:
            self._cost_center = cost_center
        self._touch()

    def set_auth_domain(self, domain: str) -> None:
        domain = _optional_str(domain, "auth_domain")
        self._auth_domain = domain or ""
        self._touch()

    def set_lifecycle_status(self, status: Any) -> None:
        self._lifecycle_status = LifecycleStatus.parse(status, "lifecycle_status")
        self._touch()

    def set_compliance_status(self, status: Any) -> None:
        self._compliance_status = ComplianceStatus.parse(status, "compliance_status")
        self._touch()

    def set_custom_attribute(self, key: str, value: Any) -> None:
        """
        Устанавливает произвольный атрибут.

        Атрибуты попадают в экспорт последними и перезаписывают
        канонические поля с тем же ключом.
        """
        key = require_non_blank(key, "key")
        self._custom_attributes[key] = value
        self._touch()

    def remove_custom_attribute(self, key: str) -> bool:
        """Удаляет атрибут. Возвращает False если его не было."""
        if key not in self._custom_attributes:
            return False
        del self._custom_attributes[key]
        self._touch()
        return True

    def mark_inventoried(self) -> datetime:
        """Отмечает время последней инвентаризации."""
        self._last_inventory = self._clock.now()
        self._touch()
        return self._last_inventory

    # ------------------------------------------------------------------
    # Сеть
    # ------------------------------------------------------------------

    def add_network_interface(self, nic: NetworkInterface) -> None:
        """
        Добавляет сетевой интерфейс.

        Первый добавленный интерфейс задаёт primary_ip_address и
        primary_vlan. Это происходит один раз за жизнь объекта.

        Raises:
            InvalidArgumentError: nic не задан
        """
        if nic is None:
            raise InvalidArgumentError("Интерфейс не задан", field="nic")
        if not isinstance(nic, NetworkInterface):
            raise InvalidArgumentError("Ожидался NetworkInterface", field="nic", value=nic)

        self._network_interfaces.append(nic)
        if not self._primary_assigned:
            self._primary_ip_address = nic.primary_address
            self._primary_vlan = nic.primary_vlan
            self._primary_assigned = True
        self._touch()

        logger.debug(
            f"Интерфейс {nic.name} добавлен ({len(self._network_interfaces)} всего)",
            asset=self._asset_name,
            operation="add_network_interface",
        )

    # ------------------------------------------------------------------
    # Запросы
    # ------------------------------------------------------------------

    def get_licensing_core_count(self) -> int:
        """Ядра хоста для лицензирования: только если requires_licensing и ядер > 0."""
        if self._requires_licensing and self._physical_host_cores > 0:
            return self._physical_host_cores
        return 0

    def is_valid(self) -> bool:
        """
        Готовность к экспорту.

        Проверяет только заполненность имени, платформы, ОС,
        команды-владельца и окружения. Сеть и compliance не проверяются.
        """
        return not (
            is_blank(self._asset_name)
            or is_blank(self._platform)
            or is_blank(self._operating_system)
            or is_blank(self._owning_team)
            or self._environment is None
        )

    def generate_asset_id(self) -> str:
        """
        Генерирует ID вида Platform_Environment_SanitizedName.

        Пересчитывается только при явном вызове.

        Example:
            VMware + Production + "web-server-01" -> VMware_Production_web_server_01
        """
        environment = self._environment.value if self._environment else ""
        self._asset_id = f"{self._platform}_{environment}_{sanitize_name(self._asset_name)}"
        self._touch()

        logger.debug(
            f"Asset ID: {self._asset_id}",
            asset=self._asset_name,
            platform=self._platform,
            operation="generate_asset_id",
        )
        return self._asset_id

    def add_compliance_note(self, note: str) -> ComplianceNote:
        """Добавляет запись в журнал compliance с текущим временем."""
        entry = ComplianceNote(created_at=self._clock.now(), text=note)
        self._compliance_notes.append(entry)
        self._touch()

        logger.debug(
            "Добавлена запись compliance",
            asset=self._asset_name,
            operation="add_compliance_note",
        )
        return entry

    # ------------------------------------------------------------------
    # Экспорт
    # ------------------------------------------------------------------

    def _canonical_fields(self, settings: ExportConfig) -> Dict[str, Any]:
        """Канонические поля экспорта (см. export.CANONICAL_FIELDS)."""
        return {
            "AssetID": self._asset_id,
            "Name": self._asset_name,
            "FQDN": self._fqdn,
            "Type": self._asset_type.value,
            "Platform": self._platform,
            "Cluster": self._cluster,
            "Datacenter": self._datacenter,
            "OperatingSystem": self._operating_system,
            "OSVersion": self._os_version,
            "Environment": self._environment.value if self._environment else "",
            "Owner": self._owning_team,
            "Application": self._application,
            "CostCenter": self._cost_center,
            "PhysicalHost": self._physical_host_name,
            "PhysicalHostCores": self._physical_host_cores,
            "vCPU": self._vcpu,
            "MemoryGB": self._memory_gb,
            "PowerState": self._power_state.value,
            "PrimaryIP": self._primary_ip_address,
            "PrimaryVLAN": self._primary_vlan if self._primary_vlan is not None else "",
            "AuthDomain": self._auth_domain,
            "ComplianceStatus": self._compliance_status.value,
            "LifecycleStatus": self._lifecycle_status.value,
            "RequiresLicensing": self._requires_licensing,
            "LicensingCores": self.get_licensing_core_count(),
            "LastInventory": format_timestamp(self._last_inventory, settings.timestamp_format),
        }

    def to_export_mapping(self, settings: Optional[ExportConfig] = None) -> Dict[str, Any]:
        """
        Плоский словарь для внешней системы учёта.

        Args:
            settings: Настройки экспорта (по умолчанию из config.yaml)

        Returns:
            Dict: Канонические поля + NetworkInterfaces (JSON) + custom attributes
        """
        settings = resolve_settings(settings)
        return build_export_mapping(
            canonical=self._canonical_fields(settings),
            interfaces=self._network_interfaces,
            custom_attributes=self._custom_attributes,
            settings=settings,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(asset_id={self._asset_id!r}, name={self._asset_name!r})"
