"""
Tests for Server.

Проверяет:
- Обязательные поля конструктора
- Детали виртуализации только для VM
- Аппаратные характеристики >= 1
- Дополнительные поля экспорта
"""

import pytest

from server_inventory.core.domain import Asset, Server
from server_inventory.core.exceptions import InvalidArgumentError, InvalidStateError
from server_inventory.core.models import ServerType


@pytest.mark.unit
class TestServerCreate:
    """Создание Server."""

    def test_create(self, fixed_clock):
        server = Server("web-server-01", "LAMP", "Web Team", clock=fixed_clock)

        assert isinstance(server, Asset)
        assert server.asset_name == "web-server-01"
        assert server.application_stack == "LAMP"
        assert server.owning_team == "Web Team"
        assert server.server_type is ServerType.VM
        assert server.asset_type is ServerType.VM

    def test_type_from_string(self, fixed_clock):
        server = Server("db-01", ".NET", "DBA", server_type="physical", clock=fixed_clock)
        assert server.server_type is ServerType.PHYSICAL

    @pytest.mark.parametrize("kwargs, field", [
        ({"name": "", "application_stack": "LAMP", "owner": "Web"}, "name"),
        ({"name": "web", "application_stack": " ", "owner": "Web"}, "application_stack"),
        ({"name": "web", "application_stack": "LAMP", "owner": None}, "owner"),
    ])
    def test_required_fields(self, kwargs, field):
        """Пустое обязательное поле — ошибка с именем параметра."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            Server(**kwargs)
        assert exc_info.value.field == field

    def test_unknown_type(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            Server("web", "LAMP", "Web", server_type="Mainframe")
        assert exc_info.value.field == "server_type"


@pytest.mark.unit
class TestVirtualizationDetails:
    """Детали виртуализации."""

    def test_vm(self, fixed_clock):
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        server.set_virtualization_details("esx-01", "ESXi 8.0", "vm-1234")

        assert server.virtual_host == "esx-01"
        assert server.hypervisor == "ESXi 8.0"
        assert server.hardware_id == "vm-1234"

    @pytest.mark.parametrize("server_type", [
        ServerType.PHYSICAL,
        ServerType.CONTAINER,
        ServerType.HYPERVISOR,
        ServerType.BARE_METAL,
    ])
    def test_not_vm(self, fixed_clock, server_type):
        server = Server("host-01", "Infra", "Ops", server_type=server_type, clock=fixed_clock)

        with pytest.raises(InvalidStateError) as exc_info:
            server.set_virtualization_details("esx-01", "ESXi 8.0", "vm-1234")

        assert exc_info.value.state == server_type.value
        assert server.virtual_host == ""

    @pytest.mark.parametrize("args, field", [
        (("", "ESXi", "id"), "virtual_host"),
        (("esx-01", " ", "id"), "hypervisor"),
        (("esx-01", "ESXi", ""), "hardware_id"),
    ])
    def test_blank_argument(self, fixed_clock, args, field):
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        with pytest.raises(InvalidArgumentError) as exc_info:
            server.set_virtualization_details(*args)
        assert exc_info.value.field == field

    def test_change_type_clears_details(self, fixed_clock):
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        server.set_virtualization_details("esx-01", "ESXi 8.0", "vm-1234")

        server.set_server_type(ServerType.PHYSICAL)

        assert server.server_type is ServerType.PHYSICAL
        assert server.virtual_host == ""
        assert server.hypervisor == ""
        assert server.hardware_id == ""

    def test_set_identity_type_clears_details(self, fixed_clock):
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        server.set_virtualization_details("esx-01", "ESXi 8.0", "vm-1234")

        server.set_identity("web-01", asset_type="Container")

        assert server.virtual_host == ""


@pytest.mark.unit
class TestHardwareSpecs:
    """Аппаратные характеристики."""

    def test_set(self, fixed_clock):
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        server.set_hardware_specs(cpu_cores=4, memory_gb=16, storage_gb=100)

        assert server.cpu_cores == 4
        assert server.memory_gb == 16
        assert server.storage_gb == 100

    @pytest.mark.parametrize("kwargs, field", [
        ({"cpu_cores": 0, "memory_gb": 16, "storage_gb": 100}, "cpu_cores"),
        ({"cpu_cores": 4, "memory_gb": 0, "storage_gb": 100}, "memory_gb"),
        ({"cpu_cores": 4, "memory_gb": 16, "storage_gb": -5}, "storage_gb"),
    ])
    def test_below_one(self, fixed_clock, kwargs, field):
        """Значение < 1 — ошибка, состояние не меняется."""
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        server.set_hardware_specs(cpu_cores=2, memory_gb=8, storage_gb=50)

        with pytest.raises(InvalidArgumentError) as exc_info:
            server.set_hardware_specs(**kwargs)

        assert exc_info.value.field == field
        assert server.cpu_cores == 2
        assert server.memory_gb == 8
        assert server.storage_gb == 50

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    @pytest.mark.parametrize("field", ["memory_gb", "storage_gb"])
    def test_non_finite(self, fixed_clock, field, value):
        """NaN и inf не проходят проверку >= 1."""
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        specs = {"cpu_cores": 4, "memory_gb": 16, "storage_gb": 100}
        specs[field] = value

        with pytest.raises(InvalidArgumentError) as exc_info:
            server.set_hardware_specs(**specs)

        assert exc_info.value.field == field
        assert server.memory_gb == 0
        assert server.storage_gb == 0

    def test_fractional_memory(self, fixed_clock):
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        server.set_hardware_specs(cpu_cores=1, memory_gb=1.5, storage_gb=20)
        assert server.memory_gb == 1.5


@pytest.mark.unit
class TestServerExport:
    """Экспорт Server."""

    def test_extra_fields(self, fixed_clock, export_settings):
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        server.set_virtualization_details("esx-01", "ESXi 8.0", "vm-1234")
        server.set_hardware_specs(cpu_cores=4, memory_gb=16, storage_gb=100)

        mapping = server.to_export_mapping(export_settings)

        assert mapping["Name"] == "web-01"
        assert mapping["Owner"] == "Web Team"
        assert mapping["Type"] == "VM"
        assert mapping["ApplicationStack"] == "LAMP"
        assert mapping["VirtualHost"] == "esx-01"
        assert mapping["Hypervisor"] == "ESXi 8.0"
        assert mapping["HardwareID"] == "vm-1234"
        assert mapping["CPUCores"] == 4
        assert mapping["MemoryGB"] == 16
        assert mapping["StorageGB"] == 100

    def test_application_stack_separate_from_application(self, fixed_clock, export_settings):
        """Стек не подставляется в Application."""
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)

        mapping = server.to_export_mapping(export_settings)
        assert mapping["ApplicationStack"] == "LAMP"
        assert mapping["Application"] == ""

        server.set_organization(application="Corporate Portal")
        mapping = server.to_export_mapping(export_settings)
        assert mapping["Application"] == "Corporate Portal"
        assert mapping["ApplicationStack"] == "LAMP"

    def test_is_valid_needs_platform_os_environment(self, fixed_clock):
        server = Server("web-01", "LAMP", "Web Team", clock=fixed_clock)
        assert server.is_valid() is False

        server.set_platform("VMware")
        server.set_operating_system("Ubuntu 22.04")
        server.set_organization(environment="Production")
        assert server.is_valid() is True
