"""
Pytest configuration и общие fixtures для тестов.

Предоставляет переиспользуемые fixtures:
- fixed_clock: Часы с фиксированным временем
- export_settings: Настройки экспорта по умолчанию
- web_nic: Готовый интерфейс eth0 (10.10.10.50, VLAN 100)
- sample_platform_data: Примеры сырых записей платформ
"""

import pytest
from datetime import datetime
from typing import Dict, Any

from server_inventory.core.clock import FixedClock
from server_inventory.core.config_schema import ExportConfig
from server_inventory.core.models import NetworkInterface


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Часы на 2025-01-15 10:30:00."""
    return FixedClock(datetime(2025, 1, 15, 10, 30, 0))


@pytest.fixture
def export_settings() -> ExportConfig:
    """Настройки экспорта по умолчанию (без чтения config.yaml)."""
    return ExportConfig()


@pytest.fixture
def web_nic() -> NetworkInterface:
    """
    Интерфейс из типового сценария.

    Returns:
        NetworkInterface: eth0, 10.10.10.50/255.255.255.0, Production-Web/VLAN 100
    """
    nic = NetworkInterface("eth0", "00:50:56:12:34:56")
    nic.add_ip_address("10.10.10.50", "255.255.255.0")
    nic.add_network_connection("Production-Web", 100)
    return nic


@pytest.fixture
def sample_platform_data() -> Dict[str, Dict[str, Any]]:
    """
    Примеры сырых данных от сборщиков.

    Returns:
        Dict: Словарь с примерами записей по платформам
    """
    return {
        # VMware: все известные ключи
        "vmware_full": {
            "Name": "web-server-01",
            "OS": "Ubuntu 22.04",
            "vCPU": 4,
            "Memory": 16,
            "Datastore": "ds-prod-01",  # неизвестный ключ
        },
        # Hyper-V: числа строками
        "hyperv_strings": {
            "Name": "sql.prod.local",
            "OS": "Windows Server 2022",
            "vCPU": "8",
            "Memory": "32.5",
        },
        # Azure: только имя
        "azure_minimal": {
            "Name": "app-vm-03",
            "ResourceGroup": "rg-prod",
        },
        # Невалидная запись
        "negative_vcpu": {
            "Name": "broken-vm",
            "vCPU": -2,
        },
    }


def pytest_configure(config):
    """Регистрация custom markers для pytest."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (быстрые, без внешних зависимостей)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (полный сценарий экспорта)"
    )
