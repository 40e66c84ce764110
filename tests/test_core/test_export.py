"""
Тесты экспорта активов в плоские словари.
"""

import json
from datetime import datetime

import pytest

from server_inventory.core.config_schema import ExportConfig
from server_inventory.core.domain import Asset
from server_inventory.core.export import (
    CANONICAL_FIELDS,
    build_export_mapping,
    export_assets,
    format_timestamp,
    serialize_interfaces,
)
from server_inventory.core.models import NetworkInterface


@pytest.fixture
def valid_asset(fixed_clock):
    asset = Asset(clock=fixed_clock)
    asset.set_identity("web-server-01")
    asset.set_platform("VMware")
    asset.set_operating_system("Ubuntu 22.04")
    asset.set_organization(owning_team="Web Team", environment="Production")
    asset.generate_asset_id()
    return asset


@pytest.mark.unit
class TestHelpers:
    """Тесты вспомогательных функций."""

    def test_format_timestamp(self):
        value = datetime(2025, 1, 15, 10, 30, 0)
        assert format_timestamp(value) == "2025-01-15 10:30:00"
        assert format_timestamp(value, "%d.%m.%Y") == "15.01.2025"
        assert format_timestamp(None) == ""

    def test_serialize_interfaces(self, web_nic):
        data = json.loads(serialize_interfaces([web_nic]))
        assert data[0]["MACAddress"] == "00:50:56:12:34:56"
        assert data[0]["IPAddresses"][0]["Address"] == "10.10.10.50"

    def test_serialize_non_ascii(self):
        nic = NetworkInterface("eth0", "005056123456")
        nic.add_network_connection("Сеть", 10)

        assert "Сеть" in serialize_interfaces([nic], ensure_ascii=False)
        assert "Сеть" not in serialize_interfaces([nic], ensure_ascii=True)

    def test_build_order(self, web_nic, export_settings):
        mapping = build_export_mapping(
            canonical={"AssetID": "a", "Name": "n"},
            interfaces=[web_nic],
            custom_attributes={"Rack": "R1", "Name": "override"},
            settings=export_settings,
        )
        assert list(mapping) == ["AssetID", "Name", "NetworkInterfaces", "Rack"]
        assert mapping["Name"] == "override"


@pytest.mark.unit
class TestExportSettings:
    """Настройки экспорта влияют на результат."""

    def test_canonical_order(self, valid_asset, export_settings):
        mapping = valid_asset.to_export_mapping(export_settings)
        assert tuple(mapping) == CANONICAL_FIELDS

    def test_custom_timestamp_format(self, valid_asset):
        valid_asset.mark_inventoried()
        settings = ExportConfig(timestamp_format="%d.%m.%Y")

        assert valid_asset.to_export_mapping(settings)["LastInventory"] == "15.01.2025"

    def test_interfaces_field_name(self, valid_asset, web_nic):
        valid_asset.add_network_interface(web_nic)
        settings = ExportConfig(interfaces_field="NICs")

        mapping = valid_asset.to_export_mapping(settings)

        assert "NICs" in mapping
        assert "NetworkInterfaces" not in mapping

    def test_interfaces_disabled(self, valid_asset, web_nic):
        valid_asset.add_network_interface(web_nic)
        settings = ExportConfig(include_interfaces=False)

        assert "NetworkInterfaces" not in valid_asset.to_export_mapping(settings)


@pytest.mark.unit
class TestExportAssets:
    """Тесты export_assets."""

    def test_skip_invalid(self, valid_asset, fixed_clock, export_settings):
        incomplete = Asset(clock=fixed_clock)
        incomplete.set_identity("draft-01")

        result = export_assets([valid_asset, incomplete], export_settings)

        assert [m["Name"] for m in result] == ["web-server-01"]

    def test_keep_invalid(self, valid_asset, fixed_clock):
        incomplete = Asset(clock=fixed_clock)
        settings = ExportConfig(skip_invalid=False)

        result = export_assets([valid_asset, incomplete], settings)

        assert len(result) == 2

    def test_empty(self, export_settings):
        assert export_assets([], export_settings) == []
