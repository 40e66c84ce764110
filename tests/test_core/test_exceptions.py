"""
Тесты иерархии исключений.
"""

import pytest

from server_inventory.core.exceptions import (
    ConfigError,
    InvalidArgumentError,
    InvalidStateError,
    InventoryError,
    format_error_for_log,
)


@pytest.mark.unit
class TestExceptions:
    """Тесты исключений."""

    def test_hierarchy(self):
        assert issubclass(InvalidArgumentError, InventoryError)
        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(InvalidStateError, InventoryError)
        assert issubclass(ConfigError, InventoryError)

    def test_invalid_argument_details(self):
        error = InvalidArgumentError("Невалидный MAC", field="mac", value="zz:zz")

        assert error.field == "mac"
        assert error.value == "zz:zz"
        assert error.details == {"field": "mac", "value": "zz:zz"}
        assert str(error) == "Невалидный MAC (field='mac', value='zz:zz')"

    def test_value_truncated(self):
        error = InvalidArgumentError("Слишком длинно", field="name", value="x" * 500)
        assert len(error.details["value"]) == 100

    def test_invalid_state(self):
        error = InvalidStateError("Только для VM", state="Physical")
        assert error.state == "Physical"
        assert error.to_dict() == {
            "error_type": "InvalidStateError",
            "message": "Только для VM",
            "details": {"state": "Physical"},
        }

    def test_message_only(self):
        assert str(InventoryError("Ошибка")) == "Ошибка"

    def test_format_error_for_log(self):
        assert format_error_for_log(InventoryError("Ошибка")) == "Ошибка"
        assert format_error_for_log(KeyError("Name")) == "KeyError: 'Name'"
