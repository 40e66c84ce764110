"""
Валидация примитивов: MAC, IP, VLAN, обязательные строки.

Функции validate_* — чистые проверки (возвращают bool).
Функции require_* — бросают InvalidArgumentError с именем параметра,
используются в конструкторах и методах моделей.
"""

import ipaddress
import math
import re
from typing import Any, Union

from .exceptions import InvalidArgumentError

# aa:bb:cc:dd:ee:ff | aa-bb-cc-dd-ee-ff | aabbccddeeff
MAC_PATTERN = re.compile(
    r"^(?:[0-9A-Fa-f]{2}:){5}[0-9A-Fa-f]{2}$"
    r"|^(?:[0-9A-Fa-f]{2}-){5}[0-9A-Fa-f]{2}$"
    r"|^[0-9A-Fa-f]{12}$"
)

VLAN_MIN = 1
VLAN_MAX = 4094


def validate_mac(mac: Any) -> bool:
    """
    Проверяет формат MAC-адреса.

    Принимаются три формата (регистр не важен):
    - 00:50:56:12:34:56
    - 00-50-56-12-34-56
    - 005056123456

    Смешанные разделители (00:50-56:...) не принимаются.

    Examples:
        >>> validate_mac("00:50:56:12:34:56")
        True
        >>> validate_mac("0050.5612.3456")
        False
    """
    if not isinstance(mac, str):
        return False
    return MAC_PATTERN.fullmatch(mac) is not None


def validate_ip(address: Any) -> bool:
    """
    Проверяет что строка — синтаксически валидный IPv4 или IPv6 адрес.

    Используется и для масок подсети: проверяется только синтаксис,
    поэтому "10.0.0.1" тоже пройдёт как маска.
    """
    if not isinstance(address, str) or not address:
        return False
    try:
        ipaddress.ip_address(address)
    except ValueError:
        return False
    return True


def validate_vlan_id(vlan_id: Any) -> bool:
    """Проверяет что VLAN ID — целое число в диапазоне 1-4094."""
    if isinstance(vlan_id, bool) or not isinstance(vlan_id, int):
        return False
    return VLAN_MIN <= vlan_id <= VLAN_MAX


def is_blank(value: Any) -> bool:
    """True для None и строк из одних пробелов."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_non_blank(value: Any, field: str) -> str:
    """Проверяет обязательную строку."""
    if not isinstance(value, str) or is_blank(value):
        raise InvalidArgumentError(f"{field} не может быть пустым", field=field, value=value)
    return value


def require_mac(mac: Any, field: str = "mac") -> str:
    """Проверяет MAC-адрес."""
    if not validate_mac(mac):
        raise InvalidArgumentError(f"Невалидный MAC-адрес в {field}", field=field, value=mac)
    return mac


def require_ip(address: Any, field: str = "address") -> str:
    """Проверяет IP-адрес (или маску)."""
    if not validate_ip(address):
        raise InvalidArgumentError(f"Невалидный IP-адрес в {field}", field=field, value=address)
    return address


def require_vlan_id(vlan_id: Any, field: str = "vlan_id") -> int:
    """Проверяет VLAN ID."""
    if not validate_vlan_id(vlan_id):
        raise InvalidArgumentError(
            f"{field} должен быть в диапазоне {VLAN_MIN}-{VLAN_MAX}",
            field=field,
            value=vlan_id,
        )
    return vlan_id


def _require_number(value: Any, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{field} должен быть числом", field=field, value=value)
    # NaN проходит любые сравнения
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidArgumentError(f"{field} должен быть конечным числом", field=field, value=value)


def require_non_negative(value: Any, field: str):
    """Проверяет число >= 0."""
    _require_number(value, field)
    if value < 0:
        raise InvalidArgumentError(f"{field} не может быть отрицательным", field=field, value=value)
    return value


def require_positive(value: Any, field: str, minimum: int = 1):
    """Проверяет число >= minimum (по умолчанию 1)."""
    _require_number(value, field)
    if value < minimum:
        raise InvalidArgumentError(
            f"{field} должен быть не меньше {minimum}", field=field, value=value
        )
    return value


def to_int(value: Any, field: str) -> int:
    """
    Приводит значение из данных платформы к int.

    "4" -> 4, 4.0 -> 4. Дробные, bool и нечисловые строки не принимаются.

    Raises:
        InvalidArgumentError: Значение не является целым числом
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{field}: ожидалось число", field=field, value=value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidArgumentError(f"{field}: ожидалось целое число", field=field, value=value)


def to_number(value: Any, field: str) -> Union[int, float]:
    """Приводит значение из данных платформы к числу ("16" -> 16, "0.5" -> 0.5)."""
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                pass
    _require_number(value, field)
    return value
