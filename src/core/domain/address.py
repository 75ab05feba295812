"""
Address — идентификаторы аккаунтов и контрактов

Адрес — строка '0x' + 40 hex-символов. Для симулированных аккаунтов и
контрактов адрес детерминированно выводится из метки (label), поэтому
одна и та же метка всегда даёт один и тот же адрес.
"""

import hashlib
import re
from typing import Final

Address = str

ADDRESS_PATTERN: Final[str] = "^0x[0-9a-fA-F]{40}$"

ZERO_ADDRESS: Final[Address] = "0x" + "0" * 40

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)


def address_from_label(label: str) -> Address:
    """
    Детерминированный адрес из метки.

    Examples:
        >>> address_from_label("alice") == address_from_label("alice")
        True
        >>> len(address_from_label("alice"))
        42
    """
    if not label:
        raise ValueError("label must be non-empty")

    digest = hashlib.sha3_256(label.encode("utf-8")).hexdigest()
    return "0x" + digest[-40:]


def is_address(value: object) -> bool:
    """Проверка формата адреса."""
    return isinstance(value, str) and _ADDRESS_RE.match(value) is not None


def validate_address(value: str, name: str) -> Address:
    """
    Валидация адреса.

    Raises:
        ValueError: Если значение не является адресом
    """
    if not is_address(value):
        raise ValueError(f"{name} must be a 0x-prefixed 20-byte hex address, got {value!r}")
    return value
