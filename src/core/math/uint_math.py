"""
UintMath — беззнаковая 256-битная арифметика с явной проверкой переполнения

Все количества токенов в системе — целые числа в диапазоне [0, UINT256_MAX].
Модуль обеспечивает:
- Проверку диапазона (validate_uint)
- Десятичную кодировку для JSON-контрактов (parse_uint / format_uint)
- Сложение/вычитание/умножение с детекцией overflow/underflow
- mul_div_down: floor(a * b / d) без промежуточного переполнения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой операции лежит в [0, UINT256_MAX], иначе Revert
2. Всё деление — floor (усечение к нулю для неотрицательных)
3. Деление на ноль никогда не происходит молча
"""

import re
from typing import Final, Union

from src.core.errors import ArithmeticOverflow, ArithmeticUnderflow

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

UINT256_MAX: Final[int] = 2**256 - 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_uint(value: object) -> bool:
    """
    Проверка, что значение — целое в диапазоне uint256.

    bool явно исключён: True/False не являются количествами.
    """
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= UINT256_MAX
    )


def validate_uint(value: int, name: str) -> int:
    """
    Валидация uint256 значения.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        TypeError: Если value не int
        ArithmeticUnderflow: Если value < 0
        ArithmeticOverflow: Если value > UINT256_MAX
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")

    if value < 0:
        raise ArithmeticUnderflow(f"{name} must be non-negative, got {value}")

    if value > UINT256_MAX:
        raise ArithmeticOverflow(f"{name} exceeds UINT256_MAX, got {value}")

    return value


# =============================================================================
# ДЕСЯТИЧНАЯ КОДИРОВКА (JSON-контракты)
# =============================================================================

UINT256_DECIMAL_PATTERN: Final[str] = "^(0|[1-9][0-9]{0,77})$"

_UINT256_DECIMAL_RE = re.compile(UINT256_DECIMAL_PATTERN)


def parse_uint(value: Union[int, str], name: str) -> int:
    """
    uint256 из int или канонической десятичной строки.

    Examples:
        >>> parse_uint("50", "amount")
        50
        >>> parse_uint(50, "amount")
        50

    Raises:
        ValueError: Строка не является канонической десятичной записью
        TypeError / ArithmeticUnderflow / ArithmeticOverflow: как в validate_uint
    """
    if isinstance(value, str):
        if _UINT256_DECIMAL_RE.fullmatch(value) is None:
            raise ValueError(f"{name} must be a canonical decimal uint256 string, got {value!r}")
        value = int(value)
    return validate_uint(value, name)


def format_uint(value: int, name: str) -> str:
    """uint256 → десятичная строка для JSON-контрактов."""
    return str(validate_uint(value, name))


# =============================================================================
# CHECKED-АРИФМЕТИКА
# =============================================================================


def checked_add(a: int, b: int) -> int:
    """
    a + b с детекцией переполнения.

    Examples:
        >>> checked_add(1, 2)
        3
        >>> checked_add(UINT256_MAX, 1)  # ArithmeticOverflow
    """
    result = a + b
    if result > UINT256_MAX:
        raise ArithmeticOverflow(f"{a} + {b} overflows uint256")
    return result


def checked_sub(a: int, b: int) -> int:
    """
    a - b с детекцией underflow.

    Используется для balance-delta учёта: after - before. Отрицательная
    дельта означает, что вызов уменьшил баланс, и это всегда ошибка.
    """
    if b > a:
        raise ArithmeticUnderflow(f"{a} - {b} underflows uint256")
    return a - b


def checked_mul(a: int, b: int) -> int:
    """a * b с детекцией переполнения."""
    result = a * b
    if result > UINT256_MAX:
        raise ArithmeticOverflow(f"{a} * {b} overflows uint256")
    return result


def mul_div_down(a: int, b: int, denominator: int) -> int:
    """
    floor(a * b / denominator).

    Промежуточное произведение обязано помещаться в uint256, как в
    EVM: переполнение a * b — это Revert, а не
    молчаливое расширение точности.

    Args:
        a: Множитель
        b: Множитель
        denominator: Делитель (> 0)

    Returns:
        Округлённое вниз частное

    Raises:
        ZeroDivisionError: Если denominator == 0
        ArithmeticOverflow: Если a * b > UINT256_MAX

    Examples:
        >>> mul_div_down(50, 100, 150)
        33
        >>> mul_div_down(50, 100, 100)
        50
    """
    if denominator == 0:
        raise ZeroDivisionError("mul_div_down: denominator is zero")

    return checked_mul(a, b) // denominator
