"""
ShareMath — конверсия asset <-> share по текущему курсу пула

Чистые функции без побочных эффектов. Используются и пулом при
фактическом enter/leave, и executor'ом для котировок — поэтому котировка
и фактическая конверсия совпадают бит-в-бит при одинаковом состоянии.

Обозначения:
- S: total_shares (общий supply share-токена)
- R: reserve (баланс asset-токена на адресе пула)

Формулы:
- enter: bootstrap (S == 0 или R == 0) → amount_in (1:1),
         иначе floor(amount_in * S / R)
- leave: S == 0 → 0, иначе floor(shares_in * R / S)
"""

from fractions import Fraction
from typing import Optional

from src.core.math.uint_math import mul_div_down, validate_uint


def is_bootstrap(total_shares: int, reserve: int) -> bool:
    """
    Пул в bootstrap-состоянии: нет shares или нет резерва.

    В этом состоянии курс не определён и первый депозит минтит 1:1.
    """
    return total_shares == 0 or reserve == 0


def exchange_ratio(total_shares: int, reserve: int) -> Optional[Fraction]:
    """
    Мгновенный курс shares / reserve.

    Returns:
        Fraction(S, R) или None в bootstrap-состоянии
    """
    if is_bootstrap(total_shares, reserve):
        return None
    return Fraction(total_shares, reserve)


def quote_enter(amount_in: int, total_shares: int, reserve: int) -> int:
    """
    Количество shares, которое будет заминчено за amount_in asset.

    Args:
        amount_in: Вносимое количество asset
        total_shares: S — текущий supply shares
        reserve: R — текущий резерв asset пула

    Returns:
        ShareAmount (floor)

    Examples:
        >>> quote_enter(50, 0, 0)
        50
        >>> quote_enter(50, 100, 100)
        50
        >>> quote_enter(50, 100, 150)
        33
    """
    validate_uint(amount_in, "amount_in")
    validate_uint(total_shares, "total_shares")
    validate_uint(reserve, "reserve")

    if is_bootstrap(total_shares, reserve):
        return amount_in

    return mul_div_down(amount_in, total_shares, reserve)


def quote_leave(shares_in: int, total_shares: int, reserve: int) -> int:
    """
    Количество asset, которое вернёт сжигание shares_in.

    При S == 0 погашать нечего — возвращается 0. При R == 0 формула
    естественно даёт 0.

    Examples:
        >>> quote_leave(80, 80, 80)
        80
        >>> quote_leave(10, 0, 100)
        0
    """
    validate_uint(shares_in, "shares_in")
    validate_uint(total_shares, "total_shares")
    validate_uint(reserve, "reserve")

    if total_shares == 0:
        return 0

    return mul_div_down(shares_in, reserve, total_shares)
