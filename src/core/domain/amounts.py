"""
AmountSpec — явный выбор "точная сумма" vs "весь текущий баланс"

На проводе (calling convention) сумма 0 зарезервирована как
full-balance sentinel: "использовать всё, что сейчас держит executor".
Внутри системы это представлено явным tagged-вариантом, чтобы
настоящий нулевой запрос не путался с sentinel.

Конверсия:
- from_wire(0)  → AmountSpec.full_balance()
- from_wire(n)  → AmountSpec.exact(n), n > 0
- to_wire()     → обратное отображение (exact(0) на провод не кодируется)
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field, model_validator

from src.core.math.uint_math import UINT256_MAX, parse_uint

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

FULL_BALANCE_SENTINEL = 0


# =============================================================================
# ENUMS
# =============================================================================


class AmountKind(str, Enum):
    """Вид суммы"""

    EXACT = "exact"
    FULL_BALANCE = "full_balance"


# =============================================================================
# AMOUNT SPEC
# =============================================================================


class AmountSpec(BaseModel):
    """
    Сумма операции deposit/withdraw.

    Immutable модель (frozen=True). Для FULL_BALANCE value всегда 0 и
    не используется; фактическая сумма определяется в момент вызова
    через resolve().
    """

    kind: AmountKind = Field(..., description="EXACT или FULL_BALANCE")
    value: int = Field(0, ge=0, le=UINT256_MAX, description="Точная сумма (для EXACT)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_full_balance_has_no_value(self) -> "AmountSpec":
        """FULL_BALANCE не несёт собственной суммы."""
        if self.kind == AmountKind.FULL_BALANCE and self.value != 0:
            raise ValueError(f"full_balance amount must not carry a value, got {self.value}")
        return self

    @classmethod
    def exact(cls, amount: int) -> "AmountSpec":
        """Точная сумма."""
        return cls(kind=AmountKind.EXACT, value=amount)

    @classmethod
    def full_balance(cls) -> "AmountSpec":
        """Весь баланс, который держит executor в момент вызова."""
        return cls(kind=AmountKind.FULL_BALANCE)

    @classmethod
    def from_wire(cls, amount: Union[int, str]) -> "AmountSpec":
        """
        Декодирование суммы из calling convention.

        Принимает int или десятичную строку (как в JSON-контрактах).

        Examples:
            >>> AmountSpec.from_wire(0).is_full_balance
            True
            >>> AmountSpec.from_wire(50).value
            50
        """
        amount = parse_uint(amount, "amount")
        if amount == FULL_BALANCE_SENTINEL:
            return cls.full_balance()
        return cls.exact(amount)

    @property
    def is_full_balance(self) -> bool:
        return self.kind == AmountKind.FULL_BALANCE

    def to_wire(self) -> int:
        """
        Кодирование суммы в calling convention.

        Raises:
            ValueError: exact(0) неотличим от sentinel на проводе
        """
        if self.is_full_balance:
            return FULL_BALANCE_SENTINEL
        if self.value == FULL_BALANCE_SENTINEL:
            raise ValueError("exact(0) cannot be encoded: 0 is the full-balance sentinel on the wire")
        return self.value

    def resolve(self, held_balance: int) -> int:
        """
        Фактическая сумма операции.

        Args:
            held_balance: Текущий баланс executor'а в соответствующем токене

        Returns:
            held_balance для FULL_BALANCE, иначе value
        """
        if self.is_full_balance:
            return held_balance
        return self.value


AmountLike = Union[AmountSpec, int, str]


def coerce_amount(amount: AmountLike) -> AmountSpec:
    """
    Приведение AmountSpec | wire int | десятичной строки к AmountSpec.

    Raw-значение трактуется по calling convention (0 = весь баланс).
    """
    if isinstance(amount, AmountSpec):
        return amount
    return AmountSpec.from_wire(amount)
