"""
PoolState — снапшот состояния share-пула

Immutable Pydantic модель: total_shares (S) и reserve (R) на момент чтения.
Курс не хранится, а выводится из снапшота. Соответствует схеме
contracts/schema/pool_state.json.

Снапшот — только для чтения и диагностики. Котировки executor'а всегда
читают живое состояние пула и снапшот не кэшируют.
"""

from fractions import Fraction
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from src.core.math.share_math import (
    exchange_ratio,
    is_bootstrap,
    quote_enter,
    quote_leave,
)
from src.core.math.uint_math import UINT256_MAX


class PoolState(BaseModel):
    """
    Снапшот пула.

    Immutable модель (frozen=True).
    """

    total_shares: int = Field(..., ge=0, le=UINT256_MAX, description="S — supply share-токена")
    reserve: int = Field(..., ge=0, le=UINT256_MAX, description="R — резерв asset на адресе пула")

    model_config = {"frozen": True}

    @property
    def is_bootstrap(self) -> bool:
        """S == 0 или R == 0: первый депозит минтит 1:1."""
        return is_bootstrap(self.total_shares, self.reserve)

    @property
    def exchange_ratio(self) -> Optional[Fraction]:
        """S / R, либо None в bootstrap-состоянии."""
        return exchange_ratio(self.total_shares, self.reserve)

    def quote_enter(self, amount_in: int) -> int:
        return quote_enter(amount_in, self.total_shares, self.reserve)

    def quote_leave(self, shares_in: int) -> int:
        return quote_leave(shares_in, self.total_shares, self.reserve)

    def to_contract(self) -> Dict[str, Any]:
        """
        Сериализация в pool_state контракт.

        Количества кодируются десятичными строками: uint256 не помещается
        в JSON number без потери точности.
        """
        ratio = self.exchange_ratio
        return {
            "total_shares": str(self.total_shares),
            "reserve": str(self.reserve),
            "is_bootstrap": self.is_bootstrap,
            "exchange_ratio": None if ratio is None else f"{ratio.numerator}/{ratio.denominator}",
        }
