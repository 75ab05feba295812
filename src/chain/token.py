"""
FungibleToken — симулируемый fungible-токен

Интерфейс: balance_of, total_supply, allowance, approve, transfer,
transfer_from. Отправитель передаётся явно (sender / spender), так как
в симуляции нет неявного контекста вызова.

Реализации токенов по-разному сигнализируют неудачу перевода:
- FailureMode.REVERT: исключение (InsufficientBalance / InsufficientAllowance /
  TransferBlocked)
- FailureMode.RETURN_FALSE: вызов возвращает False, состояние не меняется

Заблокированные адреса (block) моделируют токены с blacklist: любой
перевод с/на такой адрес завершается неудачей согласно failure_mode.

Allowance, равный UINT256_MAX, считается бесконечным и не уменьшается
при transfer_from.
"""

import logging
from enum import Enum
from typing import Optional, Set, Type

from src.chain.contract import Chain, Contract
from src.core.domain.address import Address, validate_address
from src.core.errors import InsufficientAllowance, InsufficientBalance, Revert, TransferBlocked
from src.core.math.uint_math import UINT256_MAX, checked_add, checked_sub, validate_uint

logger = logging.getLogger(__name__)


class FailureMode(str, Enum):
    """Способ сигнализации неудачного перевода"""

    REVERT = "revert"
    RETURN_FALSE = "return_false"


class FungibleToken(Contract):
    """Fungible-токен поверх Ledger."""

    def __init__(
        self,
        chain: Chain,
        label: str,
        symbol: Optional[str] = None,
        failure_mode: FailureMode = FailureMode.REVERT,
    ) -> None:
        super().__init__(chain, label)
        self.symbol = symbol or label.upper()
        self.failure_mode = failure_mode
        self._blocked: Set[Address] = set()

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def balance_of(self, holder: Address) -> int:
        return self.ledger.read(self._slot("balance", holder))

    def total_supply(self) -> int:
        return self.ledger.read(self._slot("total_supply"))

    def allowance(self, owner: Address, spender: Address) -> int:
        return self.ledger.read(self._slot("allowance", owner, spender))

    def is_blocked(self, holder: Address) -> bool:
        return holder in self._blocked

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def approve(self, owner: Address, spender: Address, amount: int) -> bool:
        validate_address(spender, "spender")
        validate_uint(amount, "amount")
        self.ledger.write(self._slot("allowance", owner, spender), amount)
        return True

    def transfer(self, sender: Address, to: Address, amount: int) -> bool:
        validate_address(to, "to")
        validate_uint(amount, "amount")

        if self._is_blocked_pair(sender, to):
            return self._fail(TransferBlocked, f"{self.symbol}: transfer {sender} -> {to} blocked")

        if self.balance_of(sender) < amount:
            return self._fail(
                InsufficientBalance,
                f"{self.symbol}: balance {self.balance_of(sender)} < {amount} for {sender}",
            )

        self._move(sender, to, amount)
        return True

    def transfer_from(self, spender: Address, owner: Address, to: Address, amount: int) -> bool:
        validate_address(to, "to")
        validate_uint(amount, "amount")

        if self._is_blocked_pair(owner, to):
            return self._fail(TransferBlocked, f"{self.symbol}: transfer {owner} -> {to} blocked")

        allowed = self.allowance(owner, spender)
        if allowed < amount:
            return self._fail(
                InsufficientAllowance,
                f"{self.symbol}: allowance {allowed} < {amount} for {spender} on {owner}",
            )

        if self.balance_of(owner) < amount:
            return self._fail(
                InsufficientBalance,
                f"{self.symbol}: balance {self.balance_of(owner)} < {amount} for {owner}",
            )

        if allowed != UINT256_MAX:
            self.ledger.write(self._slot("allowance", owner, spender), allowed - amount)

        self._move(owner, to, amount)
        return True

    # -------------------------------------------------------------------------
    # Supply (вызывается пулом и при настройке среды)
    # -------------------------------------------------------------------------

    def mint(self, to: Address, amount: int) -> None:
        validate_address(to, "to")
        validate_uint(amount, "amount")
        self.ledger.write(self._slot("total_supply"), checked_add(self.total_supply(), amount))
        self.ledger.write(self._slot("balance", to), checked_add(self.balance_of(to), amount))

    def burn(self, holder: Address, amount: int) -> None:
        validate_uint(amount, "amount")
        balance = self.balance_of(holder)
        if balance < amount:
            raise InsufficientBalance(f"{self.symbol}: burn {amount} exceeds balance {balance} of {holder}")
        self.ledger.write(self._slot("balance", holder), balance - amount)
        self.ledger.write(self._slot("total_supply"), checked_sub(self.total_supply(), amount))

    def block(self, holder: Address) -> None:
        self._blocked.add(holder)

    def unblock(self, holder: Address) -> None:
        self._blocked.discard(holder)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _is_blocked_pair(self, source: Address, destination: Address) -> bool:
        return source in self._blocked or destination in self._blocked

    def _move(self, source: Address, destination: Address, amount: int) -> None:
        if amount == 0 or source == destination:
            return
        self.ledger.write(self._slot("balance", source), checked_sub(self.balance_of(source), amount))
        self.ledger.write(
            self._slot("balance", destination), checked_add(self.balance_of(destination), amount)
        )

    def _fail(self, error: Type[Revert], message: str) -> bool:
        if self.failure_mode == FailureMode.RETURN_FALSE:
            logger.debug("%s (returning False)", message)
            return False
        raise error(message)
