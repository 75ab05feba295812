"""
Chain / Contract — реестр контрактов и диспетчеризация вызовов

Chain владеет Ledger и реестром контрактов по адресам. Contract —
базовый класс симулируемого контракта: адрес, выведенный из метки,
доступ к своим слотам хранилища и диспетчеризация Call по списку
экспортируемых функций (EXPOSED).
"""

import logging
from typing import Any, ClassVar, ContextManager, Dict, FrozenSet, Optional

from src.chain.ledger import Ledger
from src.core.domain.address import Address, address_from_label
from src.core.domain.call import Call
from src.core.errors import UnknownContract, UnknownFunction

logger = logging.getLogger(__name__)


class Chain:
    """Симулируемая среда исполнения: хранилище + реестр контрактов."""

    def __init__(self, ledger: Optional[Ledger] = None) -> None:
        self.ledger = ledger or Ledger()
        self._contracts: Dict[Address, "Contract"] = {}

    def register(self, contract: "Contract") -> None:
        if contract.address in self._contracts:
            raise ValueError(f"Address {contract.address} already registered ({contract.label})")
        self._contracts[contract.address] = contract

    def contract_at(self, address: Address) -> "Contract":
        try:
            return self._contracts[address]
        except KeyError:
            raise UnknownContract(f"No contract at {address}") from None

    def atomic(self) -> ContextManager[Ledger]:
        """Атомарная область (см. Ledger.transaction)."""
        return self.ledger.transaction()

    def call(self, target: Address, call: Call) -> Any:
        """Вызов экспортируемой функции контракта по адресу."""
        return self.contract_at(target).dispatch(call)


class Contract:
    """
    Базовый симулируемый контракт.

    Подклассы перечисляют в EXPOSED функции, доступные через dispatch().
    """

    EXPOSED: ClassVar[FrozenSet[str]] = frozenset()

    def __init__(self, chain: Chain, label: str) -> None:
        self.chain = chain
        self.label = label
        self.address: Address = address_from_label(label)
        chain.register(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(label={self.label!r}, address={self.address})"

    @property
    def ledger(self) -> Ledger:
        return self.chain.ledger

    def _slot(self, name: str, *keys: Any) -> tuple:
        return (self.address, name, *keys)

    def dispatch(self, call: Call) -> Any:
        """
        Выполнение Call на этом контракте.

        Raises:
            UnknownFunction: Функция не экспортируется
        """
        if call.function not in self.EXPOSED:
            raise UnknownFunction(f"{self.label} does not expose {call.function!r}")

        logger.debug("dispatch %s.%s(%s)", self.label, call.function, call.args)
        return getattr(self, call.function)(**call.args)
