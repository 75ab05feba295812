"""
Interfaces — протоколы внешних коллабораторов executor'а

Executor зависит только от этих протоколов, а не от конкретных
реализаций FungibleToken / SharePool.
"""

from typing import Protocol, runtime_checkable

from src.core.domain.address import Address


@runtime_checkable
class FungibleTokenLike(Protocol):
    """Fungible-токен: балансы, переводы, approvals."""

    address: Address

    def balance_of(self, holder: Address) -> int: ...

    def total_supply(self) -> int: ...

    def allowance(self, owner: Address, spender: Address) -> int: ...

    def approve(self, owner: Address, spender: Address, amount: int) -> bool: ...

    def transfer(self, sender: Address, to: Address, amount: int) -> bool: ...

    def transfer_from(self, spender: Address, owner: Address, to: Address, amount: int) -> bool: ...


@runtime_checkable
class SharePoolLike(FungibleTokenLike, Protocol):
    """Share-пул: сам является share-токеном и держит резерв asset."""

    def enter(self, sender: Address, asset_amount: int) -> int: ...

    def leave(self, sender: Address, share_amount: int) -> int: ...

    def reserve_balance(self) -> int: ...

    def underlying_asset(self) -> FungibleTokenLike: ...
