"""
Chain — симулируемая среда исполнения: хранилище, токены, share-пул.

- Ledger: журналируемое хранилище с атомарными транзакциями (savepoints)
- Chain / Contract: реестр контрактов, диспетчеризация Call
- FungibleToken: токен с REVERT / RETURN_FALSE семантикой неудач
- SharePool: пул, выпускающий shares против резерва asset
"""

from .contract import Chain, Contract
from .interfaces import FungibleTokenLike, SharePoolLike
from .ledger import Ledger, SlotChange
from .share_pool import SharePool
from .token import FailureMode, FungibleToken

__all__ = [
    "Chain",
    "Contract",
    "Ledger",
    "SlotChange",
    "FungibleToken",
    "FailureMode",
    "SharePool",
    "FungibleTokenLike",
    "SharePoolLike",
]
