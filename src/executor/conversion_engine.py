"""
ShareVaultExecutor — Conversion Engine между asset и share-токеном пула.

Stateless executor: хранит только неизменяемые ссылки на asset-токен,
share-пул и ExecutorConfig. При создании один раз выдаёт пулу
бесконечный approval, дальше состояния не меняет.

Операции:
- enter_share_vault(amount_in, recipient): asset → shares → recipient
- leave_share_vault(amount_in, recipient): shares → asset → recipient
- quote_enter_share_vault / quote_leave_share_vault: котировки по живому
  состоянию пула (без кэша)

Учёт по дельте баланса:
    before = balance(executor); pool.enter/leave(...); after = balance(executor)
    delta = after - before  → пересылается получателю целиком
Ни возвращаемому значению пула, ни абсолютному балансу executor'а не
доверяем: на executor'е могут лежать чужие токены.

Executor разделяется между несвязанными вызывающими. Любой баланс,
оставшийся на нём после вызова, достанется следующему вызывающему,
поэтому после каждого вызова баланс возвращается к значению до вызова
(no-dust invariant).

Executor не защищает от сдвига курса третьей стороной (donation) между
котировкой и исполнением: для этого вызов идёт через SlippageGuard.
"""

import logging
from typing import Optional

from src.chain.contract import Chain, Contract
from src.chain.interfaces import FungibleTokenLike, SharePoolLike
from src.core.domain.address import Address, validate_address
from src.core.domain.amounts import AmountLike, AmountSpec, coerce_amount
from src.core.domain.call import Call
from src.core.domain.pool_state import PoolState
from src.core.errors import InsufficientFunds, UnderlyingTransferFailure
from src.core.math.uint_math import UINT256_MAX, checked_sub
from src.executor.config import ExecutorConfig

logger = logging.getLogger(__name__)

ENTER_SHARE_VAULT = "enter_share_vault"
LEAVE_SHARE_VAULT = "leave_share_vault"
QUOTE_ENTER_SHARE_VAULT = "quote_enter_share_vault"
QUOTE_LEAVE_SHARE_VAULT = "quote_leave_share_vault"


class ShareVaultExecutor(Contract):
    """Conversion Engine.

    Args:
        chain: среда исполнения
        label: метка, из которой выводится адрес executor'а
        asset: asset-токен
        pool: share-пул, чей underlying_asset() совпадает с asset
        config: неизменяемая конфигурация (по умолчанию FULL_DELTA)
    """

    EXPOSED = frozenset(
        {
            ENTER_SHARE_VAULT,
            LEAVE_SHARE_VAULT,
            QUOTE_ENTER_SHARE_VAULT,
            QUOTE_LEAVE_SHARE_VAULT,
        }
    )

    def __init__(
        self,
        chain: Chain,
        label: str,
        asset: FungibleTokenLike,
        pool: SharePoolLike,
        config: Optional[ExecutorConfig] = None,
    ) -> None:
        if pool.underlying_asset().address != asset.address:
            raise ValueError(
                f"pool underlying asset {pool.underlying_asset().address} "
                f"does not match asset {asset.address}"
            )

        super().__init__(chain, label)
        self._asset = asset
        self._pool = pool
        self._config = config or ExecutorConfig()

        # Единственная настройка за время жизни: бесконечный approval пулу
        with self.chain.atomic():
            if not self._asset.approve(self.address, self._pool.address, UINT256_MAX):
                raise UnderlyingTransferFailure(self._asset.address, "standing approval rejected")

        logger.info(
            "%s deployed at %s: asset=%s pool=%s policy=%s",
            self.label,
            self.address,
            self._asset.address,
            self._pool.address,
            self._config.forwarding_policy.value,
        )

    @property
    def asset(self) -> FungibleTokenLike:
        return self._asset

    @property
    def pool(self) -> SharePoolLike:
        return self._pool

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    # -------------------------------------------------------------------------
    # Quotes
    # -------------------------------------------------------------------------

    def pool_state(self) -> PoolState:
        """Снапшот пула: S = supply shares, R = баланс asset на адресе пула."""
        return PoolState(
            total_shares=self._pool.total_supply(),
            reserve=self._asset.balance_of(self._pool.address),
        )

    def quote_enter_share_vault(self, amount_in: int) -> int:
        """Shares за amount_in asset при текущем состоянии пула."""
        return self.pool_state().quote_enter(amount_in)

    def quote_leave_share_vault(self, amount_in: int) -> int:
        """Asset за amount_in shares при текущем состоянии пула."""
        return self.pool_state().quote_leave(amount_in)

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def enter_share_vault(self, amount_in: AmountLike, recipient: Address) -> None:
        """Внести asset в пул и переслать выпущенные shares получателю.

        Args:
            amount_in: AmountSpec или wire int (0 = весь asset-баланс executor'а)
            recipient: получатель shares

        Raises:
            InsufficientFunds: full balance разрешился в 0
            UnderlyingTransferFailure: share-токен вернул False
        """
        spec = coerce_amount(amount_in)
        validate_address(recipient, "recipient")

        with self.chain.atomic():
            amount = self._resolve(spec, self._asset)

            shares_before = self._pool.balance_of(self.address)
            self._pool.enter(self.address, amount)
            shares_after = self._pool.balance_of(self.address)

            minted = checked_sub(shares_after, shares_before)
            logger.debug(
                "%s enter: amount=%d shares %d -> %d (minted=%d)",
                self.label, amount, shares_before, shares_after, minted,
            )

            forwarded = self._forward(self._pool, recipient, minted)

        logger.info("%s enter: %d asset -> %d shares to %s", self.label, amount, forwarded, recipient)

    def leave_share_vault(self, amount_in: AmountLike, recipient: Address) -> None:
        """Погасить shares и переслать полученный asset получателю.

        Args:
            amount_in: AmountSpec или wire int (0 = весь share-баланс executor'а)
            recipient: получатель asset

        Raises:
            InsufficientFunds: full balance разрешился в 0
            UnderlyingTransferFailure: asset-токен вернул False
        """
        spec = coerce_amount(amount_in)
        validate_address(recipient, "recipient")

        with self.chain.atomic():
            amount = self._resolve(spec, self._pool)

            assets_before = self._asset.balance_of(self.address)
            self._pool.leave(self.address, amount)
            assets_after = self._asset.balance_of(self.address)

            received = checked_sub(assets_after, assets_before)
            logger.debug(
                "%s leave: amount=%d assets %d -> %d (received=%d)",
                self.label, amount, assets_before, assets_after, received,
            )

            forwarded = self._forward(self._asset, recipient, received)

        logger.info("%s leave: %d shares -> %d asset to %s", self.label, amount, forwarded, recipient)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _resolve(self, spec: AmountSpec, token: FungibleTokenLike) -> int:
        if not spec.is_full_balance:
            return spec.value

        held = token.balance_of(self.address)
        if held == 0:
            raise InsufficientFunds(f"{self.label} holds no {token.address} to convert")
        return spec.resolve(held)

    def _forward(self, token: FungibleTokenLike, recipient: Address, delta: int) -> int:
        amount = self._config.forwarded_amount(delta)
        if not token.transfer(self.address, recipient, amount):
            raise UnderlyingTransferFailure(token.address)
        return amount


# =============================================================================
# PAYLOAD ENCODERS
# =============================================================================


def encode_enter_share_vault(amount_in: AmountLike, recipient: Address) -> Call:
    """Call для enter_share_vault в формате calling convention."""
    return Call(
        function=ENTER_SHARE_VAULT,
        args={"amount_in": coerce_amount(amount_in).to_wire(), "recipient": recipient},
    )


def encode_leave_share_vault(amount_in: AmountLike, recipient: Address) -> Call:
    """Call для leave_share_vault в формате calling convention."""
    return Call(
        function=LEAVE_SHARE_VAULT,
        args={"amount_in": coerce_amount(amount_in).to_wire(), "recipient": recipient},
    )
