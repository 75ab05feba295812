"""
SharePool — пул, выпускающий share-токен против резерва asset

Пул сам является share-токеном. Резерв — баланс asset-токена на адресе
пула, поэтому прямой перевод asset на пул (donation) увеличивает R без
выпуска shares и сдвигает курс против последующих депозиторов.

enter(sender, asset_amount):
    shares = quote_enter(asset_amount, S, R); mint(sender, shares);
    asset.transfer_from(pool, sender, pool, asset_amount)
leave(sender, share_amount):
    assets = quote_leave(share_amount, S, R); burn(sender, share_amount);
    asset.transfer(pool, sender, assets)

Формулы общие с котировками executor'а (src.core.math.share_math).
"""

import logging

from src.chain.contract import Chain
from src.chain.token import FailureMode, FungibleToken
from src.core.domain.address import Address
from src.core.domain.pool_state import PoolState
from src.core.errors import UnderlyingTransferFailure
from src.core.math.share_math import quote_enter, quote_leave
from src.core.math.uint_math import validate_uint

logger = logging.getLogger(__name__)


class SharePool(FungibleToken):
    """Share-пул поверх asset-токена."""

    def __init__(
        self,
        chain: Chain,
        label: str,
        asset: FungibleToken,
        symbol: str | None = None,
        failure_mode: FailureMode = FailureMode.REVERT,
    ) -> None:
        super().__init__(chain, label, symbol=symbol, failure_mode=failure_mode)
        self._asset = asset

    def underlying_asset(self) -> FungibleToken:
        return self._asset

    def reserve_balance(self) -> int:
        return self._asset.balance_of(self.address)

    def state(self) -> PoolState:
        return PoolState(total_shares=self.total_supply(), reserve=self.reserve_balance())

    def enter(self, sender: Address, asset_amount: int) -> int:
        """
        Внести asset_amount и получить shares.

        Returns:
            Количество выпущенных shares (вызывающим доверять не следует)
        """
        validate_uint(asset_amount, "asset_amount")

        with self.chain.atomic():
            shares = quote_enter(asset_amount, self.total_supply(), self.reserve_balance())
            self.mint(sender, shares)

            if not self._asset.transfer_from(self.address, sender, self.address, asset_amount):
                raise UnderlyingTransferFailure(self._asset.address)

        logger.debug("%s.enter: %s deposited %d, minted %d", self.label, sender, asset_amount, shares)
        return shares

    def leave(self, sender: Address, share_amount: int) -> int:
        """
        Сжечь share_amount и получить пропорциональную долю резерва.

        Returns:
            Количество возвращённого asset
        """
        validate_uint(share_amount, "share_amount")

        with self.chain.atomic():
            assets = quote_leave(share_amount, self.total_supply(), self.reserve_balance())
            self.burn(sender, share_amount)

            if not self._asset.transfer(self.address, sender, assets):
                raise UnderlyingTransferFailure(self._asset.address)

        logger.debug("%s.leave: %s burned %d, received %d", self.label, sender, share_amount, assets)
        return assets
