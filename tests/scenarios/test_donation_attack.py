"""
Сценарий: donation между котировкой и исполнением.

Атакующий первым входит в пустой пул минимальной суммой, затем напрямую
переводит asset на адрес пула. Курс сдвигается так, что депозит жертвы
округляется вниз до 0 shares. Executor сам по себе не защищает; guard
с min_amount_out, взятым из котировки, откатывает операцию.
"""

import pytest

from src.chain import Chain, FungibleToken, SharePool
from src.core.domain import address_from_label
from src.core.errors import MinimalOutputBalanceViolation
from src.core.math.uint_math import UINT256_MAX
from src.executor import ShareVaultExecutor, encode_enter_share_vault
from src.guard import SlippageGuard

ATTACKER = address_from_label("attacker")
VICTIM = address_from_label("victim")


@pytest.fixture
def world():
    chain = Chain()
    asset = FungibleToken(chain, "asset", symbol="AST")
    pool = SharePool(chain, "share_pool", asset, symbol="xAST")
    executor = ShareVaultExecutor(chain, "executor", asset, pool)
    guard = SlippageGuard(chain, "guard")

    asset.mint(VICTIM, 100)
    asset.approve(VICTIM, guard.address, UINT256_MAX)
    return chain, asset, pool, executor, guard


def front_run(asset, pool, executor):
    """Атакующий: 1 asset через executor, затем donation 100."""
    asset.mint(ATTACKER, 101)
    asset.transfer(ATTACKER, executor.address, 1)
    executor.enter_share_vault(0, ATTACKER)
    asset.transfer(ATTACKER, pool.address, 100)


class TestDonationAttack:
    """Donation-атака с guard'ом и без."""

    def test_quote_before_attack(self, world):
        """До атаки пустой пул котирует 1:1."""
        _, _, _, executor, _ = world
        assert executor.quote_enter_share_vault(100) == 100

    def test_unguarded_victim_gets_nothing(self, world):
        """Без guard'а депозит жертвы округляется до 0 shares."""
        _, asset, pool, executor, _ = world
        front_run(asset, pool, executor)

        asset.transfer(VICTIM, executor.address, 100)
        executor.enter_share_vault(0, VICTIM)

        assert pool.balance_of(VICTIM) == 0
        assert pool.balance_of(ATTACKER) == 1
        assert pool.reserve_balance() == 201
        assert pool.balance_of(executor.address) == 0

    def test_guard_reverts_victim_deposit(self, world):
        """Guard с минимумом из котировки откатывает депозит жертвы."""
        chain, asset, pool, executor, guard = world
        min_amount_out = executor.quote_enter_share_vault(100)
        front_run(asset, pool, executor)
        before = chain.ledger.snapshot()

        with pytest.raises(MinimalOutputBalanceViolation) as exc_info:
            guard.snwap(
                sender=VICTIM,
                token_in=asset.address,
                amount_in=100,
                recipient=VICTIM,
                token_out=pool.address,
                min_amount_out=min_amount_out,
                target=executor.address,
                payload=encode_enter_share_vault(0, VICTIM),
            )

        assert exc_info.value.token == pool.address
        assert exc_info.value.actual_amount_out == 0
        assert chain.ledger.snapshot() == before
        assert asset.balance_of(VICTIM) == 100

    def test_guard_with_tolerance_one_still_reverts(self, world):
        """Даже min_amount_out = 1 ловит округление до нуля."""
        _, asset, pool, executor, guard = world
        front_run(asset, pool, executor)

        with pytest.raises(MinimalOutputBalanceViolation) as exc_info:
            guard.snwap(
                sender=VICTIM,
                token_in=asset.address,
                amount_in=100,
                recipient=VICTIM,
                token_out=pool.address,
                min_amount_out=1,
                target=executor.address,
                payload=encode_enter_share_vault(0, VICTIM),
            )
        assert exc_info.value.actual_amount_out == 0

    def test_guard_passes_without_attack(self, world):
        """Без атаки guard пропускает депозит."""
        _, asset, pool, executor, guard = world
        min_amount_out = executor.quote_enter_share_vault(100)

        result = guard.snwap(
            sender=VICTIM,
            token_in=asset.address,
            amount_in=100,
            recipient=VICTIM,
            token_out=pool.address,
            min_amount_out=min_amount_out,
            target=executor.address,
            payload=encode_enter_share_vault(0, VICTIM),
        )
        assert result.amount_out == 100
