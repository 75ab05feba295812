"""
Тесты для модуля ShareMath

Проверяет:
1. Bootstrap: S == 0 или R == 0 → 1:1
2. Пропорциональный enter/leave с floor-округлением
3. Курс и его отсутствие в bootstrap-состоянии
"""

from fractions import Fraction

import pytest

from src.core.errors import ArithmeticOverflow, ArithmeticUnderflow
from src.core.math.share_math import exchange_ratio, is_bootstrap, quote_enter, quote_leave
from src.core.math.uint_math import UINT256_MAX


class TestBootstrap:
    """Тесты bootstrap-состояния"""

    @pytest.mark.parametrize("total_shares,reserve", [(0, 0), (0, 100), (100, 0)])
    def test_is_bootstrap(self, total_shares: int, reserve: int) -> None:
        """S == 0 или R == 0 — bootstrap."""
        assert is_bootstrap(total_shares, reserve)

    def test_not_bootstrap(self) -> None:
        """S > 0 и R > 0 — не bootstrap."""
        assert not is_bootstrap(1, 1)

    @pytest.mark.parametrize("total_shares,reserve", [(0, 0), (0, 100), (100, 0)])
    @pytest.mark.parametrize("amount", [1, 50, 10**18])
    def test_quote_enter_is_one_to_one(self, total_shares: int, reserve: int, amount: int) -> None:
        """Первый депозит минтит 1:1"""
        assert quote_enter(amount, total_shares, reserve) == amount

    def test_exchange_ratio_none(self) -> None:
        """В bootstrap курс не определён."""
        assert exchange_ratio(0, 100) is None
        assert exchange_ratio(100, 0) is None


class TestQuoteEnter:
    """Тесты для quote_enter"""

    def test_steady_state_one_to_one(self) -> None:
        """(R=100, S=100), депозит 50 → 50"""
        assert quote_enter(50, 100, 100) == 50

    def test_skewed_ratio_floors(self) -> None:
        """(R=150, S=100), депозит 50 → floor(33.33) = 33, не 34"""
        assert quote_enter(50, 100, 150) == 33

    def test_donation_can_round_to_zero(self) -> None:
        """(R=101, S=1), депозит 100 → 0 shares"""
        assert quote_enter(100, 1, 101) == 0

    def test_zero_amount(self) -> None:
        """0 asset → 0 shares."""
        assert quote_enter(0, 100, 150) == 0

    def test_overflow(self) -> None:
        """Переполнение amount * S → ArithmeticOverflow."""
        with pytest.raises(ArithmeticOverflow):
            quote_enter(UINT256_MAX, 2, 1)

    def test_negative_amount_rejected(self) -> None:
        """Отрицательная сумма отклоняется."""
        with pytest.raises(ArithmeticUnderflow):
            quote_enter(-1, 100, 100)


class TestQuoteLeave:
    """Тесты для quote_leave"""

    def test_no_shares_returns_zero(self) -> None:
        """S == 0: погашать нечего"""
        assert quote_leave(10, 0, 100) == 0

    def test_full_redeem(self) -> None:
        """Все shares → весь резерв."""
        assert quote_leave(80, 80, 80) == 80

    def test_proportional_floor(self) -> None:
        """(R=150, S=100): 33 shares → floor(49.5) = 49"""
        assert quote_leave(33, 100, 150) == 49

    def test_empty_reserve_returns_zero(self) -> None:
        """При R == 0 погашение даёт 0."""
        assert quote_leave(10, 100, 0) == 0

    def test_round_trip_never_gains(self) -> None:
        """enter → leave не возвращает больше внесённого"""
        total_shares, reserve = 100, 150
        for amount in (1, 2, 3, 49, 50, 51, 997):
            shares = quote_enter(amount, total_shares, reserve)
            assets = quote_leave(shares, total_shares + shares, reserve + amount)
            assert assets <= amount


class TestExchangeRatio:
    """Тесты для exchange_ratio"""

    def test_ratio(self) -> None:
        """Курс S/R сокращается."""
        assert exchange_ratio(100, 150) == Fraction(2, 3)
        assert exchange_ratio(100, 100) == 1
