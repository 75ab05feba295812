"""
Tests for Domain Models

Проверяет:
- Address: детерминированный вывод из метки, валидация формата
- AmountSpec: tagged-вариант exact / full_balance, wire-конверсия
- PoolState: bootstrap, курс, котировки, сериализация в контракт
- Call / SnwapRequest: immutable модели, валидация полей
"""

from fractions import Fraction

import pytest
from pydantic import ValidationError

from src.core.domain import (
    ZERO_ADDRESS,
    AmountKind,
    AmountSpec,
    Call,
    InputTokenSpec,
    OutputTokenSpec,
    PoolState,
    SnwapMultipleRequest,
    SnwapRequest,
    address_from_label,
    coerce_amount,
    is_address,
    validate_address,
)
from src.core.errors import ArithmeticUnderflow
from src.core.math.uint_math import UINT256_MAX

ALICE = address_from_label("alice")
BOB = address_from_label("bob")


# =============================================================================
# ADDRESS
# =============================================================================


class TestAddress:
    """Тесты адресов"""

    def test_deterministic(self) -> None:
        """Одна метка всегда даёт один адрес."""
        assert address_from_label("alice") == ALICE
        assert ALICE != BOB

    def test_format(self) -> None:
        """Адрес — '0x' + 40 hex-символов."""
        assert ALICE.startswith("0x")
        assert len(ALICE) == 42
        assert is_address(ALICE)
        assert is_address(ZERO_ADDRESS)

    def test_empty_label_rejected(self) -> None:
        """Пустая метка отклоняется."""
        with pytest.raises(ValueError, match="label must be non-empty"):
            address_from_label("")

    def test_validate_address(self) -> None:
        """validate_address пропускает адрес и отклоняет мусор."""
        assert validate_address(ALICE, "recipient") == ALICE
        with pytest.raises(ValueError, match="recipient"):
            validate_address("alice", "recipient")
        assert not is_address(None)


# =============================================================================
# AMOUNT SPEC
# =============================================================================


class TestAmountSpec:
    """Тесты AmountSpec"""

    def test_exact(self) -> None:
        """exact(n) несёт сумму n."""
        spec = AmountSpec.exact(50)
        assert spec.kind == AmountKind.EXACT
        assert spec.value == 50
        assert not spec.is_full_balance

    def test_full_balance(self) -> None:
        """full_balance() без собственной суммы."""
        spec = AmountSpec.full_balance()
        assert spec.kind == AmountKind.FULL_BALANCE
        assert spec.is_full_balance

    def test_wire_zero_is_full_balance(self) -> None:
        """0 на проводе — sentinel 'весь баланс'"""
        assert AmountSpec.from_wire(0) == AmountSpec.full_balance()

    def test_wire_nonzero_is_exact(self) -> None:
        """Ненулевая wire-сумма — точная."""
        assert AmountSpec.from_wire(7) == AmountSpec.exact(7)

    def test_to_wire(self) -> None:
        """to_wire — обратное отображение from_wire."""
        assert AmountSpec.full_balance().to_wire() == 0
        assert AmountSpec.exact(7).to_wire() == 7

    def test_exact_zero_not_encodable(self) -> None:
        """exact(0) неотличим от sentinel на проводе"""
        with pytest.raises(ValueError, match="full-balance sentinel"):
            AmountSpec.exact(0).to_wire()

    def test_resolve(self) -> None:
        """resolve подставляет баланс только для FULL_BALANCE."""
        assert AmountSpec.full_balance().resolve(123) == 123
        assert AmountSpec.exact(5).resolve(123) == 5

    def test_full_balance_with_value_rejected(self) -> None:
        """FULL_BALANCE с суммой — ошибка валидации."""
        with pytest.raises(ValidationError, match="must not carry a value"):
            AmountSpec(kind=AmountKind.FULL_BALANCE, value=5)

    def test_range(self) -> None:
        """Сумма ограничена диапазоном uint256."""
        assert AmountSpec.exact(UINT256_MAX).value == UINT256_MAX
        with pytest.raises(ValidationError):
            AmountSpec.exact(-1)
        with pytest.raises(ValidationError):
            AmountSpec.exact(UINT256_MAX + 1)

    def test_from_wire_negative_rejected(self) -> None:
        """Отрицательная wire-сумма отклоняется."""
        with pytest.raises(ArithmeticUnderflow):
            AmountSpec.from_wire(-1)

    def test_from_wire_decimal_string(self) -> None:
        """from_wire принимает десятичную строку JSON-контракта."""
        assert AmountSpec.from_wire("0") == AmountSpec.full_balance()
        assert AmountSpec.from_wire("50") == AmountSpec.exact(50)
        assert coerce_amount("50") == AmountSpec.exact(50)

    def test_from_wire_malformed_string_rejected(self) -> None:
        """Неканоническая строка отклоняется."""
        with pytest.raises(ValueError, match="canonical decimal"):
            AmountSpec.from_wire("0x32")

    def test_coerce(self) -> None:
        """coerce_amount принимает AmountSpec и wire int."""
        spec = AmountSpec.exact(3)
        assert coerce_amount(spec) is spec
        assert coerce_amount(0).is_full_balance
        assert coerce_amount(3) == spec

    def test_immutable(self) -> None:
        """AmountSpec неизменяем."""
        spec = AmountSpec.exact(3)
        with pytest.raises(ValidationError):
            spec.value = 4  # type: ignore[misc]


# =============================================================================
# POOL STATE
# =============================================================================


class TestPoolState:
    """Тесты PoolState"""

    def test_bootstrap(self) -> None:
        """Пустой пул — bootstrap."""
        assert PoolState(total_shares=0, reserve=0).is_bootstrap
        assert PoolState(total_shares=0, reserve=10).is_bootstrap
        assert PoolState(total_shares=10, reserve=0).is_bootstrap
        assert not PoolState(total_shares=10, reserve=10).is_bootstrap

    def test_exchange_ratio(self) -> None:
        """Курс S/R как несократимая дробь."""
        assert PoolState(total_shares=100, reserve=150).exchange_ratio == Fraction(2, 3)
        assert PoolState(total_shares=0, reserve=150).exchange_ratio is None

    def test_quotes(self) -> None:
        """Котировки модели совпадают с share_math."""
        state = PoolState(total_shares=100, reserve=150)
        assert state.quote_enter(50) == 33
        assert state.quote_leave(33) == 49

    def test_negative_rejected(self) -> None:
        """Отрицательный резерв отклоняется."""
        with pytest.raises(ValidationError):
            PoolState(total_shares=-1, reserve=0)

    def test_to_contract(self) -> None:
        """to_contract кодирует суммы строками."""
        contract = PoolState(total_shares=100, reserve=150).to_contract()
        assert contract == {
            "total_shares": "100",
            "reserve": "150",
            "is_bootstrap": False,
            "exchange_ratio": "2/3",
        }

    def test_to_contract_bootstrap(self) -> None:
        """В bootstrap exchange_ratio — null."""
        contract = PoolState(total_shares=0, reserve=0).to_contract()
        assert contract["is_bootstrap"] is True
        assert contract["exchange_ratio"] is None


# =============================================================================
# CALL / SNWAP REQUESTS
# =============================================================================


class TestCall:
    """Тесты Call"""

    def test_decimal_string_amount_decoded(self) -> None:
        """Строковый amount_in декодируется в int, прочие args не трогаются."""
        call = Call(function="enter_share_vault", args={"amount_in": "50", "recipient": ALICE})
        assert call.args == {"amount_in": 50, "recipient": ALICE}

    @pytest.mark.parametrize("amount", ["050", "-1", "abc", str(UINT256_MAX + 1)])
    def test_malformed_string_amount_rejected(self, amount: str) -> None:
        """Некорректная строковая сумма — ошибка валидации модели."""
        with pytest.raises(ValidationError):
            Call(function="enter_share_vault", args={"amount_in": amount})

    def test_to_contract_encodes_amount(self) -> None:
        """to_contract кодирует amount_in десятичной строкой."""
        call = Call(function="leave_share_vault", args={"amount_in": 0, "recipient": BOB})
        assert call.to_contract() == {
            "function": "leave_share_vault",
            "args": {"amount_in": "0", "recipient": BOB},
        }

    def test_defaults(self) -> None:
        """args по умолчанию пустой."""
        call = Call(function="enter_share_vault")
        assert call.args == {}

    def test_empty_function_rejected(self) -> None:
        """Пустое имя функции отклоняется."""
        with pytest.raises(ValidationError):
            Call(function="")


class TestSnwapRequest:
    """Тесты SnwapRequest / SnwapMultipleRequest"""

    def _request_data(self) -> dict:
        return {
            "token_in": address_from_label("asset"),
            "amount_in": 50,
            "recipient": ALICE,
            "token_out": address_from_label("share_pool"),
            "min_amount_out": 33,
            "target": address_from_label("executor"),
            "payload": {"function": "enter_share_vault", "args": {"amount_in": 0, "recipient": ALICE}},
        }

    def test_valid(self) -> None:
        """Корректный запрос строится."""
        request = SnwapRequest.model_validate(self._request_data())
        assert request.amount_in == 50
        assert request.payload.function == "enter_share_vault"

    def test_invalid_address_rejected(self) -> None:
        """Некорректный адрес отклоняется."""
        data = self._request_data()
        data["recipient"] = "alice"
        with pytest.raises(ValidationError):
            SnwapRequest.model_validate(data)

    def test_negative_min_rejected(self) -> None:
        """Отрицательный min_amount_out отклоняется."""
        data = self._request_data()
        data["min_amount_out"] = -1
        with pytest.raises(ValidationError):
            SnwapRequest.model_validate(data)

    def test_multiple_requires_output(self) -> None:
        """Пакетный запрос требует хотя бы один output."""
        with pytest.raises(ValidationError):
            SnwapMultipleRequest(
                inputs=[InputTokenSpec(token=address_from_label("asset"), amount_in=1)],
                outputs=[],
                target=address_from_label("executor"),
                payload=Call(function="enter_share_vault"),
            )

    def test_multiple_valid(self) -> None:
        """inputs по умолчанию пустой."""
        request = SnwapMultipleRequest(
            outputs=[OutputTokenSpec(token=address_from_label("share_pool"), recipient=BOB, min_amount_out=1)],
            target=address_from_label("executor"),
            payload=Call(function="enter_share_vault"),
        )
        assert request.inputs == []
        assert request.outputs[0].recipient == BOB
