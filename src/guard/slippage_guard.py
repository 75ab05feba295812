"""
SlippageGuard — минимальный выход в пределах одной атомарной операции.

Протокол snwap:
1. Снапшот баланса recipient в token_out
2. Перемещение amount_in токена token_in от вызывающего в target
   (при amount_in == 0 перевод пропускается: target уже профинансирован),
   затем вызов payload на target
3. Повторный снапшот; amount_out = after - before
4. amount_out < min_amount_out → MinimalOutputBalanceViolation(token_out, amount_out)
   и откат всей операции
5. Иначе операция окончательна

Фазы запроса:
    PENDING → FUNDS_MOVED → TARGET_INVOKED → VERIFIED → SUCCESS
    любая нетерминальная фаза → REVERTED

Guard — единственная защита от сдвига курса третьей стороной (donation)
между котировкой и исполнением: проверка выхода идёт в той же атомарной
операции, что и конверсия.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Sequence, Tuple

from src.chain.contract import Contract
from src.chain.interfaces import FungibleTokenLike
from src.core.domain.address import Address, validate_address
from src.core.domain.call import Call
from src.core.domain.snwap import (
    InputTokenSpec,
    OutputTokenSpec,
    SnwapMultipleRequest,
    SnwapRequest,
)
from src.core.errors import MinimalOutputBalanceViolation, UnderlyingTransferFailure
from src.core.math.uint_math import checked_sub, validate_uint

logger = logging.getLogger(__name__)


class SnwapPhase(str, Enum):
    """Фаза обработки запроса."""
    PENDING = "PENDING"
    FUNDS_MOVED = "FUNDS_MOVED"
    TARGET_INVOKED = "TARGET_INVOKED"
    VERIFIED = "VERIFIED"
    SUCCESS = "SUCCESS"
    REVERTED = "REVERTED"


_TERMINAL: FrozenSet[SnwapPhase] = frozenset({SnwapPhase.SUCCESS, SnwapPhase.REVERTED})

_NEXT: Dict[SnwapPhase, SnwapPhase] = {
    SnwapPhase.PENDING: SnwapPhase.FUNDS_MOVED,
    SnwapPhase.FUNDS_MOVED: SnwapPhase.TARGET_INVOKED,
    SnwapPhase.TARGET_INVOKED: SnwapPhase.VERIFIED,
    SnwapPhase.VERIFIED: SnwapPhase.SUCCESS,
}


class SnwapPhaseMachine:
    """Автомат фаз одного запроса.

    Переходы строго последовательны; REVERTED достижим из любой
    нетерминальной фазы. Терминальные фазы не меняются.
    """

    def __init__(self) -> None:
        self._history: List[SnwapPhase] = [SnwapPhase.PENDING]

    @property
    def phase(self) -> SnwapPhase:
        return self._history[-1]

    @property
    def history(self) -> Tuple[SnwapPhase, ...]:
        return tuple(self._history)

    def advance(self, to: SnwapPhase) -> None:
        current = self.phase
        if current in _TERMINAL:
            raise RuntimeError(f"snwap already finished in {current.value}")

        if to != SnwapPhase.REVERTED and _NEXT[current] != to:
            raise RuntimeError(f"illegal snwap transition {current.value} → {to.value}")

        self._history.append(to)


@dataclass(frozen=True)
class SnwapResult:
    """Результат успешного snwap."""

    token_out: Address
    amount_out: int
    phase: SnwapPhase
    phase_history: Tuple[SnwapPhase, ...]


@dataclass(frozen=True)
class SnwapMultipleResult:
    """Результат успешного snwap_multiple (amounts_out в порядке outputs)."""

    amounts_out: Tuple[int, ...]
    phase: SnwapPhase
    phase_history: Tuple[SnwapPhase, ...]


class SlippageGuard(Contract):
    """Slippage Guard: перемещает вход, вызывает target, проверяет выход."""

    def snwap(
        self,
        sender: Address,
        token_in: Address,
        amount_in: int,
        recipient: Address,
        token_out: Address,
        min_amount_out: int,
        target: Address,
        payload: Call,
    ) -> SnwapResult:
        """Выполнение запроса snwap.

        Args:
            sender: вызывающий; должен выдать guard'у approval на token_in
            token_in: входной токен
            amount_in: сколько переместить в target (0 — не перемещать)
            recipient: чей баланс token_out измеряется
            token_out: выходной токен
            min_amount_out: минимальный прирост баланса recipient
            target: исполнитель payload
            payload: вызов на target

        Returns:
            SnwapResult с фактическим amount_out

        Raises:
            MinimalOutputBalanceViolation: прирост меньше минимума
            UnderlyingTransferFailure: token_in вернул False
            Revert: любая ошибка target; состояние откатывается целиком.
                Любое исключение внутри операции переводит запрос в REVERTED
                и пробрасывается без изменений
        """
        validate_uint(amount_in, "amount_in")
        validate_uint(min_amount_out, "min_amount_out")
        validate_address(recipient, "recipient")

        machine = SnwapPhaseMachine()
        out_token = self._token(token_out)

        try:
            with self.chain.atomic():
                balance_before = out_token.balance_of(recipient)

                self._move_input(sender, token_in, amount_in, target)
                machine.advance(SnwapPhase.FUNDS_MOVED)

                self.chain.call(target, payload)
                machine.advance(SnwapPhase.TARGET_INVOKED)

                amount_out = checked_sub(out_token.balance_of(recipient), balance_before)
                if amount_out < min_amount_out:
                    raise MinimalOutputBalanceViolation(token_out, amount_out)
                machine.advance(SnwapPhase.VERIFIED)
        except Exception as exc:
            logger.warning(
                "snwap reverted after %s: %s: %s", machine.phase.value, type(exc).__name__, exc,
            )
            machine.advance(SnwapPhase.REVERTED)
            raise

        machine.advance(SnwapPhase.SUCCESS)
        logger.info(
            "snwap ok: %s -> %s, amount_out=%d (min %d)",
            token_in, token_out, amount_out, min_amount_out,
        )
        return SnwapResult(
            token_out=token_out,
            amount_out=amount_out,
            phase=machine.phase,
            phase_history=machine.history,
        )

    def execute(self, sender: Address, request: SnwapRequest) -> SnwapResult:
        """snwap по готовой модели запроса."""
        return self.snwap(
            sender=sender,
            token_in=request.token_in,
            amount_in=request.amount_in,
            recipient=request.recipient,
            token_out=request.token_out,
            min_amount_out=request.min_amount_out,
            target=request.target,
            payload=request.payload,
        )

    def snwap_multiple(
        self,
        sender: Address,
        inputs: Sequence[InputTokenSpec],
        outputs: Sequence[OutputTokenSpec],
        target: Address,
        payload: Call,
    ) -> SnwapMultipleResult:
        """Пакетный snwap: несколько входов, один вызов, несколько выходов.

        Каждый выход проверяется против собственного минимума; первый
        нарушающий прерывает всю операцию со своей парой (token, actual).
        """
        if not outputs:
            raise ValueError("snwap_multiple requires at least one output")

        machine = SnwapPhaseMachine()
        out_tokens = [self._token(output.token) for output in outputs]

        try:
            with self.chain.atomic():
                balances_before = [
                    token.balance_of(output.recipient) for token, output in zip(out_tokens, outputs)
                ]

                for spec in inputs:
                    self._move_input(sender, spec.token, spec.amount_in, target)
                machine.advance(SnwapPhase.FUNDS_MOVED)

                self.chain.call(target, payload)
                machine.advance(SnwapPhase.TARGET_INVOKED)

                amounts_out = []
                for token, output, before in zip(out_tokens, outputs, balances_before):
                    amount_out = checked_sub(token.balance_of(output.recipient), before)
                    if amount_out < output.min_amount_out:
                        raise MinimalOutputBalanceViolation(output.token, amount_out)
                    amounts_out.append(amount_out)
                machine.advance(SnwapPhase.VERIFIED)
        except Exception as exc:
            logger.warning(
                "snwap_multiple reverted after %s: %s: %s", machine.phase.value, type(exc).__name__, exc,
            )
            machine.advance(SnwapPhase.REVERTED)
            raise

        machine.advance(SnwapPhase.SUCCESS)
        logger.info("snwap_multiple ok: %d inputs, amounts_out=%s", len(inputs), amounts_out)
        return SnwapMultipleResult(
            amounts_out=tuple(amounts_out),
            phase=machine.phase,
            phase_history=machine.history,
        )

    def execute_multiple(self, sender: Address, request: SnwapMultipleRequest) -> SnwapMultipleResult:
        """snwap_multiple по готовой модели запроса."""
        return self.snwap_multiple(
            sender=sender,
            inputs=request.inputs,
            outputs=request.outputs,
            target=request.target,
            payload=request.payload,
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _token(self, address: Address) -> FungibleTokenLike:
        contract = self.chain.contract_at(address)
        if not isinstance(contract, FungibleTokenLike):
            raise TypeError(f"{address} is not a fungible token ({type(contract).__name__})")
        return contract

    def _move_input(self, sender: Address, token_in: Address, amount_in: int, target: Address) -> None:
        if amount_in == 0:
            return
        token = self._token(token_in)
        if not token.transfer_from(self.address, sender, target, amount_in):
            raise UnderlyingTransferFailure(token_in)
