"""
Guard — Slippage Guard: проверка минимального выхода в одной атомарной операции
"""

from .slippage_guard import (
    SlippageGuard,
    SnwapMultipleResult,
    SnwapPhase,
    SnwapPhaseMachine,
    SnwapResult,
)

__all__ = [
    "SlippageGuard",
    "SnwapResult",
    "SnwapMultipleResult",
    "SnwapPhase",
    "SnwapPhaseMachine",
]
