"""
ExecutorConfig — конфигурация Conversion Engine

Фиксируется при создании executor'а и больше не меняется.
"""

from dataclasses import dataclass
from enum import Enum


class ForwardingPolicy(str, Enum):
    """Сколько из измеренной дельты пересылается получателю.

    FULL_DELTA — вся дельта (контракт по умолчанию, no-dust invariant).
    WITHHOLD_ONE_UNIT — альтернативный, неподтверждённый вариант:
    последняя единица дельты остаётся на executor'е. Нарушает no-dust
    invariant ровно на 1 единицу за вызов; только для воспроизведения.
    """
    FULL_DELTA = "FULL_DELTA"
    WITHHOLD_ONE_UNIT = "WITHHOLD_ONE_UNIT"


@dataclass(frozen=True)
class ExecutorConfig:
    """Неизменяемая конфигурация executor'а, фиксируется при создании."""
    forwarding_policy: ForwardingPolicy = ForwardingPolicy.FULL_DELTA

    def forwarded_amount(self, delta: int) -> int:
        """Часть дельты, пересылаемая получателю."""
        if self.forwarding_policy == ForwardingPolicy.WITHHOLD_ONE_UNIT and delta > 0:
            return delta - 1
        return delta
