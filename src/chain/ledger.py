"""
Ledger — журналируемое хранилище состояния с атомарными транзакциями

Всё состояние симулируемой среды (балансы, supply, allowances) хранится
в одном key-value хранилище uint256-слотов. Каждая запись внутри
транзакции журналируется как SlotChange (old_value/new_value), поэтому
любая ошибка восстанавливает все затронутые слоты к значениям до вызова.

Семантика:
- transaction() — context manager; вложенные транзакции являются
  savepoint'ами и откатываются только до своей точки
- исключение внутри транзакции → откат до savepoint + re-raise
- запись вне транзакции не журналируется (начальная настройка среды)
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

from src.core.math.uint_math import validate_uint

logger = logging.getLogger(__name__)

Slot = Tuple[Any, ...]


@dataclass(frozen=True)
class SlotChange:
    """Запись журнала: изменение одного слота."""

    slot: Slot
    old_value: int
    new_value: int


class Ledger:
    """
    Хранилище uint256-слотов с undo-журналом.

    Отсутствующий слот читается как 0; запись 0 удаляет слот.
    """

    def __init__(self) -> None:
        self._storage: Dict[Slot, int] = {}
        self._journal: List[SlotChange] = []
        self._depth = 0

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    def read(self, slot: Slot) -> int:
        return self._storage.get(slot, 0)

    def write(self, slot: Slot, value: int) -> None:
        validate_uint(value, f"slot {slot!r}")

        old_value = self._storage.get(slot, 0)
        if old_value == value:
            return

        if self._depth > 0:
            self._journal.append(SlotChange(slot=slot, old_value=old_value, new_value=value))

        if value == 0:
            self._storage.pop(slot, None)
        else:
            self._storage[slot] = value

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @property
    def depth(self) -> int:
        return self._depth

    @contextmanager
    def transaction(self) -> Iterator["Ledger"]:
        """
        Атомарная область.

        Либо все записи внутри блока остаются, либо ни одна.
        """
        savepoint = len(self._journal)
        self._depth += 1
        try:
            yield self
        except BaseException as exc:
            undone = self._rollback_to(savepoint)
            logger.warning(
                "Transaction rolled back at depth %d: %d slot changes undone (%s)",
                self._depth,
                undone,
                type(exc).__name__,
            )
            raise
        finally:
            self._depth -= 1
            if self._depth == 0:
                # Внешняя транзакция завершена: журнал больше не нужен
                self._journal.clear()

    def _rollback_to(self, savepoint: int) -> int:
        undone = 0
        while len(self._journal) > savepoint:
            change = self._journal.pop()
            if change.old_value == 0:
                self._storage.pop(change.slot, None)
            else:
                self._storage[change.slot] = change.old_value
            undone += 1
        return undone

    def snapshot(self) -> Dict[Slot, int]:
        """Копия всего хранилища (для диагностики и тестов)."""
        return dict(self._storage)
