"""
Errors — иерархия ошибок исполнения

Любая ошибка из этой иерархии прерывает объемлющую атомарную операцию
(Ledger.transaction / Chain.atomic): все затронутые балансы и allowances
возвращаются к значениям до вызова. Частичного успеха не бывает.

- Revert: базовый класс
- InsufficientFunds: full-balance sentinel разрешился в непригодную сумму
- UnderlyingTransferFailure: токен вернул False вместо revert
- MinimalOutputBalanceViolation: guard измерил выход ниже минимума
- ArithmeticOverflow / ArithmeticUnderflow: выход за диапазон uint256
"""


class Revert(Exception):
    """Базовая ошибка: откат всей атомарной операции."""

    pass


class InsufficientFunds(Revert):
    """
    Full-balance sentinel разрешился в сумму, непригодную для операции.

    Например, executor не держит ни одной единицы токена, который
    требуется внести или вывести.
    """

    pass


class UnderlyingTransferFailure(Revert):
    """
    Токен сигнализировал неудачу transfer/transfer_from флагом False.

    Отличается от прямого revert токена: некоторые реализации токенов
    возвращают False вместо прерывания вызова.
    """

    def __init__(self, token: str, message: str = "") -> None:
        self.token = token
        super().__init__(message or f"Token {token} signaled transfer failure")


class MinimalOutputBalanceViolation(Revert):
    """
    Измеренный прирост баланса получателя ниже min_amount_out.

    Несёт фактически достигнутую величину (не недостачу), чтобы
    вызывающий мог определить, насколько сдвинулся курс.
    """

    def __init__(self, token: str, actual_amount_out: int) -> None:
        self.token = token
        self.actual_amount_out = actual_amount_out
        super().__init__(
            f"MinimalOutputBalanceViolation(token={token}, "
            f"actual_amount_out={actual_amount_out})"
        )


class ArithmeticOverflow(Revert):
    """Результат операции больше UINT256_MAX."""

    pass


class ArithmeticUnderflow(Revert):
    """Результат беззнаковой операции меньше нуля."""

    pass


class InsufficientBalance(Revert):
    """Токен откатил transfer: у отправителя недостаточно баланса."""

    pass


class InsufficientAllowance(Revert):
    """Токен откатил transfer_from: недостаточный allowance."""

    pass


class TransferBlocked(Revert):
    """Токен откатил перевод: адрес заблокирован (blacklist)."""

    pass


class UnknownContract(Revert):
    """По адресу не зарегистрирован контракт."""

    pass


class UnknownFunction(Revert):
    """Контракт не экспортирует запрошенную функцию."""

    pass
