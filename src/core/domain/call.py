"""
Call — payload вызова целевого контракта

Guard не знает, что делает target: он передаёт Call (имя функции +
именованные аргументы), а target сам диспетчеризует его через свой
список экспортируемых функций (Contract.dispatch).

Суммы в args (UINT_ARGS) внутри модели всегда int. В JSON-контракте
они приходят и уходят десятичными строками: строка декодируется при
построении модели, to_contract() кодирует обратно.
"""

from typing import Any, Dict, FrozenSet

from pydantic import BaseModel, Field, field_validator

from src.core.errors import Revert
from src.core.math.uint_math import format_uint, parse_uint

UINT_ARGS: FrozenSet[str] = frozenset({"amount_in"})


class Call(BaseModel):
    """
    Вызов функции контракта.

    Immutable модель (frozen=True). Аргументы — JSON-совместимые значения
    (суммы — int в формате calling convention, адреса — строки).
    """

    function: str = Field(..., min_length=1, description="Имя экспортируемой функции")
    args: Dict[str, Any] = Field(default_factory=dict, description="Именованные аргументы")

    model_config = {"frozen": True}

    @field_validator("args")
    @classmethod
    def decode_uint_args(cls, args: Dict[str, Any]) -> Dict[str, Any]:
        """Десятичные строки в UINT_ARGS → int."""
        decoded = dict(args)
        for key in UINT_ARGS & decoded.keys():
            if isinstance(decoded[key], str):
                try:
                    decoded[key] = parse_uint(decoded[key], f"args.{key}")
                except Revert as e:
                    raise ValueError(str(e)) from e
        return decoded

    def to_contract(self) -> Dict[str, Any]:
        """Call в формате JSON-контракта (суммы — десятичные строки)."""
        args = {
            key: format_uint(value, f"args.{key}") if key in UINT_ARGS else value
            for key, value in self.args.items()
        }
        return {"function": self.function, "args": args}
