"""
Snwap — модели запросов к Slippage Guard

Immutable Pydantic модели:
- SnwapRequest: один входной и один выходной токен
- InputTokenSpec / OutputTokenSpec / SnwapMultipleRequest: пакетная форма

Соответствуют схемам contracts/schema/snwap_request.json и
contracts/schema/snwap_multiple_request.json. На внешней границе
(JSON-документ) используйте from_contract(): сначала JSON Schema
валидация, затем построение модели. to_contract() — обратное
отображение, uint256 кодируются десятичными строками.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field

from src.core.contracts import validate_snwap_multiple_request, validate_snwap_request
from src.core.domain.address import ADDRESS_PATTERN
from src.core.domain.call import Call
from src.core.math.uint_math import UINT256_MAX, format_uint


# =============================================================================
# SINGLE
# =============================================================================


class SnwapRequest(BaseModel):
    """
    Запрос snwap: переместить amount_in токена token_in в target,
    вызвать payload и потребовать прирост баланса recipient в token_out
    не меньше min_amount_out.
    """

    token_in: str = Field(..., pattern=ADDRESS_PATTERN, description="Входной токен")
    amount_in: int = Field(..., ge=0, le=UINT256_MAX, description="Сколько переместить в target")
    recipient: str = Field(..., pattern=ADDRESS_PATTERN, description="Получатель выхода")
    token_out: str = Field(..., pattern=ADDRESS_PATTERN, description="Выходной токен")
    min_amount_out: int = Field(
        ..., ge=0, le=UINT256_MAX, description="Минимальный прирост баланса recipient"
    )
    target: str = Field(..., pattern=ADDRESS_PATTERN, description="Исполнитель (executor)")
    payload: Call = Field(..., description="Вызов на target")

    model_config = {"frozen": True}

    @classmethod
    def from_contract(cls, data: Dict[str, Any]) -> "SnwapRequest":
        """
        Построение запроса из JSON-документа.

        Raises:
            jsonschema.ValidationError: Документ не соответствует схеме
        """
        validate_snwap_request(data)
        return cls.model_validate(data)

    def to_contract(self) -> Dict[str, Any]:
        """
        Запрос в формате snwap_request.json (uint256 — десятичные строки).

        SnwapRequest.from_contract(request.to_contract()) == request.
        """
        return {
            "token_in": self.token_in,
            "amount_in": format_uint(self.amount_in, "amount_in"),
            "recipient": self.recipient,
            "token_out": self.token_out,
            "min_amount_out": format_uint(self.min_amount_out, "min_amount_out"),
            "target": self.target,
            "payload": self.payload.to_contract(),
        }


# =============================================================================
# MULTIPLE
# =============================================================================


class InputTokenSpec(BaseModel):
    """Входной токен пакетного запроса."""

    token: str = Field(..., pattern=ADDRESS_PATTERN)
    amount_in: int = Field(..., ge=0, le=UINT256_MAX)

    model_config = {"frozen": True}

    def to_contract(self) -> Dict[str, Any]:
        return {"token": self.token, "amount_in": format_uint(self.amount_in, "amount_in")}


class OutputTokenSpec(BaseModel):
    """Выходной токен пакетного запроса с собственным минимумом."""

    token: str = Field(..., pattern=ADDRESS_PATTERN)
    recipient: str = Field(..., pattern=ADDRESS_PATTERN)
    min_amount_out: int = Field(..., ge=0, le=UINT256_MAX)

    model_config = {"frozen": True}

    def to_contract(self) -> Dict[str, Any]:
        return {
            "token": self.token,
            "recipient": self.recipient,
            "min_amount_out": format_uint(self.min_amount_out, "min_amount_out"),
        }


class SnwapMultipleRequest(BaseModel):
    """
    Пакетный запрос: все inputs перемещаются в target, payload
    вызывается один раз, каждый output проверяется независимо.
    """

    inputs: list[InputTokenSpec] = Field(default_factory=list)
    outputs: list[OutputTokenSpec] = Field(..., min_length=1)
    target: str = Field(..., pattern=ADDRESS_PATTERN)
    payload: Call

    model_config = {"frozen": True}

    @classmethod
    def from_contract(cls, data: Dict[str, Any]) -> "SnwapMultipleRequest":
        """
        Построение пакетного запроса из JSON-документа.

        Raises:
            jsonschema.ValidationError: Документ не соответствует схеме
        """
        validate_snwap_multiple_request(data)
        return cls.model_validate(data)

    def to_contract(self) -> Dict[str, Any]:
        """Запрос в формате snwap_multiple_request.json."""
        return {
            "inputs": [spec.to_contract() for spec in self.inputs],
            "outputs": [spec.to_contract() for spec in self.outputs],
            "target": self.target,
            "payload": self.payload.to_contract(),
        }
