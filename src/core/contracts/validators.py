"""
JSON Schema Contract Validators

Модуль для валидации JSON документов на внешней границе системы
согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- common.json: общие $defs (address, uint256, call), подключаются через
  referencing.Registry
- pool_state.json: снапшот пула (диагностика, котировки)
- snwap_request.json: запрос к Slippage Guard
- snwap_multiple_request.json: пакетный запрос к Slippage Guard

Количества uint256 в контрактах кодируются десятичными строками, в том
числе payload.args.amount_in (для него допускается и целое число).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from referencing import Registry, Resource


# =============================================================================
# SCHEMA LOADER
# =============================================================================

# Схемы с общими $defs (address, uint256, call). Подключаются в Registry
# один раз; контрактные схемы ссылаются на них как "common.json#/$defs/...".
SHARED_SCHEMAS = ("common",)


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов из contracts/schema/.

    Помимо кэша схем держит referencing.Registry с общими схемами, через
    который валидаторы разрешают межфайловые $ref.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        # По умолчанию: <корень проекта>/contracts/schema (4 уровня вверх)
        self._schema_dir = schema_dir or Path(__file__).parents[3] / "contracts" / "schema"
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._registry: Optional[Registry] = None

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка и meta-валидация схемы по имени без расширения.

        Raises:
            FileNotFoundError: Файл схемы не найден
            ValueError: Схема не проходит meta-validation (Draft 2020-12)
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema

    @property
    def registry(self) -> Registry:
        """Registry с общими схемами, ключ — их $id."""
        if self._registry is None:
            resources = []
            for name in SHARED_SCHEMAS:
                schema = self.load_schema(name)
                resources.append((schema["$id"], Resource.from_contents(schema)))
            self._registry = Registry().with_resources(resources)
        return self._registry


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор документа против одной контрактной схемы."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        loader = loader or _SCHEMA_LOADER
        self.schema_name = schema_name
        self.schema = loader.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema, registry=loader.registry)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Документ не соответствует схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class PoolStateValidator(ContractValidator):
    """Валидатор для pool_state контракта."""

    def __init__(self):
        super().__init__("pool_state")


class SnwapRequestValidator(ContractValidator):
    """Валидатор для snwap_request контракта."""

    def __init__(self):
        super().__init__("snwap_request")


class SnwapMultipleRequestValidator(ContractValidator):
    """Валидатор для snwap_multiple_request контракта."""

    def __init__(self):
        super().__init__("snwap_multiple_request")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_pool_state(data: Dict[str, Any]) -> None:
    """
    Валидация pool_state данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PoolStateValidator().validate(data)


def validate_snwap_request(data: Dict[str, Any]) -> None:
    """
    Валидация snwap_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SnwapRequestValidator().validate(data)


def validate_snwap_multiple_request(data: Dict[str, Any]) -> None:
    """
    Валидация snwap_multiple_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SnwapMultipleRequestValidator().validate(data)
