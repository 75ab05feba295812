"""
Contract Validation Module

Модуль для валидации JSON контрактов на внешней границе системы.
"""

from .validators import (
    ContractValidator,
    PoolStateValidator,
    SHARED_SCHEMAS,
    SchemaLoader,
    SnwapMultipleRequestValidator,
    SnwapRequestValidator,
    validate_pool_state,
    validate_snwap_multiple_request,
    validate_snwap_request,
)

__all__ = [
    # Loader
    "SHARED_SCHEMAS",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PoolStateValidator",
    "SnwapRequestValidator",
    "SnwapMultipleRequestValidator",
    # Functions
    "validate_pool_state",
    "validate_snwap_request",
    "validate_snwap_multiple_request",
]
