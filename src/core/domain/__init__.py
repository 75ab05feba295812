"""
Domain models and value objects.

Contains amount specs, pool state snapshots, call payloads and snwap requests.
"""

from src.core.domain.address import (
    ADDRESS_PATTERN,
    ZERO_ADDRESS,
    Address,
    address_from_label,
    is_address,
    validate_address,
)
from src.core.domain.amounts import (
    FULL_BALANCE_SENTINEL,
    AmountKind,
    AmountLike,
    AmountSpec,
    coerce_amount,
)
from src.core.domain.call import Call
from src.core.domain.pool_state import PoolState
from src.core.domain.snwap import (
    InputTokenSpec,
    OutputTokenSpec,
    SnwapMultipleRequest,
    SnwapRequest,
)

__all__ = [
    # Address
    "Address",
    "ADDRESS_PATTERN",
    "ZERO_ADDRESS",
    "address_from_label",
    "is_address",
    "validate_address",
    # Amounts
    "FULL_BALANCE_SENTINEL",
    "AmountKind",
    "AmountLike",
    "AmountSpec",
    "coerce_amount",
    # Call payload
    "Call",
    # Pool state
    "PoolState",
    # Snwap requests
    "SnwapRequest",
    "SnwapMultipleRequest",
    "InputTokenSpec",
    "OutputTokenSpec",
]
