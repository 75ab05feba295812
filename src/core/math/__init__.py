"""
Core math modules

Беззнаковая uint256 арифметика и формулы конверсии asset <-> share.
"""

# Uint math
from src.core.math.uint_math import (
    UINT256_DECIMAL_PATTERN,
    UINT256_MAX,
    checked_add,
    checked_mul,
    checked_sub,
    format_uint,
    is_uint,
    mul_div_down,
    parse_uint,
    validate_uint,
)

# Share math
from src.core.math.share_math import (
    exchange_ratio,
    is_bootstrap,
    quote_enter,
    quote_leave,
)

__all__ = [
    # Uint math — Constants
    "UINT256_MAX",
    "UINT256_DECIMAL_PATTERN",
    # Uint math — Functions
    "checked_add",
    "checked_mul",
    "checked_sub",
    "format_uint",
    "is_uint",
    "mul_div_down",
    "parse_uint",
    "validate_uint",
    # Share math
    "exchange_ratio",
    "is_bootstrap",
    "quote_enter",
    "quote_leave",
]
