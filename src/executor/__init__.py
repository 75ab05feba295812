"""
Executor — Conversion Engine между asset и share-токеном пула.

- ShareVaultExecutor: stateless executor с учётом по дельте баланса
- ExecutorConfig / ForwardingPolicy: неизменяемая конфигурация
- encode_*: построение Call для вызова через SlippageGuard
"""

from .config import ExecutorConfig, ForwardingPolicy
from .conversion_engine import (
    ENTER_SHARE_VAULT,
    LEAVE_SHARE_VAULT,
    QUOTE_ENTER_SHARE_VAULT,
    QUOTE_LEAVE_SHARE_VAULT,
    ShareVaultExecutor,
    encode_enter_share_vault,
    encode_leave_share_vault,
)

__all__ = [
    "ShareVaultExecutor",
    "ExecutorConfig",
    "ForwardingPolicy",
    "ENTER_SHARE_VAULT",
    "LEAVE_SHARE_VAULT",
    "QUOTE_ENTER_SHARE_VAULT",
    "QUOTE_LEAVE_SHARE_VAULT",
    "encode_enter_share_vault",
    "encode_leave_share_vault",
]
