"""
Contract Validation Module

Модуль для валидации JSON контрактов ta_stream (State Snapshot).
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    SnapshotValidator,
    validate_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SnapshotValidator",
    # Functions
    "validate_snapshot",
]
