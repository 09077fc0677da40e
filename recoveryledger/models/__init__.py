"""recoveryledger data models — all Pydantic v2, all frozen (immutable)."""

from recoveryledger.models.ledger import (
    GENESIS_PREVIOUS_HASH,
    GENESIS_RECORD,
    Block,
    BlockchainLog,
)
from recoveryledger.models.recovery import (
    RecoveryOutcome,
    RecoveryRecord,
    RecoveryStatus,
    RecoveryType,
)

__all__ = [
    # recovery
    "RecoveryStatus",
    "RecoveryType",
    "RecoveryRecord",
    "RecoveryOutcome",
    # ledger
    "Block",
    "BlockchainLog",
    "GENESIS_PREVIOUS_HASH",
    "GENESIS_RECORD",
]
