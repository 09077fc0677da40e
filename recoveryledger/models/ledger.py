"""Hash-chained ledger models (append-only, tamper-evident).

A ledger is:
- Append-only (no update, no delete)
- Hash-chained (each block links to the previous block's hash)
- Process-scoped (nothing is written to disk by the ledger itself)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from recoveryledger.models.recovery import (
    RecoveryRecord,
    RecoveryStatus,
    RecoveryType,
)

GENESIS_PREVIOUS_HASH = "0"

GENESIS_RECORD = RecoveryRecord(
    operation_id="GENESIS",
    file_name="Genesis Block",
    file_hash="0",
    status=RecoveryStatus.SUCCESS,
    recovery_type=RecoveryType.FULL,
)


class Block(BaseModel):
    """A single sealed block.

    ``hash`` covers ``(index, timestamp, previous_hash, data)`` in that order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    index: int = Field(ge=0)
    timestamp: int  # milliseconds since epoch
    data: RecoveryRecord
    previous_hash: str
    hash: str

    @property
    def is_genesis(self) -> bool:
        return self.index == 0


class BlockchainLog(BaseModel):
    """Point-in-time view of a ledger: its blocks plus the validity verdict."""

    model_config = ConfigDict(frozen=True)

    chain: tuple[Block, ...]
    is_valid: bool
    degraded: bool = False
