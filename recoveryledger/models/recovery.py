"""Recovery operation models — records embedded in blocks and scored outcomes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RecoveryStatus(str, Enum):
    """Caller's classification of an operation outcome."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class RecoveryType(str, Enum):
    """Severity classification derived from the recovery rate."""

    FULL = "full"
    PARTIAL = "partial"
    CORRUPTED = "corrupted"


class RecoveryRecord(BaseModel):
    """The payload of a block: one recovery attempt, as reported by the caller."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    operation_id: str
    file_name: str
    file_hash: str  # stored verbatim; usually the recovered buffer's digest
    original_hash: str | None = None  # digest of the pre-attack file
    status: RecoveryStatus
    recovery_type: RecoveryType


class RecoveryOutcome(BaseModel):
    """Result of scoring a candidate buffer against the original.

    Not persisted directly. Callers copy the fields they need into a
    ``RecoveryRecord``.
    """

    model_config = ConfigDict(frozen=True)

    original_hash: str
    recovered_hash: str
    integrity_match: bool
    recovery_rate: float = Field(ge=0.0, le=100.0)  # percent, 2 decimals
    recovery_type: RecoveryType
    success: bool
