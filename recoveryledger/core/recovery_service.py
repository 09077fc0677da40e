"""Recovery service — wires the IntegrityEngine to a HashChainLedger.

One simulated operation is: corrupt the original, score the corrupted copy
as the recovered candidate, seal the resulting record into the ledger, and
re-check the chain.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from recoveryledger.config import LedgerConfig
from recoveryledger.core.hash_chain import HashChainLedger
from recoveryledger.core.hasher import Digester
from recoveryledger.core.integrity import IntegrityEngine
from recoveryledger.models.ledger import Block, BlockchainLog
from recoveryledger.models.recovery import (
    RecoveryOutcome,
    RecoveryRecord,
    RecoveryStatus,
)

logger = logging.getLogger(__name__)


class RecoveryReport(BaseModel):
    """Everything one simulated operation produced."""

    model_config = ConfigDict(frozen=True)

    operation_id: str
    file_name: str
    corruption_level: int
    outcome: RecoveryOutcome
    block: Block
    chain_valid: bool


class RecoveryService:
    """Runs simulated recovery operations against an owned ledger.

    Engine and ledger share one ``Digester`` so buffer digests and block
    hashes always come from the same backend.

    Parameters
    ----------
    engine:
        Integrity engine. Created from *config* if not provided.
    ledger:
        Ledger to record into. Created with the engine's digester if not
        provided. When both are given they must hold the same ``Digester``
        instance, else ``ValueError``.
    config:
        Runtime configuration. Uses defaults if not provided.
    """

    def __init__(
        self,
        engine: IntegrityEngine | None = None,
        ledger: HashChainLedger | None = None,
        *,
        config: LedgerConfig | None = None,
    ) -> None:
        self.config = config or LedgerConfig()
        if (
            engine is not None
            and ledger is not None
            and engine.digester is not ledger.digester
        ):
            raise ValueError("engine and ledger must share the same Digester instance.")
        if engine is None:
            digester = (
                ledger.digester
                if ledger is not None
                else Digester(force_fallback=self.config.force_fallback_digest)
            )
            engine = IntegrityEngine(digester, config=self.config)
        self.engine = engine
        self.ledger = ledger or HashChainLedger(engine.digester, config=self.config)

    @staticmethod
    def build_record(
        operation_id: str, file_name: str, outcome: RecoveryOutcome
    ) -> RecoveryRecord:
        """Record for a scored outcome: success if the rate cleared 50 %."""
        return RecoveryRecord(
            operation_id=operation_id,
            file_name=file_name,
            file_hash=outcome.recovered_hash,
            original_hash=outcome.original_hash,
            status=RecoveryStatus.SUCCESS if outcome.success else RecoveryStatus.FAILED,
            recovery_type=outcome.recovery_type,
        )

    def simulate(
        self,
        file_name: str,
        data: bytes,
        corruption_level: int | None = None,
    ) -> RecoveryReport:
        """Simulate an attack on *data*, score the recovery and record it."""
        level = (
            self.config.default_corruption_level
            if corruption_level is None
            else corruption_level
        )
        operation_id = self.engine.new_operation_id()

        corrupted = self.engine.corrupt(data, level)
        outcome = self.engine.score(corrupted, data)
        block = self.ledger.append(self.build_record(operation_id, file_name, outcome))
        chain_valid = self.ledger.is_valid()

        logger.info(
            "Operation %s on %r: %.2f%% recovered (%s), chain valid=%s.",
            operation_id,
            file_name,
            outcome.recovery_rate,
            outcome.recovery_type.value,
            chain_valid,
        )
        return RecoveryReport(
            operation_id=operation_id,
            file_name=file_name,
            corruption_level=level,
            outcome=outcome,
            block=block,
            chain_valid=chain_valid,
        )

    def snapshot(self) -> BlockchainLog:
        return self.ledger.snapshot()
