"""Integration test: full recovery flow.

Simulates a session of several attacks at different corruption levels,
checks the ledger after each one, exports the chain, and shows that
tampering with the export or the live ledger is detected.
"""

from __future__ import annotations

import json
import random

from recoveryledger.config import LedgerConfig
from recoveryledger.core.chain_export import export_chain, verify_export
from recoveryledger.core.integrity import IntegrityEngine
from recoveryledger.core.recovery_service import RecoveryService
from recoveryledger.models.recovery import RecoveryStatus, RecoveryType


class TestRecoveryFlow:
    def test_session(self, sample_bytes: bytes):
        config = LedgerConfig(_env_file=None)
        service = RecoveryService(
            IntegrityEngine(rng=random.Random(99), config=config), config=config
        )

        levels = [0, 3, 30, 70, 100]
        reports = []
        for level in levels:
            report = service.simulate(f"drill-{level}.bin", sample_bytes, level)
            assert report.chain_valid is True
            reports.append(report)

        types = [r.outcome.recovery_type for r in reports]
        assert types[0] is RecoveryType.FULL
        assert types[1] is RecoveryType.FULL
        assert types[2] is RecoveryType.PARTIAL
        assert types[3] is RecoveryType.CORRUPTED
        assert types[4] is RecoveryType.CORRUPTED
        assert reports[0].outcome.integrity_match is True
        assert reports[2].block.data.status is RecoveryStatus.SUCCESS
        assert reports[3].block.data.status is RecoveryStatus.FAILED

        log = service.snapshot()
        assert log.is_valid is True
        assert [b.index for b in log.chain] == list(range(len(levels) + 1))
        for previous, current in zip(log.chain, log.chain[1:]):
            assert current.previous_hash == previous.hash
            assert current.timestamp >= previous.timestamp

        # Exported chain verifies independently of the live ledger.
        payload = json.loads(json.dumps(export_chain(service.ledger)))
        assert verify_export(payload) is True

        # Rewriting history in the export is caught.
        payload["blocks"][4]["data"]["status"] = "success"
        assert verify_export(payload) is False

        # Rewriting history in the live ledger is caught too.
        forged = log.chain[4].data.model_copy(update={"status": RecoveryStatus.SUCCESS})
        service.ledger._blocks[4] = log.chain[4].model_copy(update={"data": forged})
        assert service.ledger.is_valid() is False

    def test_sessions_are_independent(self, sample_bytes: bytes):
        a = RecoveryService(config=LedgerConfig(_env_file=None))
        b = RecoveryService(config=LedgerConfig(_env_file=None))
        a.simulate("x.bin", sample_bytes, 10)
        assert len(a.ledger) == 2
        assert len(b.ledger) == 1
