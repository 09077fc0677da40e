"""Shared test fixtures for recoveryledger."""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Any

import pytest

from recoveryledger.config import LedgerConfig
from recoveryledger.core.hash_chain import HashChainLedger
from recoveryledger.core.hasher import Digester
from recoveryledger.core.integrity import IntegrityEngine
from recoveryledger.core.recovery_service import RecoveryService
from recoveryledger.models.recovery import (
    RecoveryRecord,
    RecoveryStatus,
    RecoveryType,
)


@pytest.fixture
def config() -> LedgerConfig:
    """Provide a config with default values, isolated from the environment."""
    return LedgerConfig(_env_file=None)


@pytest.fixture
def digester() -> Digester:
    """Provide a SHA-256 digester."""
    return Digester()


@pytest.fixture
def fallback_digester() -> Digester:
    """Provide a digester forced into the degraded rolling-hash mode."""
    return Digester(force_fallback=True)


@pytest.fixture
def ledger(digester: Digester) -> HashChainLedger:
    """Provide a fresh ledger containing only the genesis block."""
    return HashChainLedger(digester)


@pytest.fixture
def engine(digester: Digester, config: LedgerConfig) -> IntegrityEngine:
    """Provide an IntegrityEngine with a seeded RNG."""
    return IntegrityEngine(digester, rng=random.Random(1234), config=config)


@pytest.fixture
def service(engine: IntegrityEngine, config: LedgerConfig) -> RecoveryService:
    """Provide a RecoveryService wired to the seeded engine."""
    return RecoveryService(engine, config=config)


@pytest.fixture
def sample_bytes() -> bytes:
    """Provide a deterministic 4 KiB buffer."""
    return bytes(random.Random(42).randrange(256) for _ in range(4096))


@pytest.fixture
def make_record() -> Callable[..., RecoveryRecord]:
    """Factory fixture: build a RecoveryRecord with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _factory(**overrides: Any) -> RecoveryRecord:
        defaults: dict[str, Any] = {
            "operation_id": f"OP-test-{next(counter):04d}",
            "file_name": "report.pdf",
            "file_hash": "ab" * 32,
            "original_hash": "cd" * 32,
            "status": RecoveryStatus.SUCCESS,
            "recovery_type": RecoveryType.FULL,
        }
        defaults.update(overrides)
        return RecoveryRecord(**defaults)

    return _factory


@pytest.fixture
def seeded_ledger(
    ledger: HashChainLedger, make_record: Callable[..., RecoveryRecord]
) -> HashChainLedger:
    """Provide a ledger with 5 appended blocks."""
    for i in range(5):
        ledger.append(make_record(file_name=f"file-{i}.bin"))
    return ledger
