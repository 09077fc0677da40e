"""Integrity engine — digests, simulated corruption, and recovery scoring.

The engine is stateless apart from its random source. Recovery is simulated:
a candidate buffer is compared byte-for-byte with the original, nothing is
reconstructed.
"""

from __future__ import annotations

import logging
import random
import time
import uuid
from decimal import ROUND_HALF_UP, Decimal

from recoveryledger.config import LedgerConfig
from recoveryledger.core.hasher import Digester
from recoveryledger.models.recovery import RecoveryOutcome, RecoveryType

logger = logging.getLogger(__name__)

FULL_RECOVERY_THRESHOLD = 95.0
PARTIAL_RECOVERY_THRESHOLD = 50.0


class InvalidInputError(ValueError):
    """Raised when an engine operation is given input it must reject."""


def classify_recovery_rate(recovery_rate: float) -> RecoveryType:
    """Map a recovery rate (percent) to its severity class."""
    if recovery_rate >= FULL_RECOVERY_THRESHOLD:
        return RecoveryType.FULL
    if recovery_rate >= PARTIAL_RECOVERY_THRESHOLD:
        return RecoveryType.PARTIAL
    return RecoveryType.CORRUPTED


def recovery_rate_percent(matching: int, total: int) -> float:
    """``matching / total`` as a percentage, 2 decimals, halves rounded up."""
    rate = Decimal(matching * 100) / Decimal(total)
    return float(rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class IntegrityEngine:
    """Computes digests, simulates corruption and scores recoveries.

    Parameters
    ----------
    digester:
        Digest backend. A new one is created from *config* if not provided.
    rng:
        Random source for ``corrupt()``. Pass a seeded ``random.Random``
        for reproducible runs.
    config:
        Runtime configuration. Uses defaults if not provided.
    """

    def __init__(
        self,
        digester: Digester | None = None,
        *,
        rng: random.Random | None = None,
        config: LedgerConfig | None = None,
    ) -> None:
        self._config = config or LedgerConfig()
        self._digester = digester or Digester(
            force_fallback=self._config.force_fallback_digest
        )
        self._rng = rng or random.Random()
        self.max_buffer_bytes = self._config.max_buffer_bytes

    @property
    def digester(self) -> Digester:
        return self._digester

    @property
    def degraded(self) -> bool:
        return self._digester.degraded

    def _check_size(self, buffer: bytes, name: str) -> None:
        if len(buffer) > self.max_buffer_bytes:
            raise InvalidInputError(
                f"{name} is {len(buffer)} bytes; limit is {self.max_buffer_bytes}."
            )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def digest(self, buffer: bytes) -> str:
        """Hex digest of *buffer* (SHA-256 unless the digester is degraded)."""
        self._check_size(buffer, "buffer")
        return self._digester.digest(bytes(buffer))

    def corrupt(self, buffer: bytes, corruption_level: int) -> bytes:
        """Return a copy of *buffer* with each byte randomized with
        probability ``corruption_level / 100``.

        The input is never modified. Level 0 returns an identical copy;
        level 100 replaces every byte with a random value (which may, by
        chance, equal the original).
        """
        if isinstance(corruption_level, bool) or not isinstance(corruption_level, int):
            raise InvalidInputError(
                f"corruption_level must be an int, got {type(corruption_level).__name__}."
            )
        if not 0 <= corruption_level <= 100:
            raise InvalidInputError(
                f"corruption_level must be within [0, 100], got {corruption_level}."
            )
        self._check_size(buffer, "buffer")

        threshold = corruption_level / 100
        rng = self._rng
        return bytes(
            rng.randrange(256) if rng.random() < threshold else byte
            for byte in buffer
        )

    def score(self, candidate: bytes, original: bytes) -> RecoveryOutcome:
        """Score *candidate* against *original*.

        The matching-byte count runs over the shorter buffer but the rate is
        relative to the original's length, so a truncated candidate can never
        reach 100 %.
        """
        if len(original) == 0:
            raise InvalidInputError("original buffer is empty; recovery rate is undefined.")
        self._check_size(original, "original")
        self._check_size(candidate, "candidate")

        original_hash = self._digester.digest(bytes(original))
        recovered_hash = self._digester.digest(bytes(candidate))

        matching = sum(1 for a, b in zip(candidate, original) if a == b)
        recovery_rate = recovery_rate_percent(matching, len(original))
        recovery_type = classify_recovery_rate(recovery_rate)

        logger.debug(
            "Scored candidate: %d/%d bytes match (%.2f%%, %s).",
            matching,
            len(original),
            recovery_rate,
            recovery_type.value,
        )
        return RecoveryOutcome(
            original_hash=original_hash,
            recovered_hash=recovered_hash,
            integrity_match=original_hash == recovered_hash,
            recovery_rate=recovery_rate,
            recovery_type=recovery_type,
            success=recovery_rate > PARTIAL_RECOVERY_THRESHOLD,
        )

    @staticmethod
    def new_operation_id() -> str:
        """Correlation id: ``OP-<epoch ms>-<9 random hex chars>``.

        Unique within a process with overwhelming probability. Not a
        security token.
        """
        return f"OP-{time.time_ns() // 1_000_000}-{uuid.uuid4().hex[:9]}"
