"""Append-only, hash-chained ledger of recovery operations.

Design:
- Append-only: only `append()` mutates; no update, no delete.
- Hash-chained: each block includes the hash of the previous block.
- Single writer: `append()` runs under an internal lock, so two callers can
  never build on the same last block.
- Readers get tuple snapshots; a block is fully sealed before it is stored.
- In-memory only. The ledger lives as long as the object does.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence

from recoveryledger.config import LedgerConfig
from recoveryledger.core.hasher import Digester
from recoveryledger.models.ledger import (
    GENESIS_PREVIOUS_HASH,
    GENESIS_RECORD,
    Block,
    BlockchainLog,
)
from recoveryledger.models.recovery import RecoveryRecord

logger = logging.getLogger(__name__)


class ChainIntegrityError(RuntimeError):
    """Raised when the hash chain is broken.

    ``index`` is the position of the first offending block.
    """

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Chain broken at block {index}: {reason}")


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def seal_block(
    digester: Digester,
    index: int,
    timestamp: int,
    previous_hash: str,
    record: RecoveryRecord,
) -> Block:
    """Build a block with its hash computed from the four hashed fields."""
    block_hash = digester.block_hash(
        index, timestamp, previous_hash, record.model_dump(mode="json")
    )
    return Block(
        index=index,
        timestamp=timestamp,
        data=record,
        previous_hash=previous_hash,
        hash=block_hash,
    )


def verify_blocks(blocks: Sequence[Block], digester: Digester) -> bool:
    """Verify a block sequence, genesis first.

    Recomputes every block hash (genesis included) and checks that each
    non-genesis block links to its predecessor. Returns True if the chain
    is valid, raises ChainIntegrityError at the first mismatch otherwise.
    """
    for position, block in enumerate(blocks):
        expected_hash = digester.block_hash(
            block.index,
            block.timestamp,
            block.previous_hash,
            block.data.model_dump(mode="json"),
        )
        if block.hash != expected_hash:
            raise ChainIntegrityError(
                position,
                f"tampered block: expected hash={expected_hash!r}, got {block.hash!r}",
            )

        if position == 0:
            if block.index != 0 or block.previous_hash != GENESIS_PREVIOUS_HASH:
                raise ChainIntegrityError(position, "first block is not a genesis block")
            continue

        previous = blocks[position - 1]
        if block.previous_hash != previous.hash:
            raise ChainIntegrityError(
                position,
                f"expected previous_hash={previous.hash!r}, got {block.previous_hash!r}",
            )
        if block.index != previous.index + 1:
            raise ChainIntegrityError(
                position,
                f"index {block.index} does not follow {previous.index}",
            )

    return True


class HashChainLedger:
    """Append-only, hash-chained ledger.

    Starts with a single genesis block. Every block, genesis included, is
    sealed with the same ``Digester``, so a ledger never mixes SHA-256 and
    fallback hashes.

    Parameters
    ----------
    digester:
        Digest backend. A new one is created from *config* if not provided.
    clock:
        Millisecond wall clock. Defaults to ``time.time_ns() // 1e6``.
    config:
        Runtime configuration. Uses defaults if not provided.
    """

    def __init__(
        self,
        digester: Digester | None = None,
        *,
        clock: Callable[[], int] | None = None,
        config: LedgerConfig | None = None,
    ) -> None:
        cfg = config or LedgerConfig()
        self._digester = digester or Digester(force_fallback=cfg.force_fallback_digest)
        self._clock = clock or _now_ms
        self._lock = threading.Lock()
        self._blocks: list[Block] = [self._create_genesis_block()]
        if self._digester.degraded:
            logger.warning(
                "Ledger created with the %s fallback digest; this chain is "
                "not cryptographically tamper-evident.",
                self._digester.algorithm.value,
            )

    def _create_genesis_block(self) -> Block:
        return seal_block(
            self._digester, 0, self._clock(), GENESIS_PREVIOUS_HASH, GENESIS_RECORD
        )

    # ------------------------------------------------------------------
    # Core: append-only write
    # ------------------------------------------------------------------

    def append(self, record: RecoveryRecord) -> Block:
        """Seal *record* into a new block linked to the current last block.

        This is the ONLY write method. There is no update or delete.
        """
        with self._lock:
            previous = self._blocks[-1]
            # Wall clocks can step backwards; timestamps must not.
            timestamp = max(self._clock(), previous.timestamp)
            block = seal_block(
                self._digester, previous.index + 1, timestamp, previous.hash, record
            )
            self._blocks.append(block)

        logger.info(
            "Appended block %d for operation %s (%s/%s).",
            block.index,
            record.operation_id,
            record.status.value,
            record.recovery_type.value,
        )
        return block

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def chain(self) -> tuple[Block, ...]:
        """All blocks in append order, genesis first."""
        return tuple(self._blocks)

    def latest(self) -> Block:
        """The last appended block, or genesis if nothing was appended."""
        return self._blocks[-1]

    def __len__(self) -> int:
        return len(self._blocks)

    @property
    def digester(self) -> Digester:
        return self._digester

    @property
    def degraded(self) -> bool:
        """True when blocks are sealed with the non-cryptographic fallback."""
        return self._digester.degraded

    # ------------------------------------------------------------------
    # Chain verification
    # ------------------------------------------------------------------

    def verify(self) -> bool:
        """Verify the whole chain.

        Returns True if the chain is valid, raises ChainIntegrityError
        (carrying the failing block index) otherwise.
        """
        return verify_blocks(self.chain(), self._digester)

    def is_valid(self) -> bool:
        """Boolean tamper check. Never raises for a broken chain."""
        try:
            return self.verify()
        except ChainIntegrityError as exc:
            logger.warning("Ledger validation failed: %s", exc)
            return False

    def snapshot(self) -> BlockchainLog:
        """Blocks plus validity verdict, taken from one consistent view."""
        blocks = self.chain()
        try:
            valid = verify_blocks(blocks, self._digester)
        except ChainIntegrityError as exc:
            logger.warning("Ledger validation failed: %s", exc)
            valid = False
        return BlockchainLog(chain=blocks, is_valid=valid, degraded=self.degraded)
