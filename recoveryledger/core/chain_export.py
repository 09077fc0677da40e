"""Caller-side export and re-verification of a ledger.

The export carries each block's four hashed fields plus its hash, in the
order they are hashed, so an exported chain can be re-verified without
trusting the exporter. This is not persistence: the ledger never reads an
export back into itself.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from recoveryledger.core.hash_chain import (
    ChainIntegrityError,
    HashChainLedger,
    verify_blocks,
)
from recoveryledger.core.hasher import DigestAlgorithm, Digester
from recoveryledger.models.ledger import Block

EXPORT_FORMAT_VERSION = 1


def export_chain(ledger: HashChainLedger) -> dict[str, Any]:
    """Export the ledger as a JSON-serializable dict.

    Returns
    -------
    dict[str, Any]
        Keys: ``format_version``, ``algorithm``, ``degraded``, ``is_valid``,
        ``blocks`` (one dict per block, genesis first).
    """
    log = ledger.snapshot()
    return {
        "format_version": EXPORT_FORMAT_VERSION,
        "algorithm": ledger.digester.algorithm.value,
        "degraded": log.degraded,
        "is_valid": log.is_valid,
        "blocks": [
            {
                "index": block.index,
                "timestamp": block.timestamp,
                "previous_hash": block.previous_hash,
                "data": block.data.model_dump(mode="json"),
                "hash": block.hash,
            }
            for block in log.chain
        ],
    }


def _require_object(payload: Any) -> None:
    if not isinstance(payload, dict):
        raise ValueError("export is not a JSON object")


def load_blocks(payload: dict[str, Any]) -> list[Block]:
    """Parse the ``blocks`` list of an export. Raises ``ValueError`` on bad shape."""
    _require_object(payload)
    raw_blocks = payload.get("blocks")
    if not isinstance(raw_blocks, list):
        raise ValueError("export has no 'blocks' list")
    try:
        return [Block.model_validate(raw) for raw in raw_blocks]
    except ValidationError as exc:
        raise ValueError(f"malformed block in export: {exc}") from exc


def verify_export(payload: dict[str, Any], digester: Digester | None = None) -> bool:
    """Re-verify an exported chain from its own fields.

    The digest backend named in the export is used unless *digester* is
    given. Returns False for a broken or empty chain; the embedded
    ``is_valid`` flag is ignored.
    """
    _require_object(payload)
    if digester is None:
        algorithm = DigestAlgorithm(payload.get("algorithm", DigestAlgorithm.SHA256.value))
        digester = Digester(force_fallback=algorithm is DigestAlgorithm.ROLLING)

    blocks = load_blocks(payload)
    if not blocks:
        return False
    try:
        return verify_blocks(blocks, digester)
    except ChainIntegrityError:
        return False
