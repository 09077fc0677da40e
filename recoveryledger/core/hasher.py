"""Canonical hashing helpers for block sealing and buffer digests.

Two digest backends exist:

1. **SHA-256** (``hashlib``): the normal mode. 64 lowercase hex chars.
2. **Rolling hash**: a multiplicative 32-bit rolling hash used only when
   SHA-256 cannot be used. 16 hex chars, zero padded.

The rolling hash is NOT a cryptographic primitive. Collisions are trivial to
construct, so any block sealed under it offers weak tamper evidence at best.
A ``Digester`` picks its backend once, at construction, and reports the
degraded mode through ``Digester.degraded`` and a WARNING log record. It never
switches backend afterwards, so every block of a ledger is sealed and
re-verified with the same function.
"""

from __future__ import annotations

import hashlib
import json
import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000
ROLLING_HASH_WIDTH = 16


class CryptoUnavailableError(RuntimeError):
    """Raised when the SHA-256 primitive cannot be used."""


class DigestAlgorithm(str, Enum):
    """Digest backend in use by a ``Digester``."""

    SHA256 = "sha256"
    ROLLING = "rolling32"


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes: deterministic, sorted, compact.

    - sorted keys
    - no whitespace separators (",", ":")
    - ensure_ascii=True
    - UTF-8 encoding
    """
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes.

    Raises ``CryptoUnavailableError`` if the interpreter refuses to provide
    SHA-256 (e.g. a crippled OpenSSL build).
    """
    try:
        return hashlib.new("sha256", data).hexdigest()
    except ValueError as exc:
        raise CryptoUnavailableError(f"SHA-256 unavailable: {exc}") from exc


def rolling_hash_hex(data: bytes) -> str:
    """Non-cryptographic rolling hash: ``h = h * 31 + byte`` in signed int32.

    Returns the absolute value as hex, zero padded to 16 chars.
    """
    h = 0
    for byte in data:
        h = ((h << 5) - h + byte) & _INT32_MASK
    if h & _INT32_SIGN:
        h -= 1 << 32
    return format(abs(h), "x").zfill(ROLLING_HASH_WIDTH)


def block_payload_bytes(
    index: int, timestamp: int, previous_hash: str, data: dict[str, Any]
) -> bytes:
    """Canonical bytes of the four hashed block fields.

    Encoded as a JSON array so the field order is fixed:
    ``[index, timestamp, previous_hash, data]``.
    """
    return canonical_json_bytes([index, timestamp, previous_hash, data])


class Digester:
    """Digest function with an explicit, visible fallback.

    Parameters
    ----------
    force_fallback:
        Start in the degraded rolling-hash mode without probing SHA-256.
    """

    def __init__(self, *, force_fallback: bool = False) -> None:
        self._algorithm = DigestAlgorithm.SHA256
        if force_fallback:
            self._degrade("fallback forced by configuration")
            return
        try:
            sha256_hex(b"")
        except CryptoUnavailableError as exc:
            self._degrade(str(exc))

    def _degrade(self, reason: str) -> None:
        self._algorithm = DigestAlgorithm.ROLLING
        logger.warning(
            "Digest running in DEGRADED mode (%s): using non-cryptographic "
            "rolling hash. Blocks sealed now have weak tamper evidence.",
            reason,
        )

    @property
    def algorithm(self) -> DigestAlgorithm:
        return self._algorithm

    @property
    def degraded(self) -> bool:
        """True when the non-cryptographic fallback is active."""
        return self._algorithm is DigestAlgorithm.ROLLING

    def digest(self, data: bytes) -> str:
        """Hex digest of *data* using the active backend."""
        if self.degraded:
            return rolling_hash_hex(data)
        return sha256_hex(data)

    def block_hash(
        self,
        index: int,
        timestamp: int,
        previous_hash: str,
        data: dict[str, Any],
    ) -> str:
        """Seal hash for a block built from the four hashed fields."""
        return self.digest(block_payload_bytes(index, timestamp, previous_hash, data))
