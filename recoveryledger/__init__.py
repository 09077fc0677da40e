"""recoveryledger: tamper-evident log of simulated data-recovery operations.

  - SHA-256 hash-chained, append-only ledger with a single-writer lock
  - Byte-level integrity scoring of recovered buffers
  - Simulated random corruption for attack drills
  - Explicit, flagged degraded mode when SHA-256 is unavailable
  - Typer/Rich CLI and env-driven config
"""

__version__ = "0.1.0"
__description__ = "Tamper-evident log of simulated data-recovery operations"

from recoveryledger.core.hash_chain import ChainIntegrityError, HashChainLedger
from recoveryledger.core.integrity import IntegrityEngine, InvalidInputError
from recoveryledger.core.recovery_service import RecoveryService
from recoveryledger.cli.app import app as cli

__all__ = [
    "HashChainLedger",
    "ChainIntegrityError",
    "IntegrityEngine",
    "InvalidInputError",
    "RecoveryService",
    "cli",
    "__version__",
]
