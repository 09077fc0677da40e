"""Terminal views over the ledger — read-only.

Modules
-------
renderer
    ``ChainRenderer`` turns ``RecoveryReport`` and ``BlockchainLog``
    into Rich renderables for terminal display.
"""
