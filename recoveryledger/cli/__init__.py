"""recoveryledger CLI — Typer-based command-line interface.

Provides the ``recoveryledger`` command with subcommands for digesting
files, running simulated recoveries into a ledger, and re-verifying
exported chains.

All output uses Rich for formatted terminal display.
"""
