"""``recoveryledger simulate`` — run simulated recoveries and show the ledger.

Every file given is attacked, scored and recorded in one ledger that lives
for the duration of the command.
"""

from __future__ import annotations

import json
import random
from pathlib import Path

import typer
from rich.console import Console

from recoveryledger.config import LedgerConfig
from recoveryledger.core.chain_export import export_chain
from recoveryledger.core.integrity import IntegrityEngine, InvalidInputError
from recoveryledger.core.recovery_service import RecoveryService
from recoveryledger.monitor.renderer import ChainRenderer

console = Console()


def simulate_cmd(
    files: list[Path] = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Files to run through a simulated attack and recovery.",
    ),
    corruption: int = typer.Option(
        None,
        "--corruption",
        "-c",
        min=0,
        max=100,
        help="Corruption level in percent (default from config).",
    ),
    seed: int = typer.Option(
        None,
        "--seed",
        help="Seed the corruption RNG for a reproducible run.",
    ),
    export: Path = typer.Option(
        None,
        "--export",
        "-o",
        help="Write the resulting chain as JSON to this path.",
    ),
) -> None:
    """Simulate attack + recovery for each file and record the outcomes."""
    config = LedgerConfig()
    rng = random.Random(seed) if seed is not None else None
    service = RecoveryService(IntegrityEngine(rng=rng, config=config), config=config)
    renderer = ChainRenderer(console=console)

    for path in files:
        try:
            report = service.simulate(path.name, path.read_bytes(), corruption)
        except InvalidInputError as exc:
            console.print(f"[red]Skipped {path.name}:[/red] {exc}")
            continue
        renderer.print_report(report)

    log = service.snapshot()
    renderer.print_chain(log)

    if export is not None:
        export.parent.mkdir(parents=True, exist_ok=True)
        export.write_text(json.dumps(export_chain(service.ledger), indent=2), encoding="utf-8")
        console.print(f"[bold green]Chain exported:[/bold green] {export}")

    if not log.is_valid:
        raise typer.Exit(code=1)
