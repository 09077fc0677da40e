"""``recoveryledger digest`` — print the digest of a file."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from recoveryledger.config import LedgerConfig
from recoveryledger.core.integrity import IntegrityEngine, InvalidInputError

console = Console()


def digest_cmd(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="File to digest.",
    ),
) -> None:
    """Print the digest of a file and the algorithm that produced it."""
    engine = IntegrityEngine(config=LedgerConfig())
    try:
        digest = engine.digest(path.read_bytes())
    except InvalidInputError as exc:
        console.print(f"[red]Rejected:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    algorithm = engine.digester.algorithm.value
    if engine.degraded:
        console.print("[bold red]WARNING:[/bold red] non-cryptographic fallback digest in use.")
    console.print(f"{digest}  {path.name}  [dim]({algorithm})[/dim]")
