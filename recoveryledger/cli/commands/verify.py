"""``recoveryledger verify`` — re-verify an exported chain."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from recoveryledger.core.chain_export import load_blocks, verify_export

console = Console()


def verify_cmd(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Chain export written by 'simulate --export'.",
    ),
) -> None:
    """Recompute every block hash in an export and check the links."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        blocks = load_blocks(payload)
        valid = verify_export(payload)
    except (json.JSONDecodeError, ValueError) as exc:
        console.print(f"[red]Unreadable export:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    if payload.get("degraded"):
        console.print(
            "[bold red]WARNING:[/bold red] chain was sealed with the "
            "non-cryptographic fallback digest."
        )
    if valid:
        console.print(f"[bold green]Chain valid[/bold green] ({len(blocks)} blocks)")
        return
    console.print(f"[bold red]Chain BROKEN[/bold red] ({len(blocks)} blocks)")
    raise typer.Exit(code=1)
