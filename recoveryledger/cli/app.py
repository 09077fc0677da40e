"""Main Typer application — imports and registers all CLI commands.

Entry point: ``recoveryledger`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from recoveryledger.cli.commands.digest import digest_cmd
from recoveryledger.cli.commands.simulate import simulate_cmd
from recoveryledger.cli.commands.verify import verify_cmd
from recoveryledger.config import LogLevel, config

app = typer.Typer(
    name="recoveryledger",
    help="recoveryledger: tamper-evident log of simulated data-recovery operations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="digest", help="Print the digest of a file.")(digest_cmd)
app.command(name="simulate", help="Simulate attack and recovery, record outcomes.")(simulate_cmd)
app.command(name="verify", help="Re-verify an exported chain.")(verify_cmd)


@app.callback()
def main_callback(
    log_level: LogLevel = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Logging level (default from config).",
    ),
) -> None:
    """Configure logging for every subcommand."""
    level = (log_level or config.log_level).value
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
