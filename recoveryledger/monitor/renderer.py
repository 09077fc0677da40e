"""Rich terminal renderer for recovery outcomes and the ledger.

Turns ``RecoveryReport`` and ``BlockchainLog`` into Rich renderables.

Color scheme
------------
- green   : full recovery / success
- yellow  : partial
- red     : corrupted / failed
"""

from __future__ import annotations

from datetime import datetime, timezone

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from recoveryledger.core.recovery_service import RecoveryReport
from recoveryledger.models.ledger import BlockchainLog
from recoveryledger.models.recovery import RecoveryStatus, RecoveryType

# ---------------------------------------------------------------------------
# Enum -> Rich markup mapping
# ---------------------------------------------------------------------------

_TYPE_BADGES: dict[RecoveryType, str] = {
    RecoveryType.FULL: "[bold green]Full Recovery[/bold green]",
    RecoveryType.PARTIAL: "[bold yellow]Partial Recovery[/bold yellow]",
    RecoveryType.CORRUPTED: "[bold red]Corrupted[/bold red]",
}

_STATUS_STYLES: dict[RecoveryStatus, str] = {
    RecoveryStatus.SUCCESS: "green",
    RecoveryStatus.PARTIAL: "yellow",
    RecoveryStatus.FAILED: "red",
}

_HASH_PREVIEW = 16


def _short(digest: str) -> str:
    if len(digest) <= _HASH_PREVIEW:
        return digest
    return f"{digest[:_HASH_PREVIEW]}..."


def _format_ms(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).strftime(
        "%Y-%m-%d %H:%M:%S UTC"
    )


class ChainRenderer:
    """Renders recovery reports and ledger snapshots as Rich output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_report(self, report: RecoveryReport) -> Panel:
        """Render one operation's outcome as a Panel."""
        outcome = report.outcome
        match = (
            "[green]match[/green]"
            if outcome.integrity_match
            else "[bold red]MISMATCH[/bold red]"
        )
        lines = [
            f"[bold]Operation:[/bold] {report.operation_id}",
            f"[bold]Corruption level:[/bold] {report.corruption_level}%",
            f"[bold]Recovery rate:[/bold] {outcome.recovery_rate:.2f}%  "
            f"{_TYPE_BADGES[outcome.recovery_type]}",
            f"[bold]Original hash:[/bold]  {outcome.original_hash}",
            f"[bold]Recovered hash:[/bold] {outcome.recovered_hash}",
            f"[bold]Integrity:[/bold] {match}",
            f"[bold]Block:[/bold] #{report.block.index}  {_short(report.block.hash)}",
        ]
        return Panel(
            Text.from_markup("\n".join(lines)),
            title=f"[bold]{escape(report.file_name)}[/bold]",
            border_style="green" if outcome.success else "red",
            padding=(1, 2),
        )

    def render_chain(self, log: BlockchainLog) -> Panel:
        """Render a ledger snapshot as a Panel containing a Table."""
        table = Table(
            show_header=True,
            header_style="bold cyan",
            expand=True,
            show_lines=False,
            pad_edge=True,
        )
        table.add_column("#", style="dim", width=5, justify="right")
        table.add_column("Operation", min_width=20)
        table.add_column("File", min_width=16)
        table.add_column("Status", justify="center")
        table.add_column("Type", justify="center")
        table.add_column("Timestamp")
        table.add_column("Prev hash")
        table.add_column("Hash")

        for block in log.chain:
            record = block.data
            style = _STATUS_STYLES[record.status]
            table.add_row(
                str(block.index),
                escape(record.operation_id),
                escape(record.file_name),
                f"[{style}]{record.status.value}[/{style}]",
                record.recovery_type.value,
                _format_ms(block.timestamp),
                _short(block.previous_hash),
                _short(block.hash),
            )

        chain_status = (
            "[green]valid[/green]" if log.is_valid else "[bold red]BROKEN[/bold red]"
        )
        summary_parts = [
            f"[bold]Blocks:[/bold] {len(log.chain)}",
            f"[bold]Chain:[/bold] {chain_status}",
        ]
        if log.degraded:
            summary_parts.append(
                "[bold red]Digest: DEGRADED (non-cryptographic fallback)[/bold red]"
            )
        summary = "  |  ".join(summary_parts)

        return Panel(
            Group(table, Text(""), Text.from_markup(summary)),
            title="[bold]Recovery Ledger[/bold]",
            border_style="blue",
            padding=(1, 2),
        )

    def print_report(self, report: RecoveryReport) -> None:
        self.console.print(self.render_report(report))

    def print_chain(self, log: BlockchainLog) -> None:
        self.console.print(self.render_chain(log))
