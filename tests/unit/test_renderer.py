"""Unit tests for the ChainRenderer — Rich panels for reports and chains."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel

from recoveryledger.core.hash_chain import HashChainLedger
from recoveryledger.core.recovery_service import RecoveryService
from recoveryledger.models.ledger import BlockchainLog
from recoveryledger.models.recovery import RecoveryType
from recoveryledger.monitor.renderer import _TYPE_BADGES, ChainRenderer


def _render_text(renderable) -> str:
    console = Console(record=True, width=200)
    console.print(renderable)
    return console.export_text()


class TestChainRenderer:
    def test_type_badges_cover_every_type(self):
        assert set(_TYPE_BADGES) == set(RecoveryType)

    def test_render_chain_returns_panel(self, seeded_ledger: HashChainLedger):
        panel = ChainRenderer().render_chain(seeded_ledger.snapshot())
        assert isinstance(panel, Panel)

    def test_chain_lists_every_block(self, seeded_ledger: HashChainLedger):
        text = _render_text(ChainRenderer().render_chain(seeded_ledger.snapshot()))
        assert "GENESIS" in text
        assert "file-4.bin" in text
        assert "valid" in text

    def test_broken_chain_shown(self, seeded_ledger: HashChainLedger):
        log = BlockchainLog(chain=seeded_ledger.chain(), is_valid=False)
        text = _render_text(ChainRenderer().render_chain(log))
        assert "BROKEN" in text

    def test_degraded_flag_shown(self, seeded_ledger: HashChainLedger):
        log = BlockchainLog(chain=seeded_ledger.chain(), is_valid=True, degraded=True)
        text = _render_text(ChainRenderer().render_chain(log))
        assert "DEGRADED" in text

    def test_bracketed_file_name_is_escaped(self, ledger: HashChainLedger, make_record):
        ledger.append(make_record(file_name="[red]scan[/red].img"))
        text = _render_text(ChainRenderer().render_chain(ledger.snapshot()))
        assert "[red]scan[/red].img" in text

    def test_render_report(self, service: RecoveryService, sample_bytes: bytes):
        report = service.simulate("photo.jpg", sample_bytes, 0)
        text = _render_text(ChainRenderer().render_report(report))
        assert "photo.jpg" in text
        assert "100.00%" in text
        assert "Full Recovery" in text
        assert "match" in text
