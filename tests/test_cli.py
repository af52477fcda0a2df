"""
Tests for the command-line front-end.
"""
from unittest.mock import AsyncMock, patch

import pytest

from polymarket_positions import cli
from polymarket_positions.errors import NetworkError
from polymarket_positions.positions import (
    MyPositionsAndBalance,
    Position,
    UserPositionsAndBalance,
)

ADDRESS = "0x" + "ef" * 20

POSITIONS = [
    Position(condition_id="a", title="Rain in London?", outcome="Yes", size=10,
             avg_price=0.4, current_value=100, initial_value=50, percent_pnl=0.5),
    Position(condition_id="b", title="BTC above 100k?", outcome="No", size=20,
             avg_price=0.6, current_value=200, initial_value=100, percent_pnl=-0.1),
]


def _run_cli(monkeypatch, *args):
    monkeypatch.setattr("sys.argv", ["polymarket-positions", *args])
    cli.main()


class TestCommands:
    """Tests for command dispatch and output."""

    def test_usage_without_command(self, monkeypatch, capsys):
        _run_cli(monkeypatch)
        assert "Commands:" in capsys.readouterr().out

    def test_unknown_command_prints_usage(self, monkeypatch, capsys):
        _run_cli(monkeypatch, "bogus")
        assert "Commands:" in capsys.readouterr().out

    @pytest.mark.parametrize("command", ["positions", "stats"])
    def test_missing_address(self, monkeypatch, capsys, command):
        with pytest.raises(SystemExit) as exc_info:
            _run_cli(monkeypatch, command)
        assert exc_info.value.code == 1
        assert "Usage" in capsys.readouterr().out

    def test_positions(self, monkeypatch, capsys):
        result = UserPositionsAndBalance(positions=POSITIONS, balance=300.0)
        with patch(
            "polymarket_positions.positions.fetch_user_positions_and_balance",
            AsyncMock(return_value=result),
        ) as fetch:
            _run_cli(monkeypatch, "positions", ADDRESS)

        fetch.assert_awaited_once_with(ADDRESS)
        out = capsys.readouterr().out
        assert "Total value" in out
        assert "$300.00" in out

    def test_positions_empty(self, monkeypatch, capsys):
        result = UserPositionsAndBalance(positions=[], balance=0.0)
        with patch(
            "polymarket_positions.positions.fetch_user_positions_and_balance",
            AsyncMock(return_value=result),
        ):
            _run_cli(monkeypatch, "positions", ADDRESS)

        assert "No open positions" in capsys.readouterr().out

    def test_stats(self, monkeypatch, capsys):
        result = UserPositionsAndBalance(positions=POSITIONS, balance=300.0)
        with patch(
            "polymarket_positions.positions.fetch_user_positions_and_balance",
            AsyncMock(return_value=result),
        ):
            _run_cli(monkeypatch, "stats", ADDRESS)

        out = capsys.readouterr().out
        assert "$300.00" in out
        assert "$150.00" in out
        assert "+0.10%" in out

    def test_portfolio(self, monkeypatch, capsys):
        result = MyPositionsAndBalance(positions=POSITIONS, usdc_balance=25.5, total_balance=325.5)
        with patch(
            "polymarket_positions.positions.fetch_my_positions_and_balance",
            AsyncMock(return_value=result),
        ):
            _run_cli(monkeypatch, "portfolio")

        out = capsys.readouterr().out
        assert "$25.50" in out
        assert "$325.50" in out

    def test_fetch_failure_exits_with_message(self, monkeypatch, capsys):
        with patch(
            "polymarket_positions.positions.fetch_user_positions_and_balance",
            AsyncMock(side_effect=NetworkError("HTTP 502 from data api")),
        ):
            with pytest.raises(SystemExit) as exc_info:
                _run_cli(monkeypatch, "positions", ADDRESS)

        assert exc_info.value.code == 1
        assert "HTTP 502 from data api" in capsys.readouterr().out
