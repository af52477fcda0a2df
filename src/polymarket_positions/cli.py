"""CLI entry point."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable

from rich.console import Console
from rich.table import Table

from polymarket_positions.errors import format_error, get_error_stack
from polymarket_positions.positions import Position

console = Console()
log = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) < 2:
        _usage()
        return

    command = sys.argv[1]

    if command == "portfolio":
        _portfolio()
    elif command in ("positions", "stats"):
        if len(sys.argv) < 3 or sys.argv[2].startswith("--"):
            console.print(f"[red]Usage: polymarket-positions {command} <address>[/red]")
            sys.exit(1)
        if command == "positions":
            _positions(sys.argv[2])
        else:
            _stats(sys.argv[2])
    else:
        _usage()


def _usage() -> None:
    console.print("[bold]Polymarket Positions[/bold]\n")
    console.print("Commands:")
    console.print("  portfolio                           Show proxy wallet positions and USDC balance")
    console.print("  positions <address>                 Show a user's positions and their value")
    console.print("  stats <address>                     Show value-weighted P&L for a user")


def _run(coro: Awaitable[None]) -> None:
    try:
        asyncio.run(coro)
    except Exception as exc:
        log.debug("Command failed:\n%s", get_error_stack(exc))
        console.print(f"[red]Error: {format_error(exc)}[/red]")
        sys.exit(1)


def _positions_table(title: str, positions: list[Position]) -> Table:
    table = Table(title=title)
    table.add_column("Market", style="cyan", max_width=50)
    table.add_column("Outcome", style="bold")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Avg Price", justify="right")
    table.add_column("Value", justify="right", style="yellow")
    table.add_column("P&L", justify="right")

    for pos in positions:
        pnl = pos.percent_pnl or 0.0
        pnl_color = "green" if pnl >= 0 else "red"
        table.add_row(
            str(pos.title or pos.slug or pos.condition_id or "?")[:50],
            pos.outcome or "?",
            f"{pos.size or 0:.1f}",
            f"${pos.avg_price or 0:.2f}",
            f"${pos.current_value or 0:,.2f}",
            f"[{pnl_color}]{pnl:+.2f}%[/{pnl_color}]",
        )
    return table


def _portfolio() -> None:
    from polymarket_positions.positions import fetch_my_positions_and_balance

    async def _do() -> None:
        result = await fetch_my_positions_and_balance()
        if result.positions:
            console.print(_positions_table("Portfolio Positions", result.positions))
        else:
            console.print("[yellow]No open positions.[/yellow]")
        console.print(f"\n[bold]USDC balance:[/bold] ${result.usdc_balance:,.2f}")
        console.print(f"[bold]Total balance:[/bold] ${result.total_balance:,.2f}")

    _run(_do())


def _positions(address: str) -> None:
    from polymarket_positions.positions import fetch_user_positions_and_balance

    async def _do() -> None:
        result = await fetch_user_positions_and_balance(address)
        if not result.positions:
            console.print(f"[yellow]No open positions for {address}.[/yellow]")
            return
        console.print(_positions_table(f"Positions for {address}", result.positions))
        console.print(f"\n[bold]Total value:[/bold] ${result.balance:,.2f}")

    _run(_do())


def _stats(address: str) -> None:
    from polymarket_positions.positions import (
        calculate_position_stats,
        fetch_user_positions_and_balance,
    )

    async def _do() -> None:
        result = await fetch_user_positions_and_balance(address)
        stats = calculate_position_stats(result.positions)
        console.print(f"[bold]Positions:[/bold] {len(result.positions)}")
        console.print(f"[bold]Current value:[/bold] ${stats.total_value:,.2f}")
        console.print(f"[bold]Initial value:[/bold] ${stats.initial_value:,.2f}")
        console.print(f"[bold]Weighted P&L:[/bold] {stats.weighted_pnl:,.2f}")
        console.print(f"[bold]Overall P&L:[/bold] {stats.overall_pnl:+.2f}%")

    _run(_do())
