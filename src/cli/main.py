"""CLI entry point — wexapi command."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from wexapi import Client, WexError, load_config, load_credentials

app = typer.Typer(name="wexapi", help="WEX exchange public and trade API client")
console = Console()

T = TypeVar("T")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _call(fn: Callable[[Client], T], private: bool = False) -> T:
    config = load_config()
    creds = load_credentials() if private else None
    try:
        if creds is not None:
            with Client.from_credentials(creds, config=config) as cli:
                return fn(cli)
        with Client(config=config) as cli:
            return fn(cli)
    except WexError as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(1)


@app.command()
def info():
    """List active pairs."""
    resp = _call(lambda c: c.info())
    table = Table(title=f"Pairs — server time {resp.server_time}")
    table.add_column("Pair", style="cyan")
    table.add_column("Decimals")
    table.add_column("Min price")
    table.add_column("Max price")
    table.add_column("Min amount")
    table.add_column("Fee")
    table.add_column("Hidden")
    for name, p in sorted(resp.pairs.items()):
        table.add_row(name, str(p.decimal_places), str(p.min_price), str(p.max_price),
                      str(p.min_amount), str(p.fee), "yes" if p.hidden else "no")
    console.print(table)


@app.command()
def ticker(pair: str = typer.Argument(..., help="e.g. btc_usd")):
    """Show ticker for a pair."""
    m = _call(lambda c: c.ticker(pair))
    table = Table(title=f"Ticker — {pair}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for field, value in [("High", m.high), ("Low", m.low), ("Average", m.average),
                         ("Volume", m.volume), ("Volume (cur)", m.volume_in_currency),
                         ("Last", m.last), ("Buy", m.buy), ("Sell", m.sell),
                         ("Updated", m.updated)]:
        table.add_row(field, str(value))
    console.print(table)


@app.command()
def depth(
    pair: str = typer.Argument(...),
    limit: Optional[int] = typer.Option(None, "--limit", "-n"),
):
    """Show the order book for a pair."""
    book = _call(lambda c: c.depth(pair, limit))
    for side, orders in (("Asks", book.asks), ("Bids", book.bids)):
        table = Table(title=f"{side} — {pair}")
        table.add_column("Rate", style="cyan")
        table.add_column("Amount")
        table.add_column("Total", style="green")
        for o in orders:
            table.add_row(str(o.rate), str(o.amount), str(o.total))
        console.print(table)


@app.command()
def trades(
    pair: str = typer.Argument(...),
    limit: Optional[int] = typer.Option(None, "--limit", "-n"),
):
    """Show recent trades for a pair."""
    history = _call(lambda c: c.trades(pair, limit))
    table = Table(title=f"Trades — {pair}")
    table.add_column("ID", style="cyan")
    table.add_column("Time")
    table.add_column("Type")
    table.add_column("Rate")
    table.add_column("Amount")
    for t in history:
        table.add_row(str(t.id), str(t.timestamp), t.type, str(t.rate), str(t.amount))
    console.print(table)


@app.command()
def balance():
    """Show account funds (needs WEX_API_KEY and WEX_API_SECRET)."""
    user = _call(lambda c: c.get_info(), private=True)
    table = Table(title=f"Funds — {user.open_orders} open orders")
    table.add_column("Currency", style="cyan")
    table.add_column("Amount", style="green")
    for currency, amount in sorted(user.funds.items()):
        table.add_row(currency, str(amount))
    console.print(table)


if __name__ == "__main__":
    app()
