#!/usr/bin/env python3
import argparse
import logging
import math
import random
import sys
from collections.abc import Callable, Iterable
from typing import Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from stock_rebalancer import (
    DEFAULT_CONFIG,
    Portfolio,
    RebalanceAction,
    RebalancerError,
    Stock,
    allocation_total,
    build_allocation,
    random_price_history,
    remaining_allocation,
)

logger = logging.getLogger(__name__)
console = Console()

ADVISOR_HEADER = "As your financial advisor, to achieve your allocation you should:"

# (name, quantity, fixed price history or None for random prices)
DEMO_STOCKS: list[tuple[str, float, Optional[list[float]]]] = [
    ("META", 10, None),
    ("APPL", 15, None),
    ("MSFT", 7, [4, 5, 12]),
]
DEMO_ALLOCATION: dict[str, float] = {"META": 0.4, "APPL": 0.45, "MSFT": 0.15}

ACTION_STYLES: dict[str, str] = {"buy": "green", "sell": "red", "maintain": "yellow"}


def _to_number(raw: str) -> Optional[float]:
    """Parse user input as a finite number, or None if it isn't one."""
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def validate_name(raw: str, used_names: set[str]) -> Optional[str]:
    name = raw.strip()
    if not name:
        return "Name cannot be empty"
    if name.lower() in used_names:
        return "Stock name must be unique"
    return None


def validate_quantity(raw: str) -> Optional[str]:
    value = _to_number(raw)
    if value is None or value <= 0:
        return "Quantity must be a positive number"
    return None


def validate_prices(raw: str) -> Optional[str]:
    if not raw.strip():
        return "Please enter at least one price"
    for price in raw.split(","):
        value = _to_number(price)
        if value is None or value <= 0:
            return "All prices must be positive numbers"
    return None


def validate_fraction(raw: str) -> Optional[str]:
    value = _to_number(raw)
    if value is None:
        return "Allocation must be a number"
    if value < 0 or value > 1:
        return "Allocation must be between 0 and 1"
    return None


def parse_prices(raw: str) -> list[float]:
    return [float(price.strip()) for price in raw.split(",")]


def _fmt(value: float) -> str:
    return f"{value:g}"


def _ask(message: str, validate: Callable[[str], Optional[str]]) -> str:
    """Prompt until the answer passes validation."""
    while True:
        answer = Prompt.ask(message, console=console)
        error = validate(answer)
        if error is None:
            return answer
        console.print(f"  [red]{error}[/red]")


def prompt_for_stock(used_names: set[str], rng: random.Random) -> Stock:
    """Ask for one stock's name, quantity and optional price history."""
    name = _ask("Enter stock name", lambda raw: validate_name(raw, used_names)).strip()
    quantity = float(_ask("Enter quantity", validate_quantity))

    if Confirm.ask("Do you want to add price history?", default=False, console=console):
        prices = parse_prices(
            _ask("Enter prices separated by commas (e.g., 10,20,30)", validate_prices)
        )
    else:
        prices = random_price_history(rng)

    used_names.add(name.lower())
    console.print(f'\n[green]Stock "{name}" added successfully![/green]')
    return Stock(name=name, quantity=quantity, price_history=prices)


def prompt_for_stocks(rng: random.Random) -> list[Stock]:
    stocks: list[Stock] = []
    used_names: set[str] = set()

    while True:
        stocks.append(prompt_for_stock(used_names, rng))
        if not Confirm.ask("Do you want to add another stock?", default=True, console=console):
            return stocks


def prompt_for_allocations(stocks: list[Stock]) -> Optional[dict[str, float]]:
    """Ask for each stock's target fraction until they add up to 1.

    Returns:
        The allocation by stock name, or None if the user gives up.
    """
    console.print("\n[bold]=== Allocation Setup ===[/bold]")
    console.print("Enter allocation for each stock (decimal between 0 and 1).")
    console.print("The sum of all allocations must equal 1.\n")

    while True:
        allocations: dict[str, float] = {}
        for stock in stocks:
            remaining = remaining_allocation(allocations.values())
            raw = _ask(
                f'Enter allocation for "{stock.name}" (remaining: {_fmt(remaining)})',
                validate_fraction,
            )
            allocations[stock.name] = float(raw)

        total = allocation_total(allocations)
        if total == 1:
            return allocations

        console.print(f"\n[red]Error: Allocations sum to {_fmt(total)}, but must equal 1.[/red]")
        if not Confirm.ask("Do you want to re-enter the allocations?", default=True, console=console):
            console.print("Exiting without creating allocation.")
            return None


def stocks_table(stocks: Iterable[Stock], title: str = "Created Stocks") -> Table:
    t = Table(title=title, box=box.ROUNDED, title_style="bold white")
    t.add_column("#", justify="right", style="dim")
    t.add_column("Stock", style="cyan")
    t.add_column("Quantity", justify="right")
    t.add_column("Price History")

    for i, stock in enumerate(stocks, start=1):
        t.add_row(
            str(i),
            stock.name,
            _fmt(stock.quantity),
            f"[{', '.join(_fmt(p) for p in stock.price_history)}]",
        )
    return t


def allocation_table(allocation: dict[str, float]) -> Table:
    t = Table(title="Allocation Created", box=box.ROUNDED, title_style="bold white")
    t.add_column("Stock", style="cyan")
    t.add_column("Target", justify="right", style="green")
    for name, fraction in allocation.items():
        t.add_row(name, f"{fraction * 100:.2f}%")
    return t


def summary_table(portfolio: Portfolio) -> Table:
    """Holdings with current and target share of the portfolio's value."""
    t = Table(title="Summary", box=box.ROUNDED, title_style="bold white")
    t.add_column("Stock", style="cyan")
    t.add_column("Quantity", justify="right")
    t.add_column("Price", justify="right")
    t.add_column("Value", justify="right")
    t.add_column("Alloc", justify="right", style="yellow")
    t.add_column("Target", justify="right", style="green")
    t.add_column("Target Value", justify="right")

    current = portfolio.current_allocation()
    targets = portfolio.target_values()
    for stock in portfolio.stocks:
        t.add_row(
            stock.name,
            _fmt(stock.quantity),
            f"${stock.current_price:,.2f}",
            f"${stock.market_value:,.2f}",
            f"{current.get(stock.name, 0.0):.1%}",
            f"{portfolio.allocation.get(stock.name, 0.0):.1%}",
            f"${targets[stock.name]:,.2f}",
        )

    t.add_section()
    t.add_row(
        "", "", "Total", f"[bold]${portfolio.total_value():,.2f}[/bold]", "", "", ""
    )
    return t


def advice_lines(actions: Iterable[RebalanceAction]) -> list[Text]:
    return [
        Text(f"> {action}", style=ACTION_STYLES[action.action]) for action in actions
    ]


def display_rebalance(portfolio: Portfolio) -> None:
    actions = portfolio.rebalance()
    console.print(f"\n\n{ADVISOR_HEADER}")
    for line in advice_lines(actions):
        console.print(line)


def run_interactive(rng: random.Random) -> int:
    console.print(Panel("[bold]Stock Portfolio CLI[/bold]", box=box.DOUBLE))
    console.print()

    stocks = prompt_for_stocks(rng)

    console.print()
    console.print(stocks_table(stocks))
    console.print(f"\nTotal stocks created: {len(stocks)}")

    allocations = prompt_for_allocations(stocks)
    if allocations is None:
        return 0

    allocation = build_allocation(
        allocations, tolerance=DEFAULT_CONFIG.ALLOCATION_SUM_TOLERANCE
    )
    console.print()
    console.print(allocation_table(allocation))

    portfolio = Portfolio(stocks, allocation)
    console.print()
    console.print(summary_table(portfolio))

    display_rebalance(portfolio)
    return 0


def run_demo(rng: random.Random) -> int:
    """Rebalance a fixed example portfolio without prompting."""
    stocks = [
        Stock(name, quantity, prices if prices else random_price_history(rng))
        for name, quantity, prices in DEMO_STOCKS
    ]
    console.print(stocks_table(stocks, title="Stock Prices"))

    allocation = build_allocation(
        DEMO_ALLOCATION, tolerance=DEFAULT_CONFIG.ALLOCATION_SUM_TOLERANCE
    )
    portfolio = Portfolio(stocks, allocation)
    console.print(summary_table(portfolio))

    display_rebalance(portfolio)
    return 0


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Suggest buy/sell actions to bring stocks to a target allocation."
    )
    parser.add_argument(
        "--demo", action="store_true", help="rebalance a built-in example portfolio"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="seed for generated price histories"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the CLI application."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    rng = random.Random(args.seed)

    try:
        if args.demo:
            return run_demo(rng)
        return run_interactive(rng)
    except RebalancerError as e:
        logger.debug("Rebalance failed", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1
    except KeyboardInterrupt:
        console.print("\nCancelled.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
