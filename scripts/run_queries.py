#!/usr/bin/env python3
"""
ShopQuery query runner

Loads a snapshot (synthetic by default, or from the configured database)
and prints the result of every catalogue query.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shopquery.config import configure_logging, get_settings
from shopquery.core.domain import Snapshot
from shopquery.core.engine import SummaryStatistics
from shopquery.core.errors import QueryEngineError
from shopquery.db.seed import generate_dataset
from shopquery.db.sources import (
    InMemorySource,
    SqlCustomerSource,
    SqlOrderSource,
    SqlProductSource,
)
from shopquery.queries import CATALOGUE, NamedQuery

console = Console()
logger = logging.getLogger("shopquery.scripts.run_queries")


# -----------------------------
# Loading
# -----------------------------


def load_snapshot(use_database: bool) -> Snapshot:
    """Load from the configured database, or generate a synthetic dataset."""
    if use_database:
        return Snapshot.load(SqlCustomerSource(), SqlProductSource(), SqlOrderSource())

    dataset = generate_dataset()
    return Snapshot.load(
        InMemorySource(dataset.customers),
        InMemorySource(dataset.products),
        InMemorySource(dataset.orders),
    )


# -----------------------------
# Display Functions
# -----------------------------


def show_header(source: str) -> None:
    header = Text()
    header.append("ShopQuery", style="bold bright_cyan")
    header.append(f" - analytical queries over {source} data", style="dim")

    console.print()
    console.print(Panel(header, box=box.DOUBLE, border_style="bright_blue", padding=(0, 2)))
    console.print()


def render(result) -> Table | Text:
    """Render a query result as a rich renderable."""
    if isinstance(result, SummaryStatistics):
        result = result.to_dict()

    if isinstance(result, dict):
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold magenta")
        table.add_column("Key")
        table.add_column("Value")
        for key, value in result.items():
            table.add_row(_short(key), _short(value))
        return table

    if isinstance(result, list):
        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Item")
        for item in result:
            table.add_row(_short(item))
        if not result:
            table.add_row("[dim](no rows)[/dim]")
        return table

    return Text(str(result), style="bold green")


def run_query(query: NamedQuery, snapshot: Snapshot) -> None:
    started = time.perf_counter()
    try:
        result = query.run(snapshot)
    except QueryEngineError as e:
        console.print(
            Panel(f"[red]{type(e).__name__}[/red]: {e}", title=f"{query.key}. {query.title}")
        )
        return
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("query %s - execution time: %.2f ms", query.key, elapsed_ms)

    console.print(
        Panel(
            render(result),
            title=f"[bold]{query.key}. {query.title}[/bold]",
            subtitle=f"{elapsed_ms:.2f} ms",
            border_style="dim",
        )
    )


def _short(value) -> str:
    if hasattr(value, "name") and hasattr(value, "id"):
        return f"#{value.id} {value.name}"
    if hasattr(value, "order_date") and hasattr(value, "id"):
        return f"order #{value.id} ({value.order_date})"
    if isinstance(value, list):
        return ", ".join(_short(v) for v in value)
    return str(value)


# -----------------------------
# Main
# -----------------------------


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--database",
        action="store_true",
        help="read from the configured DATABASE_URL instead of synthetic data",
    )
    parser.add_argument("--only", nargs="*", help="catalogue keys to run (default: all)")
    args = parser.parse_args()

    configure_logging()
    settings = get_settings()

    snapshot = load_snapshot(args.database)
    show_header(settings.database_url if args.database else "synthetic")

    for query in CATALOGUE:
        if args.only and query.key not in args.only:
            continue
        run_query(query, snapshot)


if __name__ == "__main__":
    main()
