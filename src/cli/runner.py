# src/cli/runner.py

"""Headless entry points: one tracker run, or a status report."""

import logging

from rich.console import Console
from rich.table import Table

from src.config.settings import TrackerConfig
from src.models.product import Snapshot
from src.scrapers.errors import TrackerError
from src.services.tracker import RestockTracker
from src.storage.snapshot_store import SnapshotStore

logger = logging.getLogger("restock_tracker.cli")

# Stderr console for status messages so stdout stays clean
_err = Console(stderr=True)


def run_tracker(
    config: TrackerConfig,
    dry_run: bool = False,
    use_cookie_cache: bool = True,
) -> int:
    """Run the tracker once and return an exit code (0=ok, 1=fail)."""
    tracker = RestockTracker(
        config,
        use_cookie_cache=use_cookie_cache,
        dry_run=dry_run,
    )
    try:
        result = tracker.run()
    except TrackerError as exc:
        logger.error(
            "Error during stock check (%s): %s",
            type(exc).__name__,
            exc,
            exc_info=True,
        )
        _err.print(f"[red]{type(exc).__name__}: {exc}[/red]")
        return 1

    summary = (
        f"{result.product_count} products, "
        f"{len(result.events)} restocked, "
        f"{result.notified} notified"
    )
    if dry_run:
        summary += " (dry run)"
    _err.print(f"[green]✓ {summary}[/green]")
    return 0


def _print_status_table(snapshot: Snapshot) -> None:
    """Render a Rich table of the persisted snapshot to stdout."""
    table = Table(
        title="Current Stock Status",
        show_lines=False,
        title_style="bold cyan",
    )
    table.add_column("SKU", style="dim")
    table.add_column("Product", max_width=50)
    table.add_column("Status", justify="center")
    table.add_column("Qty", justify="right")
    table.add_column("Price", justify="right", style="green")

    for sku, entry in snapshot.items():
        status = (
            "[green]✅ IN STOCK[/green]"
            if entry.in_stock
            else "[red]❌ OUT OF STOCK[/red]"
        )
        table.add_row(
            sku,
            entry.name[:50],
            status,
            f"{entry.inventory_quantity}/{entry.low_stock_threshold}",
            str(entry.price),
        )

    console = Console()
    console.print(table)
    last_checked = next(iter(snapshot.values())).last_checked or "Never"
    console.print(f"Last checked: {last_checked}")


def show_status(config: TrackerConfig) -> int:
    """Print the persisted snapshot without touching the network."""
    snapshot = SnapshotStore(config.state_file_path).load()
    if not snapshot:
        _err.print(
            "[yellow]No stock data available. "
            "Run the tracker first.[/yellow]"
        )
        return 0
    _print_status_table(snapshot)
    return 0
