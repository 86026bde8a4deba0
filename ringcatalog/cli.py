"""RingCatalog CLI.

Commands:
- products: List priced products, optionally filtered
- gold-price: Show the current gold price per gram
- validate-catalog: Check the catalog file and report malformed records
- serve: Run the web API
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ringcatalog.catalog.loader import load_catalog
from ringcatalog.config import get_config
from ringcatalog.errors import CatalogUnreadable, InvalidFilterValue, OracleUnavailable
from ringcatalog.models import ColorVariant, PricedEntry, PricingResult
from ringcatalog.pricing.filters import parse_filters
from ringcatalog.pricing.oracle import PriceOracle
from ringcatalog.pricing.pipeline import PricingPipeline

app = typer.Typer(
    name="ringcatalog",
    help="RingCatalog - engagement rings priced from the live gold spot price",
    no_args_is_help=True,
)

console = Console()


def format_stars(popularity: float) -> str:
    """Render a 0-5 rating as stars, rounding to the nearest half star.

    Example:
        >>> format_stars(3.6)
        '★★★½☆'
    """
    halves = int(popularity * 2 + 0.5)
    full, half = divmod(min(max(halves, 0), 10), 2)
    empty = 5 - full - half
    return "★" * full + ("½" if half else "") + "☆" * empty


def _render_table(result: PricingResult, color: ColorVariant) -> Table:
    table = Table(title=f"Product List ({color.label})")
    table.add_column("Name", style="bold")
    table.add_column("Weight (g)", justify="right")
    table.add_column("Price (USD)", justify="right", style="green")
    table.add_column("Rating", justify="left")
    table.add_column("Image", overflow="fold")

    for entry in result.items:
        table.add_row(
            entry.name,
            f"{entry.weight:g}",
            f"${entry.price:,.2f}",
            f"{format_stars(entry.popularity)} {entry.popularity:.1f}/5",
            entry.images.for_color(color),
        )
    return table


def _dump_products(items: list[PricedEntry]) -> list[dict]:
    return [item.model_dump(by_alias=True, mode="json") for item in items]


async def _run_pipeline(pipeline: PricingPipeline, filters) -> PricingResult:
    try:
        return await pipeline.compute(filters)
    finally:
        await pipeline.oracle.close()


@app.command()
def products(
    min_price: str | None = typer.Option(None, "--min-price", help="Minimum price (USD)"),
    max_price: str | None = typer.Option(None, "--max-price", help="Maximum price (USD)"),
    min_popularity: str | None = typer.Option(
        None, "--min-popularity", help="Minimum rating (0-5)"
    ),
    max_popularity: str | None = typer.Option(
        None, "--max-popularity", help="Maximum rating (0-5)"
    ),
    color: ColorVariant = typer.Option(
        ColorVariant.YELLOW, "--color", help="Gold colour whose image URL is shown"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the API JSON payload"),
    catalog: Path | None = typer.Option(None, "--catalog", help="Catalog JSON file"),
):
    """List products with prices computed from the current gold price."""
    try:
        filters = parse_filters(
            {
                "minPrice": min_price,
                "maxPrice": max_price,
                "minPopularity": min_popularity,
                "maxPopularity": max_popularity,
            }
        )
    except InvalidFilterValue as e:
        raise typer.BadParameter(str(e)) from e

    config = get_config()
    pipeline = PricingPipeline(
        PriceOracle.from_config(config.oracle), catalog or config.catalog.path
    )

    try:
        result = asyncio.run(_run_pipeline(pipeline, filters))
    except OracleUnavailable as e:
        console.print(f"[bold red]✗[/bold red] {e}")
        raise typer.Exit(code=2) from e

    if as_json:
        payload = {
            "products": _dump_products(result.items),
            "goldPrice": result.gold_price,
            "timestamp": result.timestamp,
        }
        if not filters.is_empty:
            payload["filters"] = filters.model_dump(by_alias=True)
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print(f"[bold]Gold price:[/bold] ${result.gold_price:.2f}/gram")
    if not result.items:
        if filters.is_empty:
            console.print("[yellow]No products available.[/yellow]")
        else:
            console.print("[yellow]No products found with the selected criteria.[/yellow]")
        return
    console.print(_render_table(result, color))


@app.command(name="gold-price")
def gold_price():
    """Show the current gold price in USD per gram."""
    oracle = PriceOracle.from_config(get_config().oracle)

    async def _fetch():
        try:
            return await oracle.fetch_snapshot()
        finally:
            await oracle.close()

    try:
        snapshot = asyncio.run(_fetch())
    except OracleUnavailable as e:
        console.print(f"[bold red]✗[/bold red] {e}")
        raise typer.Exit(code=2) from e

    console.print(
        f"[bold]Gold:[/bold] ${snapshot.price_per_gram:.2f}/gram "
        f"(as of {snapshot.captured_at.isoformat(timespec='seconds')})"
    )


@app.command(name="validate-catalog")
def validate_catalog(
    path: Path | None = typer.Argument(None, help="Catalog JSON file (default: configured)"),
):
    """Validate every catalog record and report the ones that would be skipped."""
    catalog_path = path or get_config().catalog.path

    try:
        result = load_catalog(catalog_path)
    except CatalogUnreadable as e:
        console.print(f"[bold red]✗[/bold red] {e}")
        raise typer.Exit(code=1) from e

    console.print(
        f"[bold green]✓[/bold green] {len(result.entries)}/{result.total_records} "
        f"records valid in {catalog_path}"
    )
    if result.rejected:
        table = Table(title="Rejected records")
        table.add_column("#", justify="right")
        table.add_column("Name")
        table.add_column("Reason", style="red")
        for rejected in result.rejected:
            table.add_row(str(rejected.index), rejected.name or "-", rejected.reason)
        console.print(table)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind"),
    port: int = typer.Option(3001, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable autoreload (dev only)"),
):
    """Run the catalog web API."""
    import uvicorn

    typer.echo(f"Starting RingCatalog API on http://{host}:{port}")
    uvicorn.run("ringcatalog.web.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
