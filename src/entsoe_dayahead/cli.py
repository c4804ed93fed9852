"""Click-based CLI for entsoe-dayahead.

Thin wrapper around library modules. Zero business logic — every operation
delegates to the ingestion package.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import date, datetime

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console(stderr=True)

_QUIET_LOGGERS = ("httpx", "httpcore")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run_async(coro):
    """Run an async coroutine from synchronous Click code."""
    return asyncio.run(coro)


def _load_config(ctx: click.Context):
    """Load config lazily, caching on first call."""
    if "config" not in ctx.obj:
        from entsoe_dayahead.core import load_config

        ctx.obj["config"] = load_config(config_path=ctx.obj.get("config_path"))
    return ctx.obj["config"]


def _price_rows(prices, area: str) -> list[dict[str, str]]:
    """Flatten price points into printable rows in the area's local time."""
    from entsoe_dayahead.ingestion import area_timezone

    tz = area_timezone(area)
    return [
        {
            "start_time": p.start_time.isoformat(),
            "local_time": p.local_time(tz).strftime("%Y-%m-%d %H:%M %Z"),
            "amount": str(p.amount.amount),
            "currency": p.currency,
        }
        for p in prices
    ]


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    envvar="ENTSOE_DAYAHEAD_CONFIG",
    default=None,
    help="Path to entsoe-dayahead.yml config file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.version_option(package_name="entsoe-dayahead")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """ENTSO-E Day-Ahead: hourly electricity prices per bidding zone."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        # httpx logs full request URLs, which carry the security token
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# areas
# ---------------------------------------------------------------------------


@cli.command()
def areas() -> None:
    """List supported bidding areas."""
    from entsoe_dayahead.ingestion.areas import AREA_DOMAINS, AREA_TIMEZONES, supported_areas

    table = Table(title="Supported Bidding Areas")
    table.add_column("Area", style="bold")
    table.add_column("Domain")
    table.add_column("Time zone")

    for area in supported_areas():
        table.add_row(area, AREA_DOMAINS[area], AREA_TIMEZONES[area])

    console.print(table)


# ---------------------------------------------------------------------------
# prices
# ---------------------------------------------------------------------------


@cli.command()
@click.option(
    "--area",
    "-a",
    type=str,
    required=True,
    help="Bidding area code (e.g. SE3).",
)
@click.option(
    "--date",
    "-d",
    "price_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Market day (YYYY-MM-DD). Default: today.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "csv"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.pass_context
def prices(
    ctx: click.Context,
    area: str,
    price_date: datetime | None,
    output_format: str,
) -> None:
    """Fetch and display one day of hourly day-ahead prices."""
    from entsoe_dayahead.core import ConfigError, FetchError
    from entsoe_dayahead.ingestion import fetch_day_ahead_prices

    day = price_date.date() if price_date else date.today()

    try:
        config = _load_config(ctx)
        result = _run_async(fetch_day_ahead_prices(area, day, config.entsoe))
    except (ConfigError, FetchError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise SystemExit(1) from e

    rows = _price_rows(result, area)
    if output_format == "json":
        _output_prices_json(rows)
    elif output_format == "csv":
        _output_prices_csv(rows)
    else:
        _output_prices_table(rows, area, day)


def _output_prices_table(rows: list[dict[str, str]], area: str, day: date) -> None:
    """Render prices as a Rich table."""
    table = Table(title=f"Day-ahead prices {area} {day}")
    table.add_column("Hour", style="bold")
    table.add_column("Price", justify="right")

    for row in rows:
        table.add_row(row["local_time"], f"{row['amount']} {row['currency']}")

    console.print(table)


def _output_prices_json(rows: list[dict[str, str]]) -> None:
    """Write prices as JSON to stdout."""
    click.echo(json.dumps(rows, indent=2))


def _output_prices_csv(rows: list[dict[str, str]]) -> None:
    """Write prices as CSV to stdout."""
    import csv
    import io

    if not rows:
        return

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(rows[0]))
    writer.writeheader()
    writer.writerows(rows)
    click.echo(buf.getvalue(), nl=False)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
