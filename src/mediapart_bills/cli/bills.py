#!/usr/bin/env python3
"""
Bills CLI - Fetch, Parse and Summarize Commands

Command-line interface for the Mediapart billing history.
"""

from pathlib import Path

import click
import requests

from ..core.config import get_config
from ..core.currency import cents_to_decimal_str
from ..core.json_utils import format_json, write_json
from ..mediapart import (
    BillStore,
    MediapartBillParser,
    MediapartClient,
    MediapartError,
    bills_to_dataframe,
    get_bill_summary,
    load_bills,
)


@click.group()
def bills() -> None:
    """Mediapart billing history commands."""
    pass


@bills.command()
@click.option("--login", envvar="MEDIAPART_LOGIN", help="Account login (default: MEDIAPART_LOGIN)")
@click.option("--password", envvar="MEDIAPART_PASSWORD", help="Account password (default: MEDIAPART_PASSWORD)")
@click.option("--folder", help="Override destination folder")
@click.option("--no-download", is_flag=True, help="Index bills without downloading their documents")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def fetch(
    ctx: click.Context,
    login: str | None,
    password: str | None,
    folder: str | None,
    no_download: bool,
    verbose: bool,
) -> None:
    """
    Log in, read the billing history and store new bills.

    Examples:
      mediapart-bills bills fetch
      mediapart-bills bills fetch --folder ~/bills/mediapart --no-download
    """
    config = get_config()
    login = login or config.mediapart.login
    password = password or config.mediapart.password
    if not login or not password:
        raise click.UsageError("Login and password are required (options or MEDIAPART_LOGIN/MEDIAPART_PASSWORD)")

    folder_path = Path(folder).expanduser() if folder else config.mediapart.bills_dir
    verbose = verbose or ctx.obj.get("verbose", False)

    if verbose:
        click.echo("Mediapart Bill Fetch")
        click.echo(f"Destination: {folder_path}")
        click.echo()

    try:
        client = MediapartClient(timeout=config.mediapart.timeout, user_agent=config.mediapart.user_agent)
        client.authenticate(login, password)
        html_content = client.fetch_billing_html()

        parser = MediapartBillParser(user_agent=config.mediapart.user_agent)
        extraction = parser.parse_html_content(html_content)

        if verbose:
            click.echo(f"Layout: {extraction.layout}")
            click.echo(f"Parsed {len(extraction.records)} bills, {len(extraction.failures)} lines skipped")

        store = BillStore(folder_path)
        result = store.save_bills(extraction.records, fetch=None if no_download else client.fetch_bill)
    except (MediapartError, requests.RequestException) as e:
        click.echo(f"❌ Error fetching bills: {e}", err=True)
        raise click.ClickException(str(e)) from e

    click.echo(f"✅ Saved {len(result.saved)} new bills ({len(result.skipped)} already stored)")
    if extraction.failures:
        click.echo(f"⚠️  {len(extraction.failures)} lines could not be parsed")
    if result.failed:
        click.echo(f"⚠️  {len(result.failed)} bills could not be downloaded, they will be retried next run")
    click.echo(f"   Bills stored in: {folder_path}")


@bills.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", help="Write JSON result to this file instead of stdout")
def parse(html_file: Path, output: str | None) -> None:
    """
    Parse a saved billing page and print its records as JSON.

    Example:
      mediapart-bills bills parse listing.html --output bills.json
    """
    config = get_config()
    parser = MediapartBillParser(user_agent=config.mediapart.user_agent)

    try:
        extraction = parser.parse_file(html_file)
    except MediapartError as e:
        raise click.ClickException(str(e)) from e

    if output:
        write_json(output, extraction.to_dict())
        click.echo(f"✅ Parsed {len(extraction.records)} bills to {output}")
    else:
        click.echo(format_json(extraction.to_dict()))


@bills.command()
@click.option("--folder", help="Override bill folder")
def summary(folder: str | None) -> None:
    """Show a summary of stored bills."""
    bills_dir = Path(folder).expanduser() if folder else None

    try:
        records = load_bills(bills_dir)
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e

    stats = get_bill_summary(bills_to_dataframe(records))
    click.echo(f"Bills: {stats['total_bills']}")
    if stats["total_bills"]:
        click.echo(f"Period: {stats['date_range']['earliest']} to {stats['date_range']['latest']}")
        for currency, total_cents in stats["total_amount"].items():
            click.echo(f"Total {currency}: {cents_to_decimal_str(total_cents)}")

    store = BillStore(bills_dir or get_config().mediapart.bills_dir)
    click.echo(store.summary_text())
