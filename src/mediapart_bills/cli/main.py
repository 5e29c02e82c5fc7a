#!/usr/bin/env python3
"""
Main CLI Entry Point for Mediapart Bills

Provides the command-line interface for fetching and inspecting bills.
"""

import logging
import os

import click

from ..core.config import get_config
from ..mediapart.client import ACCOUNT_URL
from ..mediapart.datastore import BillStore
from ..mediapart.records import SCHEMA_VERSION


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Mediapart Bills - Billing History Scraper

    Fetches the billing history of a Mediapart account and stores each bill
    with its PDF document.
    """
    ctx.ensure_object(dict)

    # Configuration is read from the environment on first use
    if config_env:
        os.environ["MEDIAPART_ENV"] = config_env
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    config_obj = get_config()
    if debug:
        logging.getLogger("mediapart_bills").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config_obj

    if verbose:
        click.echo(f"Environment: {config_obj.environment.value}")
        click.echo(f"Data directory: {config_obj.data_dir}")
        click.echo(f"Bills directory: {config_obj.mediapart.bills_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from mediapart_bills import __author__, __version__

    click.echo(f"Mediapart Bills v{__version__}")
    click.echo(f"Author: {__author__}")
    click.echo(f"Bill index schema: v{SCHEMA_VERSION}")
    click.echo(f"Account site: {ACCOUNT_URL}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Bills Directory: {config_obj.mediapart.bills_dir}")
    click.echo(f"  Login: {'set' if config_obj.mediapart.login else 'not set'}")
    click.echo(f"  Password: {'set' if config_obj.mediapart.password else 'not set'}")
    click.echo(f"  Timeout: {config_obj.mediapart.timeout}s")
    click.echo(f"  User Agent: {config_obj.mediapart.user_agent}")
    click.echo(f"  Stored Bills: {BillStore(config_obj.mediapart.bills_dir).summary_text()}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .bills import bills  # noqa: E402

main.add_command(bills)


if __name__ == "__main__":
    main()
