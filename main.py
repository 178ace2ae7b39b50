#!/usr/bin/env python3
"""ns-fetch - NetSuite REST record client - Entry point."""
import json
import logging
from typing import Any, Callable

import click
from colorama import Fore, Style, init

from config import AppConfig, load_credentials
from ns_fetch import __version__
from ns_fetch.cli.interactive import run_init
from ns_fetch.cli.runner import CommandRunner
from ns_fetch.errors import BatchDispatchError, ConfigError, NsFetchError, TransportError
from ns_fetch.exporter.json_exporter import JsonExporter
from ns_fetch.validator.request_validator import RequestValidator

# Initialize colorama
init(autoreset=True)


def print_banner():
    """Print application banner."""
    click.echo(f"{Fore.CYAN}{'=' * 44}", err=True)
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}ns-fetch{Fore.CYAN}                             ║", err=True)
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}NetSuite REST Record Client{Fore.CYAN}          ║", err=True)
    click.echo(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}", err=True)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def format_error(error: NsFetchError) -> str:
    """HTTP failures show status and body, local errors only the message."""
    if isinstance(error, TransportError) and error.is_http_error:
        body = error.body
        if not isinstance(body, str):
            body = json.dumps(body, default=str)
        message = f"HTTP {error.status_code} {body}"
        if isinstance(error, BatchDispatchError):
            message = f"Record {error.index} failed after {len(error.completed)} created: {message}"
        return message
    return f"Error: {error}"


def run_operation(ctx: click.Context, operation: Callable[[CommandRunner], Any]) -> None:
    """Load credentials, run one operation and print its result."""
    app_config: AppConfig = ctx.obj["app_config"]
    exporter: JsonExporter = ctx.obj["exporter"]

    try:
        credentials = load_credentials(app_config.config_path)
        runner = CommandRunner(credentials, app_config.netsuite_api)
        result = operation(runner)
    except BatchDispatchError as e:
        # Records before the failure exist on the server, report them
        exporter.export(e.completed)
        click.echo(f"{Fore.RED}{format_error(e)}", err=True)
        ctx.exit(1)
    except NsFetchError as e:
        click.echo(f"{Fore.RED}{format_error(e)}", err=True)
        ctx.exit(1)

    exporter.export(result)


def record_id_from(ctx: click.Context, option_id, args) -> Any:
    try:
        return RequestValidator.resolve_record_id(option_id, args)
    except NsFetchError as e:
        click.echo(f"{Fore.RED}{format_error(e)}", err=True)
        ctx.exit(1)


type_option = click.option("--type", "-t", "record_type", help="Record type (so, po, inv, customer, vendor or any record type)")
id_option = click.option("--id", "option_id", help="Record internal ID")
data_option = click.option("--data", "-d", help="JSON payload")
bulk_file_option = click.option("--bulk-file", "--bulkFile", "bulk_file", type=click.Path(dir_okay=False), help="JSON file with an array of records")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write JSON output to a file")
@click.pass_context
def cli(ctx, verbose, output):
    """ns-fetch - Query and import NetSuite records over the REST API."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    if "app_config" not in ctx.obj:
        try:
            ctx.obj["app_config"] = AppConfig.from_env()
        except ConfigError as e:
            click.echo(f"{Fore.RED}{format_error(e)}", err=True)
            ctx.exit(1)
    ctx.obj.setdefault("exporter", JsonExporter(output))


@cli.command()
@click.pass_context
def init(ctx):
    """Configure NetSuite OAuth credentials."""
    print_banner()
    app_config: AppConfig = ctx.obj["app_config"]

    try:
        existing = load_credentials(app_config.config_path)
    except ConfigError:
        existing = None

    run_init(app_config.config_path, existing)


@cli.command()
@click.argument("args", nargs=-1)
@type_option
@id_option
@click.option("--fields", multiple=True, help="Comma-separated fields to return (with an ID)")
@click.option("--limit", default="1000", show_default=True, help="Page size when listing")
@click.option("--offset", default="0", show_default=True, help="Page offset when listing")
@click.pass_context
def get(ctx, args, record_type, option_id, fields, limit, offset):
    """Fetch a record by ID, or list records of a type."""
    record_id = record_id_from(ctx, option_id, args)
    run_operation(ctx, lambda runner: runner.get(record_type, record_id, fields, limit, offset))


@cli.command()
@type_option
@data_option
@bulk_file_option
@click.pass_context
def create(ctx, record_type, data, bulk_file):
    """Create a record from --data, or many from --bulk-file."""
    if bulk_file:
        run_operation(ctx, lambda runner: runner.bulk(record_type, bulk_file))
    else:
        run_operation(ctx, lambda runner: runner.create(record_type, data))


@cli.command()
@click.argument("args", nargs=-1)
@type_option
@id_option
@data_option
@click.pass_context
def update(ctx, args, record_type, option_id, data):
    """Patch a record with --data."""
    record_id = record_id_from(ctx, option_id, args)
    run_operation(ctx, lambda runner: runner.update(record_type, record_id, data))


@cli.command()
@click.argument("args", nargs=-1)
@type_option
@id_option
@click.pass_context
def delete(ctx, args, record_type, option_id):
    """Delete a record."""
    record_id = record_id_from(ctx, option_id, args)
    run_operation(ctx, lambda runner: runner.delete(record_type, record_id))


@cli.command()
@type_option
@bulk_file_option
@click.pass_context
def bulk(ctx, record_type, bulk_file):
    """Create every record in a JSON file, one request each."""
    run_operation(ctx, lambda runner: runner.bulk(record_type, bulk_file))


@cli.command("import")
@type_option
@click.option("--csv-file", "--csvFile", "csv_file", type=click.Path(dir_okay=False), help="CSV file to import")
@click.option("--excel-file", "--excelFile", "excel_file", type=click.Path(dir_okay=False), help="Excel file to import (first sheet)")
@click.option("--file", "-f", "file", type=click.Path(dir_okay=False), help="CSV or Excel file, detected by extension")
@click.option("--map-file", "--mapFile", "map_file", type=click.Path(dir_okay=False), help="JSON header -> field ID map")
@click.option("--value-map-file", "--valueMapFile", "value_map_file", type=click.Path(dir_okay=False), help="JSON header -> {value -> replacement} map")
@click.option("--delimiter", help="CSV delimiter (detected when omitted)")
@click.option("--strict-paths", is_flag=True, help="Fail when a dotted field path collides with another column")
@click.option("--dry-run", is_flag=True, help="Print payloads without sending them")
@click.pass_context
def import_records(ctx, record_type, csv_file, excel_file, file, map_file, value_map_file, delimiter, strict_paths, dry_run):
    """Create one record per row of a CSV or Excel file."""
    run_operation(
        ctx,
        lambda runner: runner.import_file(
            record_type,
            csv_file=csv_file,
            excel_file=excel_file,
            file=file,
            map_file=map_file,
            value_map_file=value_map_file,
            delimiter=delimiter,
            strict_paths=strict_paths,
            dry_run=dry_run,
        ),
    )


if __name__ == "__main__":
    cli()
