"""
Main CLI interface for the dbt-core-interface client.

Provides command-line access to the health probe and to the lint and format
endpoints of a running dbt-core-interface server.
"""

import asyncio
import json
import logging
import sys

import click

from .api.models import ErrorContainer, is_error_response
from .config.settings import get_config
from .utils.http_client import DbtInterface

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging based on verbosity settings."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Default is quiet: only diagnostics from the output channel and errors
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.WARNING)

    # Transport loggers report every request at INFO
    for logger_name in ["httpx", "httpcore"]:
        logging.getLogger(logger_name).setLevel(logging.INFO if verbose else logging.ERROR)


def _build_interface(config, sql, sql_file, sql_path, extra_config_path) -> DbtInterface:
    """Create a client from mutually exclusive SQL source options."""
    sources = [source for source in (sql, sql_file, sql_path) if source is not None]
    if len(sources) != 1:
        raise click.UsageError("Provide exactly one of --sql, --sql-file or --sql-path")

    if sql_file is not None:
        sql = sql_file.read()

    return DbtInterface(sql, sql_path, extra_config_path or "", config=config)


def _display_result(result):
    """Print a lint/format result as JSON and exit non-zero on errors."""
    if isinstance(result, ErrorContainer):
        click.echo(result.model_dump_json(indent=2))
    else:
        click.echo(json.dumps(result, indent=2))

    if is_error_response(result):
        sys.exit(1)


def _sql_source_options(command):
    """Attach the options shared by lint and format."""
    options = [
        click.option("--sql", help="SQL text to send in the request body"),
        click.option(
            "--sql-file",
            type=click.File("r"),
            help="Read the SQL text from a local file and send it in the request body",
        ),
        click.option("--sql-path", help="Path of a SQL file the server reads itself"),
        click.option("--extra-config-path", default="", help="Additional sqlfluff configuration"),
        click.option("--timeout", type=int, help="Request deadline in milliseconds"),
    ]
    for option in reversed(options):
        command = option(command)
    return command


@click.group()
@click.option("--host", help="dbt-core-interface host override")
@click.option("--port", type=int, help="dbt-core-interface port override")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging and debug output")
@click.pass_context
def cli(ctx, host, port, verbose):
    """dbt-core-interface client - lint and format SQL through a running server."""
    setup_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        config = get_config()
        config.override_from_cli({"host": host, "port": port})
        ctx.obj["config"] = config
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def health(ctx):
    """Check whether the server answers its health endpoint."""
    config = ctx.obj["config"]
    interface = DbtInterface(None, None, "", config=config)

    if asyncio.run(interface.health_check()):
        click.echo(f"healthy: {config.base_url}")
    else:
        click.echo(f"unhealthy: {config.base_url}", err=True)
        sys.exit(1)


@cli.command()
@_sql_source_options
@click.pass_context
def lint(ctx, sql, sql_file, sql_path, extra_config_path, timeout):
    """Lint SQL with sqlfluff on the server."""
    interface = _build_interface(ctx.obj["config"], sql, sql_file, sql_path, extra_config_path)
    _display_result(asyncio.run(interface.lint(timeout)))


@cli.command(name="format")
@_sql_source_options
@click.pass_context
def format_sql(ctx, sql, sql_file, sql_path, extra_config_path, timeout):
    """Format SQL with sqlfluff on the server."""
    interface = _build_interface(ctx.obj["config"], sql, sql_file, sql_path, extra_config_path)
    _display_result(asyncio.run(interface.format(timeout)))


if __name__ == "__main__":
    cli()
