"""taskgram CLI - daily notes from Notion task pages."""

import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from .adapters.notion_api import NotionAdapter
from .config import Config, load_config
from .core.report import render_report, report_to_json
from .errors import AccountNotFound, ConfigError, RemoteCallError
from .workflows import collect_report, find_user, get_window

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _load(config_path: str | None) -> Config:
    return load_config(Path(config_path).expanduser() if config_path else None)


@click.group(invoke_without_command=True)
@click.version_option(package_name="taskgram")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """taskgram - what got done and what is next, from Notion."""
    logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG if debug else logging.WARNING)
    if ctx.invoked_subcommand is None:
        ctx.invoke(report)


@main.command()
@click.option("--config", "config_path", default=None, help="Path to taskgram.conf")
@click.option("-s", "--starttime", default=None, help="Start time when notes were last updated (e.g. 24h).")
@click.option("-d", "--startdate", default=None, help="Start date when notes were last updated (YYYY-MM-DD).")
@click.option("-e", "--endtime", default=None, help="End time when notes were last updated (e.g. 1h).")
@click.option("-j", "--enddate", default=None, help="End date when notes were last updated (YYYY-MM-DD).")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def report(
    config_path: str | None = None,
    starttime: str | None = None,
    startdate: str | None = None,
    endtime: str | None = None,
    enddate: str | None = None,
    as_json: bool = False,
):
    """Show done and to-do notes from assigned pages."""
    config = _load(config_path)

    # Flags replace the window from the config file as a whole
    if any(v is not None for v in (starttime, startdate, endtime, enddate)):
        config.search = replace(
            config.search,
            start_time=starttime or "",
            start_date=startdate or "",
            end_time=endtime or "",
            end_date=enddate or "",
        )

    try:
        window = get_window(config)
        if not as_json:
            click.echo(window.describe())
            click.echo()
        result = collect_report(config, window)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except AccountNotFound as e:
        click.echo(f"{e}.\nPlease, check the NOTION_USERNAME setting in the config file.")
        return
    except RemoteCallError as e:
        click.echo(f"Error: get tasks: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(report_to_json(result.done, result.pending))
        return

    output = render_report(result.done, result.pending)
    if output:
        click.echo(output)


@main.command()
@click.argument("username")
@click.option("--config", "config_path", default=None, help="Path to taskgram.conf")
def whoami(username: str, config_path: str | None = None):
    """Look up the Notion user ID for a display name."""
    config = _load(config_path)
    try:
        source = NotionAdapter(config.notion)
        user = find_user(source, username)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except AccountNotFound as e:
        click.echo(f"{e}.", err=True)
        sys.exit(1)
    except RemoteCallError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"{user.name}: {user.id}")
