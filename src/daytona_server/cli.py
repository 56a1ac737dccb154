"""CLI entry point — the `daytona-server` command."""

import json
import logging
import os
from typing import NoReturn

import click

from daytona_server import __version__
from daytona_server.config import ConfigStore, initialize
from daytona_server.errors import ConfigError
from daytona_server.models import ServerConfig

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def _fail(e: Exception) -> NoReturn:
    raise click.ClickException(str(e))


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="daytona-server")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx, verbose):
    """Daytona server — configuration and workspace log management."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = ConfigStore()


@cli.command()
@click.pass_obj
def init(store):
    """Load the server config, creating the defaults on first run."""
    try:
        config = initialize(store.get_config_dir())
    except ConfigError as e:
        logger.critical("Failed to initialize server config: %s", e)
        raise SystemExit(f"FATAL: cannot initialize server config: {e}")
    click.echo(f"Config ready at {store.config_file} (id: {config.id})")


# ── config ───────────────────────────────────────────────────────────────

@cli.group("config")
def config_group():
    """Inspect and edit config.json."""


@config_group.command("show")
@click.pass_obj
def config_show(store):
    """Print the current config."""
    try:
        config = initialize(store.get_config_dir())
    except ConfigError as e:
        _fail(e)
    click.echo(json.dumps(config.to_dict(), indent=2))


@config_group.command("path")
@click.pass_obj
def config_path(store):
    """Print the config file location."""
    try:
        click.echo(str(store.config_file))
    except ConfigError as e:
        _fail(e)


@config_group.command("set")
@click.argument("key", type=click.Choice(sorted(ServerConfig.scalar_keys())))
@click.argument("value")
@click.pass_obj
def config_set(store, key, value):
    """Set a top-level config KEY to VALUE and save."""
    attr = ServerConfig.scalar_keys()[key]
    try:
        config = store.get_config()
    except ConfigError as e:
        _fail(e)
    if isinstance(getattr(config, attr), int):
        try:
            value = int(value)
        except ValueError:
            raise click.BadParameter(f"{key} must be an integer", param_hint="VALUE")
    setattr(config, attr, value)
    try:
        store.save(config)
    except ConfigError as e:
        _fail(e)
    click.echo(f"{key} = {value}")


# ── logs ─────────────────────────────────────────────────────────────────

@cli.group("logs")
def logs_group():
    """Workspace and project log files."""


@logs_group.command("path")
@click.argument("workspace_id")
@click.argument("project_id", required=False)
@click.pass_obj
def logs_path(store, workspace_id, project_id):
    """Print the log file path for WORKSPACE_ID (or one of its projects)."""
    try:
        if project_id:
            path = store.get_project_log_file_path(workspace_id, project_id)
        else:
            path = store.get_workspace_log_file_path(workspace_id)
    except ValueError as e:
        raise click.BadParameter(str(e))
    except ConfigError as e:
        _fail(e)
    click.echo(str(path))


@logs_group.command("delete")
@click.argument("workspace_id")
@click.pass_obj
def logs_delete(store, workspace_id):
    """Delete every log file of WORKSPACE_ID."""
    try:
        store.delete_workspace_logs(workspace_id)
    except ValueError as e:
        raise click.BadParameter(str(e))
    except ConfigError as e:
        _fail(e)
    click.echo(f"Deleted logs for workspace {workspace_id}")


# ── doctor ───────────────────────────────────────────────────────────────

def _report(ok: bool, label: str, detail: str) -> bool:
    if ok:
        click.echo(click.style("  ✓ ", fg="green") + f"{label} ({detail})")
    else:
        click.echo(click.style("  ✗ ", fg="red") + f"{label} — {detail}")
    return ok


@cli.command()
@click.pass_obj
def doctor(store):
    """Check the config directory, config file and logs directory."""
    try:
        config_dir = store.get_config_dir()
    except ConfigError as e:
        _report(False, "config dir", str(e))
        raise SystemExit(1)
    all_ok = _report(True, "config dir", str(config_dir))

    try:
        store.get_config()
        all_ok &= _report(True, "config file", str(store.config_file))
    except ConfigError as e:
        all_ok &= _report(False, "config file", f"{e} — run 'daytona-server init'")

    logs_dir = store.get_workspace_logs_dir()
    if logs_dir.exists():
        writable = os.access(logs_dir, os.W_OK)
        all_ok &= _report(writable, "logs dir", str(logs_dir) if writable else f"{logs_dir} is not writable")
    else:
        click.echo(click.style("  - ", fg="yellow") + f"logs dir ({logs_dir} not created yet)")

    if all_ok:
        click.echo()
        click.echo(click.style("All checks passed!", fg="green"))
    else:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
