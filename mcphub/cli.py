"""Click-based CLI for MCP Hub - shared MCP server registry for AI CLIs.

Links one registry of MCP servers into every enabled CLI's config
directory and keeps those links reconciled.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import click
import yaml

from mcphub import __version__
from mcphub.config import (
    EnvSettings,
    HubConfig,
    ensure_config_exists,
    get_config_path,
    get_hub_root,
    load_config,
    validate_config_file,
)
from mcphub.errors import HubError
from mcphub.logger import setup_logging
from mcphub.output import Console, create_console
from mcphub.sync import LinkReconciler, ProfileStore, SyncEngine, collect_status, connect_targets, init_hub

logger = logging.getLogger(__name__)


@dataclass
class CliContext:
    """Options shared by every command."""

    console: Console
    hub_root: Optional[Path] = None
    config_path: Optional[Path] = None
    verbose: bool = False

    def load(self) -> tuple[HubConfig, EnvSettings]:
        """Load hub configuration and environment flags."""
        config = load_config(self.config_path, hub_root=self.hub_root)
        env = EnvSettings.from_file(config.env_file)
        logger.debug("Loaded config for hub %s (env file %s)", config.hub_root, env.source)
        return config, env

    def resolved_config_path(self) -> Path:
        return self.config_path or get_config_path(self.hub_root)


pass_context = click.make_pass_decorator(CliContext)


@click.group()
@click.version_option(version=__version__, prog_name="mcphub")
@click.option(
    "--hub-root",
    type=click.Path(file_okay=False, path_type=Path),
    help="Hub root directory (default: $MCP_HUB_ROOT or current directory)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: $MCP_HUB_CONFIG or <hub>/configs/config.*)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, hub_root: Optional[Path], config_path: Optional[Path], verbose: bool) -> None:
    """MCP Hub - one registry of MCP servers for all your AI CLIs.

    \b
    Registry:  <hub>/servers/<category>/<server>/
    CLI link:  <cli config dir>/mcp_servers -> <hub>/servers
    """
    setup_logging(verbose=verbose)
    ctx.obj = CliContext(
        console=create_console(verbose=verbose),
        hub_root=get_hub_root(hub_root) if hub_root else None,
        config_path=config_path,
        verbose=verbose,
    )


def _fail(ctx: CliContext, error: Exception) -> NoReturn:
    ctx.console.print_error(str(error))
    sys.exit(1)


@cli.command()
@pass_context
def init(ctx: CliContext) -> None:
    """Initialize the hub directory structure.

    Creates the configuration file if missing, the registry categories,
    profile and log directories, the environment file and one
    disconnected profile per supported CLI.
    """
    console = ctx.console
    try:
        path, created = ensure_config_exists(ctx.hub_root, ctx.config_path)
        if created:
            console.print_success(f"Created configuration: {path}")
        config = load_config(path, hub_root=ctx.hub_root)
        result = init_hub(config)
    except (HubError, OSError) as e:
        _fail(ctx, e)

    console.print_init_result(result)
    console.print_success("Hub initialized")
    console.print_info(f"Enable CLIs in {config.env_file}, then run 'mcphub connect'")


@cli.command()
@click.argument("names", nargs=-1)
@pass_context
def connect(ctx: CliContext, names: tuple[str, ...]) -> None:
    """Connect CLIs to the registry.

    NAMES are CLIs to connect (default: every enabled CLI).
    """
    console = ctx.console
    try:
        config, env = ctx.load()
        results = connect_targets(
            config,
            env,
            ProfileStore(config.profiles_dir),
            LinkReconciler(config.servers_dir),
            list(names) or None,
        )
    except (HubError, OSError) as e:
        _fail(ctx, e)

    console.print_connect_results(results)
    if any(not r.success and not r.skipped for r in results):
        sys.exit(1)


@cli.command()
@click.option("--dry-run", "-n", is_flag=True, help="Preview link changes without applying")
@click.option("--cli", "only", multiple=True, help="Only sync this CLI (repeatable)")
@pass_context
def sync(ctx: CliContext, dry_run: bool, only: tuple[str, ...]) -> None:
    """Synchronize enabled servers into every connected CLI.

    Per-CLI failures are reported but do not change the exit code.
    """
    console = ctx.console
    try:
        config, env = ctx.load()
        engine = SyncEngine(config, env)
        run = engine.sync(dry_run=dry_run, only=list(only) or None)
    except (HubError, OSError) as e:
        _fail(ctx, e)

    console.print_sync_report(run.report)
    if run.report_paths is not None:
        console.print(f"[dim]Report: {run.report_paths.report}[/dim]")
    elif dry_run:
        console.print_info("Dry-run mode - no changes applied")


@cli.command()
@pass_context
def status(ctx: CliContext) -> None:
    """Show hub, CLI and server status without making changes."""
    try:
        config, env = ctx.load()
        hub_status = collect_status(config, env)
    except (HubError, OSError) as e:
        _fail(ctx, e)

    ctx.console.print_status(hub_status)


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Hub configuration commands."""
    pass


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration")
@pass_context
def config_init(ctx: CliContext, force: bool) -> None:
    """Create a default configuration file."""
    console = ctx.console
    path = ctx.resolved_config_path()
    if path.exists() and not force:
        console.print_warning(f"Configuration already exists: {path}")
        return

    try:
        if path.exists():
            path.unlink()
        path, _ = ensure_config_exists(ctx.hub_root, path)
    except (HubError, OSError) as e:
        _fail(ctx, e)
    console.print_success(f"Created configuration: {path}")


@config.command("show")
@pass_context
def config_show(ctx: CliContext) -> None:
    """Show the effective configuration."""
    console = ctx.console
    try:
        config, _ = ctx.load()
    except (HubError, OSError) as e:
        _fail(ctx, e)

    console.print_config_summary(
        str(ctx.resolved_config_path()),
        len(config.servers.categories),
        len(config.clis.supported),
    )
    console.print(yaml.dump(config.model_dump(), default_flow_style=False, sort_keys=False), markup=False)


@config.command("validate")
@click.argument("file", required=False, type=click.Path(dir_okay=False, path_type=Path))
@pass_context
def config_validate(ctx: CliContext, file: Optional[Path]) -> None:
    """Validate a configuration file.

    FILE defaults to the hub's configuration file.
    """
    console = ctx.console
    path = file or ctx.resolved_config_path()
    valid, errors = validate_config_file(path)

    if valid:
        console.print_success(f"Configuration is valid: {path}")
        return

    console.print_error(f"Configuration is invalid: {path}")
    for error in errors:
        console.print(f"  - {error}", markup=False)
    sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
