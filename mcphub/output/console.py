# MCP Hub Console Output
# Rich-based console output for user-friendly display

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mcphub.sync.connect import ConnectResult
from mcphub.sync.hub import InitResult
from mcphub.sync.links import LinkAction
from mcphub.sync.report import SyncReport
from mcphub.sync.results import TargetSyncResult
from mcphub.sync.status import HubStatus, TargetStatus


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for hub operations.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored, highlight=False)

    @property
    def rich(self) -> RichConsole:
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_sync_report(self, report: SyncReport) -> None:
        """
        Print sync report summary.

        Args:
            report: Report of the completed run.
        """
        self._console.print()

        if not report.cli_results:
            self._console.print("[yellow]No connected CLIs to sync[/yellow]")

        for name, result in report.cli_results.items():
            self._print_target_result(name, result, dry_run=report.dry_run)

        for name, error in report.discovery_errors.items():
            self._console.print(f"[red]?[/red] [bold]{name}[/bold] - profile unreadable: {escape(error)}")

        for warning in report.warnings:
            self.print_warning(warning)

        summary = report.summary
        status_text = "Dry run completed" if report.dry_run else "Sync completed"
        if report.success:
            headline = f"[green]{status_text}[/green]"
            border = "green"
        else:
            headline = f"[red]{status_text} with errors[/red]"
            border = "red"

        self._console.print()
        self._console.print(
            Panel(
                f"{headline}\n"
                f"CLIs: {summary.successful_syncs}/{summary.total_clis} synced\n"
                f"Servers: {summary.enabled_servers} enabled of {summary.total_servers}",
                title="Summary",
                border_style=border,
            )
        )

    def _print_target_result(self, name: str, result: TargetSyncResult, *, dry_run: bool = False) -> None:
        """Print result for a single target."""
        changes = result.mutations
        change_verb = "would change" if dry_run else "changed"

        if result.success:
            line = f"[green]✓[/green] [bold]{name}[/bold] - {len(result.synced)} servers synced"
        else:
            line = f"[red]✗[/red] [bold]{name}[/bold] - {len(result.synced)} servers synced"
        if changes:
            line += f", {changes} links {change_verb}"
        if result.failed:
            line += f", [red]{len(result.failed)} errors[/red]"
        self._console.print(line)

        for error in result.errors:
            self._console.print(f"    [red]✗[/red] {escape(error)}")

        if self.verbose or result.failed:
            for outcome in result.servers:
                if outcome.success:
                    if not self.verbose:
                        continue
                    action = outcome.action.value if outcome.action else LinkAction.UNCHANGED.value
                    self._console.print(f"    [green]✓[/green] {outcome.category}/{outcome.name} [dim]({action})[/dim]")
                else:
                    self._console.print(f"    [red]✗[/red] {outcome.category}/{outcome.name}: {escape(outcome.error or '')}")

    def print_connect_results(self, results: list[ConnectResult]) -> None:
        """Print the outcome of connecting targets."""
        for result in results:
            if result.skipped:
                self._console.print(f"[dim]○[/dim] [bold]{result.target}[/bold] - skipped ({escape(result.skipped)})")
            elif result.success:
                action = result.action.value if result.action else LinkAction.UNCHANGED.value
                self._console.print(f"[green]✓[/green] [bold]{result.target}[/bold] - connected [dim]({action})[/dim]")
                self._console.print(f"    [dim]Config: {escape(result.config_path)}[/dim]")
                self._console.print(f"    [dim]Link:   {escape(str(result.link_path))}[/dim]")
            else:
                self._console.print(f"[red]✗[/red] [bold]{result.target}[/bold] - {escape(result.error or '')}")

    def print_init_result(self, result: InitResult) -> None:
        """Print what hub initialization created."""
        for directory in result.created_dirs:
            self._console.print(f"  [green]+[/green] {directory}")
        if result.env_created:
            self._console.print("  [green]+[/green] environment file")
        for name in result.created_profiles:
            self._console.print(f"  [green]+[/green] profile {name}")

    def print_status(self, status: HubStatus) -> None:
        """
        Print full hub status.

        Args:
            status: Snapshot from collect_status.
        """
        system = status.system
        self._console.print(
            Panel(
                f"Hub root: {system.hub_root}\n"
                f"Platform: {system.platform}\n"
                f"Environment file: {self._mark(system.env_loaded)}\n"
                f"Setup complete: {self._mark(system.setup_complete)}",
                title="MCP Hub",
                border_style="blue",
            )
        )

        self._print_targets(status.targets)
        self._print_servers(status)
        self._print_sync(status)

        recommendations = status.recommendations()
        self._console.print()
        if recommendations:
            for rec in recommendations:
                self.print_warning(rec)
        else:
            self.print_success("Everything looks good")

    def _print_targets(self, targets: list[TargetStatus]) -> None:
        table = Table(title="CLIs", show_header=True, header_style="bold")
        table.add_column("CLI", style="cyan")
        table.add_column("Status")
        table.add_column("Link")
        table.add_column("Servers", justify="right")
        table.add_column("Last Sync")

        for target in targets:
            if not target.enabled:
                state = "[dim]disabled[/dim]"
            elif target.connected:
                state = "[green]connected[/green]"
            elif target.error:
                state = "[red]unknown[/red]"
            else:
                state = "[yellow]disconnected[/yellow]"

            if not target.enabled:
                link = "[dim]-[/dim]"
            elif target.link_valid:
                link = "[green]valid[/green]"
            elif target.link_exists:
                link = "[red]invalid[/red]"
            else:
                link = "[red]missing[/red]"

            last_sync = target.last_sync[:19] if target.last_sync else "Never"
            table.add_row(target.name, state, link, str(target.servers_count), last_sync)

        self._console.print()
        self._console.print(table)

    def _print_servers(self, status: HubStatus) -> None:
        self._console.print()
        self._console.print(
            f"[bold]Servers:[/bold] {len(status.servers)} total, "
            f"[green]{len(status.enabled_servers)} enabled[/green], "
            f"[red]{len(status.disabled_servers)} disabled[/red]"
        )
        if not status.servers:
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Server", style="cyan")
        table.add_column("Category", style="blue")
        table.add_column("Enabled", justify="center")
        table.add_column("Config", justify="center")
        table.add_column("Server file", justify="center")
        table.add_column("README", justify="center")
        table.add_column("Deps", justify="center")

        for server in status.servers:
            deps = self._mark(server.dependencies_installed) if server.has_package_json else "[dim]-[/dim]"
            table.add_row(
                server.name,
                server.category,
                self._mark(server.enabled),
                self._mark(server.has_config),
                self._mark(server.has_server_file),
                self._mark(server.has_readme),
                deps,
            )
        self._console.print(table)

        for warning in status.warnings:
            self.print_warning(warning)

    def _print_sync(self, status: HubStatus) -> None:
        sync = status.sync
        self._console.print()
        self._console.print(f"[bold]Auto sync:[/bold] {self._mark(sync.auto_sync_enabled)}  interval {sync.sync_interval}ms")

        report = sync.last_sync_report
        if report:
            summary = report.get("summary") or {}
            self._console.print(
                f"[bold]Last sync:[/bold] {report.get('timestamp', '?')} - "
                f"{summary.get('successful_syncs', 0)}/{summary.get('total_clis', 0)} CLIs, "
                f"{summary.get('enabled_servers', 0)} servers"
            )
        else:
            self.print_warning("No sync has been run yet")

        if self.verbose and sync.history:
            for entry in sync.history[-3:]:
                summary = entry.summary
                self._console.print(
                    f"  [dim]{entry.timestamp} - "
                    f"{summary.get('successful_syncs', 0)}/{summary.get('total_clis', 0)} CLIs synced[/dim]"
                )

    @staticmethod
    def _mark(value: bool) -> str:
        return "[green]✓[/green]" if value else "[red]✗[/red]"

    def print_config_summary(self, config_path: str, categories: int, clis: int) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {config_path}\nCategories: {categories}\nCLIs: {clis}",
                title="MCP Hub Configuration",
                border_style="blue",
            )
        )


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
