from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from awsome.cli.update_notifier import (
    ForcedCheckResult,
    UpdateApplyResult,
    UpdateStatus,
)
from awsome.core.config import AwsomeConfig


def _commits(count: int) -> str:
    return f"{count} commit{'s' if count != 1 else ''}"


def render_update_status(console: Console, status: UpdateStatus) -> None:
    if status.update_available:
        console.print(
            Panel(
                f"A new version of AWsome is available ({_commits(status.behind_count)} behind).\n"
                "Run [bold]awsome update[/bold] to update.",
                border_style="blue",
                width=70,
            )
        )
    if status.checks_failing:
        console.print(
            "[dim]Update checks have been failing for a while. Possible network issue?[/dim]"
        )


def render_forced_check(console: Console, result: ForcedCheckResult) -> None:
    if not result.ok:
        console.print(f"[red]✗ Update check failed: {result.message}[/red]")
        if result.status is not None and result.status.checks_failing:
            console.print(
                "[dim]Update checks have been failing for a while. Possible network issue?[/dim]"
            )
        return

    status = result.status
    if status is None or not status.update_available:
        console.print("[green]✓ AWsome is up to date.[/green]")
        return

    branch = f" on {result.branch}" if result.branch else ""
    console.print(
        f"[yellow]AWsome is {_commits(status.behind_count)} behind{branch} "
        f"({status.remote_head[:7]}).[/yellow]"
    )
    console.print("Run [bold]awsome update[/bold] to update.")


def render_apply_result(console: Console, result: UpdateApplyResult) -> None:
    if result.updated:
        console.print(f"[bold green]✓ {result.message}[/bold green]")
        console.print("[blue]Please run AWsome again to use the updated version.[/blue]")
    elif result.cause is None:
        console.print(f"[green]{result.message}[/green]")
    else:
        console.print(f"[red]✗ Update failed: {result.message}[/red]")

    if not result.stash_restored:
        console.print(
            "[yellow]Could not restore your local changes, they are kept in "
            "`git stash list`.[/yellow]"
        )


def render_config(console: Console, config: AwsomeConfig) -> None:
    console.print(
        Panel("AWsome Configuration", border_style="blue", width=70), justify="center"
    )

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold magenta")
    table.add_column(style="cyan")
    table.add_row("AWS Default Region:", config.default_region)
    table.add_row("AWS SSO Region:", config.sso_region)
    table.add_row("AWS SSO Start URL:", config.sso_start_url or "[dim]not set[/dim]")
    table.add_row("Install directory:", str(config.update.repo_path))
    table.add_row(
        "Update checks:",
        "enabled" if config.update.enabled else "disabled",
    )
    table.add_row(
        "Remote branches:",
        f"{config.update.remote} ({', '.join(config.update.branch_candidates)})",
    )
    console.print(table)
