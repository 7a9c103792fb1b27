from __future__ import annotations

import argparse
import asyncio
import shutil
import sys

from rich import print as rprint
from rich.console import Console
from rich.prompt import Confirm

from awsome import __version__
from awsome.cli.banners import (
    render_apply_result,
    render_config,
    render_forced_check,
    render_update_status,
)
from awsome.cli.update_notifier import (
    FileSystemBannerMarker,
    FileSystemUpdateCacheRepository,
    UnavailableUpdateGateway,
    UpdateChecker,
    UpdateGateway,
)
from awsome.core.config import AwsomeConfig, ConfigError, UpdateCheckerConfig
from awsome.core.paths.global_paths import CONFIG_FILE
from awsome.core.utils import configure_logging, logger


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="awsome", description="AWS Session Manager (AWsome)"
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--check-updates",
        action="store_true",
        help="Check for updates now, ignoring the cached result, and explain "
        "any failure.",
    )
    parser.add_argument(
        "--no-update-check",
        action="store_true",
        help="Skip the background update check for this invocation.",
    )

    subparsers = parser.add_subparsers(metavar="COMMAND")
    check = subparsers.add_parser(
        "check", help="Check for updates now (same as --check-updates)"
    )
    check.set_defaults(action="check")

    update = subparsers.add_parser(
        "update", aliases=["u"], help="Update AWsome to the latest version"
    )
    update.add_argument(
        "-y", "--yes", action="store_true", help="Do not ask for confirmation"
    )
    update.set_defaults(action="update")

    config = subparsers.add_parser(
        "config", aliases=["c"], help="View configuration settings"
    )
    config.set_defaults(action="config")

    parser.set_defaults(action=None, parser=parser)
    return parser.parse_args(argv)


def load_config() -> AwsomeConfig:
    config = AwsomeConfig.load()
    if not CONFIG_FILE.path.exists():
        try:
            config.save()
        except OSError as e:
            logger.warning(f"Could not create default config file: {e}")
    return config


def build_update_gateway(config: UpdateCheckerConfig) -> UpdateGateway:
    if shutil.which("git") is None:
        return UnavailableUpdateGateway()

    from awsome.cli.update_notifier.adapters.git_update_gateway import (
        GitUpdateGateway,
    )

    return GitUpdateGateway(config.repo_path)


def build_update_checker(
    config: UpdateCheckerConfig, gateway: UpdateGateway
) -> UpdateChecker:
    return UpdateChecker(
        gateway=gateway,
        cache_repository=FileSystemUpdateCacheRepository(),
        banner_marker=FileSystemBannerMarker(),
        config=config,
    )


async def run_background_check(
    config: UpdateCheckerConfig, console: Console, gateway: UpdateGateway | None = None
) -> None:
    gateway = gateway or build_update_gateway(config)
    try:
        status = await build_update_checker(config, gateway).check_for_updates()
    finally:
        await gateway.aclose()

    if status is not None and status.should_notify:
        render_update_status(console, status)


async def run_forced_check(
    config: UpdateCheckerConfig, console: Console, gateway: UpdateGateway | None = None
) -> None:
    gateway = gateway or build_update_gateway(config)
    try:
        with console.status("Checking for updates..."):
            result = await build_update_checker(config, gateway).force_check()
    finally:
        await gateway.aclose()

    render_forced_check(console, result)


async def run_update(
    config: UpdateCheckerConfig, console: Console, gateway: UpdateGateway | None = None
) -> bool:
    gateway = gateway or build_update_gateway(config)
    try:
        with console.status("Updating AWsome..."):
            result = await build_update_checker(config, gateway).apply_update()
    finally:
        await gateway.aclose()

    render_apply_result(console, result)
    return result.cause is None


def confirm_update(console: Console) -> bool:
    console.print("[blue]This will update AWsome to the latest version[/blue]")
    try:
        return Confirm.ask("Do you want to proceed with the update?", console=console)
    except (KeyboardInterrupt, EOFError):
        return False


def main(argv: list[str] | None = None) -> None:
    args = parse_arguments(argv)
    configure_logging()

    try:
        config = load_config()
    except ConfigError as e:
        rprint(f"[red]Error: {e.message}[/]")
        sys.exit(1)

    console = Console()

    if args.check_updates or args.action == "check":
        asyncio.run(run_forced_check(config.update, console))
        return

    if args.action == "update":
        if not args.yes and not confirm_update(console):
            rprint("[yellow]Update cancelled.[/]")
            return
        if not asyncio.run(run_update(config.update, console)):
            sys.exit(1)
        return

    if not args.no_update_check:
        asyncio.run(run_background_check(config.update, console))

    if args.action == "config":
        render_config(console, config)
    else:
        args.parser.print_help()


if __name__ == "__main__":
    main()
