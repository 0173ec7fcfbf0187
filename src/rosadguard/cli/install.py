"""Install and status commands."""

import asyncio
import logging

import typer
from rich.panel import Panel

from ..api.client import RouterOSClient
from ..api.exceptions import DeployError, RosAdguardError
from ..config import ConfigManager
from ..installer import Installer
from ..utils import (
    confirm,
    console,
    print_cancelled,
    print_error,
    print_info,
    print_success,
    styled_state,
)
from ..utils.helpers import async_to_sync

logger = logging.getLogger(__name__)


@async_to_sync
async def install(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Install or upgrade the AdGuard Home container.

    Any existing container with the configured name is stopped, removed and
    recreated from the latest image.
    """
    config_manager = ConfigManager()

    try:
        profile_config = config_manager.get_profile(profile)
        deployment = profile_config.deployment

        if (
            config_manager.get().output.confirm_destructive
            and not yes
            and not confirm(
                f"Replace container '{deployment.container_name}' on {profile_config.host} "
                f"with {deployment.image}?",
                default=True,
            )
        ):
            print_cancelled()
            return

        async with RouterOSClient(profile_config) as client:
            print_info(f"Connected to {client.identity} ({profile_config.host})")
            installer = Installer(client, deployment)
            await installer.run()

    except DeployError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except (KeyboardInterrupt, asyncio.CancelledError):
        print_cancelled()
        print_info("Re-run the installer to finish; every step is safe to repeat")
        raise typer.Exit(1)
    except RosAdguardError as e:
        logger.error("Install aborted: %s", e)
        print_error(str(e))
        raise typer.Exit(1)


@async_to_sync
async def status(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Show the router version, container mode and container state."""
    config_manager = ConfigManager()

    try:
        profile_config = config_manager.get_profile(profile)
        deployment = profile_config.deployment

        async with RouterOSClient(profile_config) as client:
            info = await Installer(client, deployment).inspect()

        state = info["state"].value
        mode = "enabled" if info["container_mode"] else "disabled"

        lines = [
            f"[bold]Router:[/bold]          {client.identity} ({profile_config.host})",
            f"[bold]RouterOS:[/bold]        {info['version']}",
            f"[bold]Container mode:[/bold]  {styled_state(mode)}",
            f"[bold]Registry:[/bold]        {info['registry_url'] or '-'}",
            f"[bold]Image:[/bold]           {deployment.image}",
            f"[bold]State:[/bold]           {styled_state(state)}",
        ]
        console.print(
            Panel("\n".join(lines), title=f"Container: {deployment.container_name}", border_style="blue")
        )
        if info["status"] is None:
            print_info("Run 'rosadguard install' to deploy it")
        elif info["status"].running:
            print_success("Container is running")

    except RosAdguardError as e:
        print_error(str(e))
        raise typer.Exit(1)
