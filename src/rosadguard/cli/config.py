"""Configuration management commands for rosadguard."""

import typer
from pydantic import ValidationError
from rich.panel import Panel

from ..api.client import RouterOSClient
from ..api.exceptions import RosAdguardError
from ..config import AuthConfig, ConfigManager, ProfileConfig
from ..utils import (
    confirm,
    console,
    create_table,
    print_cancelled,
    print_error,
    print_info,
    print_success,
    prompt,
    select_menu,
)
from ..utils.helpers import async_to_sync

app = typer.Typer(help="Manage router profiles", no_args_is_help=True)


# ── Shared helpers ───────────────────────────────────────────────────────


def _pick_profile(config_manager: ConfigManager) -> str | None:
    """Interactive single-select for a profile. Returns profile name or None."""
    try:
        config = config_manager.get()
    except RosAdguardError:
        print_info("No configuration found. Run 'rosadguard config add' first.")
        return None

    if not config.profiles:
        print_info("No profiles configured. Run 'rosadguard config add' to create one.")
        return None

    names = sorted(config.profiles.keys())
    idx = select_menu(names, "  Select profile:")
    if idx is None:
        print_cancelled()
        return None
    return names[idx]


def _check_profile_exists(config_manager: ConfigManager, name: str) -> None:
    """Raise typer.Exit if profile already exists."""
    if config_manager.exists() and name in config_manager.get().profiles:
        print_error(f"Profile '{name}' already exists. Remove it first to replace it.")
        raise typer.Exit(1)


def _render_profile_panel(name: str, profile: ProfileConfig, is_default: bool = False) -> Panel:
    """Build a Rich Panel for a profile."""
    d = profile.deployment
    lines = []
    lines.append("[bold]── Connection ──[/bold]")
    lines.append(f"[bold]URL:[/bold]         {profile.base_url}")
    lines.append(f"[bold]User:[/bold]        {profile.auth.user}")
    lines.append(f"[bold]SSL verify:[/bold]  {'Yes' if profile.verify_ssl else 'No'}")
    lines.append(f"[bold]Timeout:[/bold]     {profile.timeout}s")

    lines.append("")
    lines.append("[bold]── Deployment ──[/bold]")
    lines.append(f"[bold]Container:[/bold]   {d.container_name}")
    lines.append(f"[bold]Image:[/bold]       {d.image}")
    lines.append(f"[bold]Registry:[/bold]    {d.registry_url}")
    lines.append(f"[bold]Interface:[/bold]   {d.interface.name} {d.interface.address or ''}")
    lines.append(f"[bold]Root dir:[/bold]    {d.root_dir}")
    lines.append(f"[bold]Mount:[/bold]       {d.mount_src} -> {d.mount_dst}")

    if is_default:
        lines.append("")
        lines.append("[green]Default profile[/green]")

    return Panel("\n".join(lines), title=f"Profile: {name}", border_style="blue")


# ── config add ───────────────────────────────────────────────────────────


@app.command("add")
def add_profile(
    name: str = typer.Argument(None, help="Profile name"),
    host: str = typer.Option(None, "--host", "-H", help="Router address (IP or hostname)"),
    user: str = typer.Option(None, "--user", "-u", help="RouterOS user"),
    password: str = typer.Option(None, "--password", "-P", help="RouterOS password"),
    port: int = typer.Option(None, "--port", help="REST port (defaults to 443, or 80 with --http)"),
    http: bool = typer.Option(False, "--http", help="Use plain HTTP (www service) instead of HTTPS"),
    verify_ssl: bool = typer.Option(False, "--verify-ssl", help="Verify the router's certificate"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Save without confirmation"),
) -> None:
    """Add a new router profile."""
    config_manager = ConfigManager()

    try:
        if name is None:
            name = prompt("Profile name", default="default")
        _check_profile_exists(config_manager, name)

        if host is None:
            while not (host := prompt("Router address (IP or hostname)")):
                print_error("Host is required")
        if user is None:
            user = prompt("User", default="admin")
        if password is None:
            password = prompt("Password", password=True)

        try:
            profile = ProfileConfig(
                host=host,
                port=port,
                use_https=not http,
                verify_ssl=verify_ssl,
                auth=AuthConfig(user=user, password=password),
            )
        except ValidationError as e:
            print_error(f"Invalid profile: {e}")
            raise typer.Exit(1)

        console.print()
        console.print(_render_profile_panel(name, profile))

        if not yes and not confirm("\nSave this profile?", default=True):
            print_cancelled()
            raise typer.Exit()

        is_first = not config_manager.exists() or not config_manager.get().profiles
        config_manager.add_profile(name, profile)

        if is_first:
            print_success(f"Profile '{name}' added (set as default)")
        else:
            print_success(f"Profile '{name}' added")

    except KeyboardInterrupt:
        console.print()
        print_cancelled()
    except RosAdguardError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config remove ────────────────────────────────────────────────────────


@app.command("remove")
def remove_profile(
    name: str = typer.Argument(None, help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove a profile."""
    config_manager = ConfigManager()

    try:
        if not name:
            name = _pick_profile(config_manager)
            if name is None:
                return

        if not yes and not confirm(f"Remove profile '{name}'?", default=False):
            print_cancelled()
            return

        config_manager.remove_profile(name)
        print_success(f"Profile '{name}' removed")

    except RosAdguardError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config default ───────────────────────────────────────────────────────


@app.command("default")
def set_default(
    name: str = typer.Argument(None, help="Profile name"),
) -> None:
    """Set the default profile."""
    config_manager = ConfigManager()

    try:
        if not name:
            name = _pick_profile(config_manager)
            if name is None:
                return

        config_manager.set_default_profile(name)
        print_success(f"Default profile set to '{name}'")

    except RosAdguardError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config list ──────────────────────────────────────────────────────────


@app.command("list")
def list_profiles() -> None:
    """List all profiles."""
    config_manager = ConfigManager()

    try:
        config = config_manager.get()
        if not config.profiles:
            print_info("No profiles configured. Run 'rosadguard config add' to create one.")
            return

        table = create_table(
            title="Configured Profiles",
            columns=[
                ("Profile", "cyan"),
                ("URL", ""),
                ("User", ""),
                ("Container", ""),
                ("Default", "green"),
            ],
        )

        for profile_name, profile in config.profiles.items():
            is_default = "✓" if profile_name == config.default_profile else ""
            table.add_row(
                profile_name,
                profile.base_url,
                profile.auth.user,
                profile.deployment.container_name,
                is_default,
            )

        console.print(table)

    except RosAdguardError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config show ──────────────────────────────────────────────────────────


@app.command("show")
def show_profile(
    name: str = typer.Argument(None, help="Profile name (default profile if omitted)"),
) -> None:
    """Show profile details."""
    config_manager = ConfigManager()

    try:
        config = config_manager.get()
        profile = config_manager.get_profile(name)
        shown = name or config.default_profile
        console.print(_render_profile_panel(shown, profile, shown == config.default_profile))

    except RosAdguardError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config test ──────────────────────────────────────────────────────────


@app.command("test")
@async_to_sync
async def test_profile(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to test"),
) -> None:
    """Test connection to the router."""
    config_manager = ConfigManager()

    try:
        profile_config = config_manager.get_profile(profile)
        print_info(f"Testing connection to {profile_config.base_url}...")

        async with RouterOSClient(profile_config) as client:
            version = await client.get_version()
            print_success(f"Connection successful to '{client.identity}'")
            print_info(f"RouterOS version: {version or 'unknown'}")

    except RosAdguardError as e:
        print_error(f"Connection failed: {e}")
        raise typer.Exit(1)
