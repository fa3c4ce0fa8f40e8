"""Which command implementation."""

import click
from rich.console import Console

from astudios.core.config import get_config
from astudios.core.installations import get_manager

console = Console()


@click.command()
def which():
    """Show the active Android Studio version."""
    config = get_config()
    manager = get_manager(config)
    link = config.active_link

    active = manager.get_active()
    if active is not None:
        console.print(
            f"[green]✓[/green] Currently using [bold]{active.display_name}[/bold] "
            f"({active.version.build_version})"
        )
        console.print(f"  Link: {link}")
        console.print(f"  Points to: {active.path}")
        return

    target = manager.active_target()
    if target is not None:
        console.print(f"[yellow]{link} points to {target}, which is not a valid installation[/yellow]")
    elif link.exists():
        console.print(f"[blue]{link} is a regular bundle, not a managed link[/blue]")
    else:
        console.print("[yellow]No active Android Studio version[/yellow]")
        console.print("\nInstall one with: astudios install <version>")
    raise SystemExit(1)
