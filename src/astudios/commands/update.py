"""Update command implementation."""

import click
from rich.console import Console

from astudios.commands.list_cmd import format_channel
from astudios.core.cache import get_loader
from astudios.core.config import get_config
from astudios.core.errors import AstudiosError

console = Console()


@click.command()
def update():
    """Refresh the cached list of Android Studio releases."""
    config = get_config()
    config.ensure_dirs()

    console.print("[blue]Updating[/blue] Android Studio version list...")

    try:
        catalog = get_loader(config).load(refresh=True)
    except AstudiosError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[green]✓[/green] Found {len(catalog)} available versions")

    latest = catalog.releases[:5]
    if latest:
        console.print("\n[bold]Latest versions:[/bold]")
        for release in latest:
            console.print(f"  • {release.version} - {release.build_id} ({format_channel(release)})")
