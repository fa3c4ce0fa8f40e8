"""Installed command implementation."""

import click
from rich.console import Console
from rich.table import Table

from astudios.core.cache import load_catalog_or_none
from astudios.core.config import get_config
from astudios.core.installations import catalog_version, get_manager

console = Console()


@click.command()
def installed():
    """List installed Android Studio versions, newest first."""
    config = get_config()
    manager = get_manager(config)
    installations = manager.list_installed()

    if not installations:
        console.print("No Android Studio versions installed")
        console.print("\nInstall one with: astudios install <version>")
        raise SystemExit(0)

    catalog = load_catalog_or_none(config)

    table = Table(show_header=True, header_style="bold")
    table.add_column("")
    table.add_column("Name")
    table.add_column("Version")
    table.add_column("Build")
    table.add_column("Channel")
    table.add_column("Path")

    for installation in installations:
        marker = "[green]✓[/green]" if manager.is_active_installation(installation) else ""
        version = catalog_version(installation, catalog) or installation.version.short_version
        table.add_row(
            marker,
            installation.version.product_name,
            version,
            installation.version.build_version,
            installation.channel_hint,
            str(installation.path),
        )

    console.print(table)
