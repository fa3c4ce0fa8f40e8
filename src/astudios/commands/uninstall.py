"""Uninstall command implementation."""

import click
from rich.console import Console

from astudios.core.cache import load_catalog_or_none
from astudios.core.config import get_config
from astudios.core.errors import AstudiosError
from astudios.core.installations import catalog_version, get_manager
from astudios.core.installer import remove_active_link, remove_bundle

console = Console()


@click.command()
@click.argument("identifier")
def uninstall(identifier: str):
    """Uninstall an Android Studio version.

    IDENTIFIER is a version, short version prefix ("2025.1") or full build
    number ("AI-251.26094.121.2513.14007798") of an installed version.
    """
    config = get_config()
    manager = get_manager(config)
    catalog = load_catalog_or_none(config)

    try:
        installation = manager.resolve(identifier, catalog)
    except AstudiosError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[blue]Uninstalling[/blue] {installation.display_name}...")

    try:
        if manager.is_active_installation(installation):
            remove_active_link(config.active_link)
            console.print("  Removed active version link")

        remove_bundle(installation.path)
        console.print(f"  Removed {installation.path}")

        version = catalog_version(installation, catalog) or installation.version.short_version
        staging_dir = config.versions_dir / version
        if staging_dir.exists():
            remove_bundle(staging_dir)
            console.print("  Removed downloaded files")
    except AstudiosError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(
        f"\n[green]✓[/green] Successfully uninstalled [bold]{installation.display_name}[/bold]"
    )
