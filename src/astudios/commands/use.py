"""Use command implementation."""

import click
from rich.console import Console

from astudios.core.cache import load_catalog_or_none
from astudios.core.config import get_config
from astudios.core.errors import AstudiosError
from astudios.core.installations import get_manager
from astudios.core.installer import switch_active

console = Console()


@click.command()
@click.argument("identifier")
def use(identifier: str):
    """Switch the active Android Studio version.

    IDENTIFIER is matched against installed versions the same way as for
    'uninstall'.
    """
    config = get_config()
    manager = get_manager(config)
    catalog = load_catalog_or_none(config)

    try:
        installation = manager.resolve(identifier, catalog)
        switch_active(installation.path, config.active_link)
    except AstudiosError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(
        f"[green]✓[/green] Now using [bold]{installation.display_name}[/bold] "
        f"({installation.version.build_version})"
    )
    console.print(f"  Link: {config.active_link}")
    console.print(f"  Points to: {installation.path}")
