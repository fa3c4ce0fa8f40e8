"""Info command implementation."""

import click
from rich.console import Console
from rich.panel import Panel

from astudios.core.cache import get_loader
from astudios.core.config import get_config
from astudios.core.errors import AstudiosError
from astudios.core.installations import get_manager
from astudios.core.matcher import VersionMatcher
from astudios.core.platform import PLATFORM_LABELS

console = Console()


@click.command()
@click.argument("query")
def info(query: str):
    """Show which release a version query resolves to.

    QUERY can be a version ("2024.3.2"), part of a release name
    ("Meerkat Feature Drop"), a build number, or "<version> <channel>".
    """
    config = get_config()

    try:
        catalog = get_loader(config).load()
        release = VersionMatcher(catalog).find(query)
    except AstudiosError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    manager = get_manager(config)
    if manager.is_active(release):
        status = "[green]installed, active[/green]"
    elif manager.is_installed(release):
        status = "installed"
    else:
        status = "not installed"

    lines = [
        f"[bold]Name:[/bold] {release.display_name}",
        f"[bold]Version:[/bold] {release.version}",
        f"[bold]Channel:[/bold] {release.channel}",
        f"[bold]Build:[/bold] {release.build_id}",
        f"[bold]Date:[/bold] {release.release_date}",
        f"[bold]Status:[/bold] {status}",
    ]
    if release.platform_build:
        lines.append(f"[bold]Platform build:[/bold] {release.platform_build}")

    console.print(Panel("\n".join(lines), title=f"[green]{release.title}[/green]"))

    if release.downloads:
        console.print("\n[bold]Downloads:[/bold]")
        for download in release.downloads:
            label = next(
                (label for marker, label in PLATFORM_LABELS.items() if marker in download.url),
                "Other",
            )
            console.print(f"  • {label}: [cyan]{download.filename}[/cyan] ({download.human_size})")
