"""List command implementation."""

import click
from rich.console import Console
from rich.table import Table

from astudios.core.cache import get_loader
from astudios.core.config import get_config
from astudios.core.errors import AstudiosError
from astudios.core.installations import get_manager, release_matches
from astudios.core.platform import PLATFORM_LABELS
from astudios.models.release import Release

console = Console()

CHANNEL_STYLES = {
    "Release": "green",
    "Beta": "yellow",
    "Canary": "red",
    "RC": "blue",
    "Patch": "cyan",
}


def format_channel(release: Release) -> str:
    style = CHANNEL_STYLES.get(release.channel)
    return f"[{style}]{release.channel}[/{style}]" if style else release.channel


def format_platforms(release: Release) -> str:
    available = []
    for marker, label in PLATFORM_LABELS.items():
        download = release.get_download(marker)
        if download is not None:
            available.append(f"{label} ({download.human_size})")
    return ", ".join(available)


@click.command("list")
@click.option("--release", "release_only", is_flag=True, help="Show only stable releases")
@click.option("--beta", "beta_only", is_flag=True, help="Show only beta releases")
@click.option("--canary", "canary_only", is_flag=True, help="Show only canary releases")
@click.option("--limit", "-n", type=int, default=None, help="Number of releases to show")
def list_releases(release_only: bool, beta_only: bool, canary_only: bool, limit: int | None):
    """List available Android Studio versions.

    Channel flags combine: each one further narrows the list.
    """
    config = get_config()

    try:
        with console.status("Loading version list..."):
            catalog = get_loader(config).load()
    except AstudiosError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    items = catalog.filter_by_channel(release_only, beta_only, canary_only)
    if limit is not None:
        items = items[:limit]

    if not items:
        console.print("No versions match the selected channels")
        raise SystemExit(0)

    manager = get_manager(config)
    installed = manager.list_installed()
    active = manager.get_active()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Version")
    table.add_column("Channel")
    table.add_column("Name")
    table.add_column("Build")
    table.add_column("Date")
    table.add_column("Downloads")
    table.add_column("Status")

    # Oldest first so the newest release ends up next to the prompt
    for item in reversed(items):
        if active is not None and release_matches(item, active.version):
            status = "[green]✓ active[/green]"
        elif any(release_matches(item, i.version) for i in installed):
            status = "installed"
        else:
            status = ""
        table.add_row(
            item.version,
            format_channel(item),
            item.display_name,
            item.build_id,
            item.release_date,
            format_platforms(item),
            status,
        )

    console.print(table)
