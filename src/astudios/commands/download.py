"""Download command implementation."""

from pathlib import Path

import click
from rich.console import Console

from astudios.core.cache import get_loader
from astudios.core.checksum import verify_checksum
from astudios.core.config import get_config
from astudios.core.downloader import download_file
from astudios.core.errors import AstudiosError, ChecksumError
from astudios.core.matcher import select_release
from astudios.core.platform import download_for_current_platform, get_platform_info

console = Console()


@click.command()
@click.argument("query", required=False)
@click.option("--latest", is_flag=True, help="Download the latest stable release")
@click.option("--latest-prerelease", is_flag=True, help="Download the latest beta or canary")
@click.option(
    "--directory",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to save to (default: ~/Downloads)",
)
def download(query: str | None, latest: bool, latest_prerelease: bool, directory: Path | None):
    """Download an Android Studio installer without installing it."""
    config = get_config()

    try:
        catalog = get_loader(config).load()
        release = select_release(catalog, query, latest, latest_prerelease)
    except (ValueError, AstudiosError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    platform_info = get_platform_info()
    artifact = download_for_current_platform(release, platform_info)
    if artifact is None:
        console.print(
            f"[red]Error:[/red] No {platform_info.os} download available for {release.title}"
        )
        raise SystemExit(1)

    dest = directory or Path.home() / "Downloads"
    path = dest / artifact.filename
    if path.exists() and path.stat().st_size > 0:
        console.print(f"[yellow]File already exists:[/yellow] {path}")
        raise SystemExit(0)

    console.print(f"[blue]Downloading[/blue] {release.title} ({release.version})...")

    try:
        path = download_file(
            artifact.url,
            dest=dest,
            filename=artifact.filename,
            timeout=config.download_timeout,
            user_agent=config.user_agent,
            description=release.display_name,
        )
        try:
            verified = verify_checksum(path, artifact.checksum)
        except ChecksumError:
            # Don't leave a bad file for the "already exists" check to accept
            path.unlink(missing_ok=True)
            raise
        if verified:
            console.print("  [green]✓[/green] Checksum verified")
    except AstudiosError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"\n[green]✓[/green] Downloaded [bold]{release.display_name}[/bold]")
    console.print(f"  Location: {path}")
