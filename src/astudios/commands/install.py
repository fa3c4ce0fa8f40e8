"""Install command implementation."""

from pathlib import Path

import click
from rich.console import Console

from astudios.core.cache import get_loader
from astudios.core.checksum import verify_checksum
from astudios.core.config import AstudiosConfig, get_config
from astudios.core.downloader import download_file
from astudios.core.errors import AstudiosError
from astudios.core.installations import get_manager
from astudios.core.installer import (
    install_archive,
    remove_bundle,
    switch_active,
    verify_code_signature,
)
from astudios.core.matcher import select_release
from astudios.core.platform import download_for_current_platform, get_platform_info
from astudios.models.release import Release

console = Console()


def install_release(
    release: Release,
    config: AstudiosConfig,
    directory: Path | None = None,
) -> Path:
    """Download, verify and install ``release``. Returns the installed bundle path."""
    platform_info = get_platform_info()
    artifact = download_for_current_platform(release, platform_info)
    if artifact is None:
        raise AstudiosError(f"No {platform_info.os} download available for {release.title}")

    staging_dir = config.versions_dir / release.version
    target_dir = directory or config.applications_dir

    console.print("  (1/5) Downloading")
    archive = download_file(
        artifact.url,
        dest=staging_dir,
        filename=artifact.filename,
        timeout=config.download_timeout,
        user_agent=config.user_agent,
        description=release.display_name,
    )

    try:
        if verify_checksum(archive, artifact.checksum):
            console.print("  [green]✓[/green] Checksum verified")

        console.print(f"  (2/5) Installing to {target_dir}")
        app_path = install_archive(archive, target_dir, release.bundle_name)

        console.print("  (3/5) Checking code signature")
        if not verify_code_signature(app_path):
            console.print("  [yellow]Code signing verification failed, continuing[/yellow]")

        if directory is None:
            console.print("  (4/5) Switching active version")
            switch_active(app_path, config.active_link)
        else:
            console.print("  (4/5) Custom directory, leaving active version unchanged")
    finally:
        console.print("  (5/5) Removing downloaded archive")
        remove_bundle(staging_dir)

    return app_path


@click.command()
@click.argument("query", required=False)
@click.option("--latest", is_flag=True, help="Install the latest stable release")
@click.option("--latest-prerelease", is_flag=True, help="Install the latest beta or canary")
@click.option(
    "--directory",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    help="Install into this directory instead of the applications directory",
)
@click.option("--force", "-f", is_flag=True, help="Reinstall if already installed")
def install(
    query: str | None,
    latest: bool,
    latest_prerelease: bool,
    directory: Path | None,
    force: bool,
):
    """Install an Android Studio version side by side with others.

    QUERY can be a version ("2024.3.2.14"), part of a release name
    ("Meerkat Feature Drop"), a build number, or "<version> <channel>"
    ("2023.3.1 Canary").
    """
    config = get_config()
    config.ensure_dirs()

    try:
        catalog = get_loader(config).load()
        release = select_release(catalog, query, latest, latest_prerelease)
    except (ValueError, AstudiosError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    manager = get_manager(config)
    if manager.is_installed(release) and not force:
        console.print(
            f"[yellow]{release.title}[/yellow] is already installed. "
            f"Use --force to reinstall."
        )
        raise SystemExit(0)

    console.print(f"[blue]Installing[/blue] {release.title} ({release.version})...")

    try:
        app_path = install_release(release, config, directory)
    except AstudiosError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(
        f"\n[green]✓[/green] Successfully installed [bold]{release.display_name}[/bold]"
    )
    console.print(f"  Location: {app_path}")
