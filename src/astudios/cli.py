"""CLI entry point for astudios."""

import os

import click
from rich.console import Console

from astudios import __version__
from astudios.commands import (
    download,
    info,
    install,
    installed,
    list_cmd,
    uninstall,
    update,
    use,
    which,
)
from astudios.core.config import get_config
from astudios.core.errors import ConfigError
from astudios.core.logging_config import setup_logging

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="astudios")
@click.option("--verbose", "-v", is_flag=True, help="Show progress logging.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def main(verbose: bool, debug: bool):
    """astudios - manage side-by-side Android Studio installations.

    List releases from the official feed, install them next to each other
    and switch which one is active.

    Examples:

        astudios list --release --limit 5

        astudios install "2024.3.2"

        astudios install "2023.3.1 Canary"

        astudios use 2025.1
    """
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = os.environ.get("ASTUDIOS_LOG_LEVEL", "WARNING")
    setup_logging(level=level, quiet_third_party=not debug)

    # Commands read the cached global config, so a bad config.yaml fails here once
    try:
        get_config()
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)


# Register commands
main.add_command(list_cmd.list_releases)
main.add_command(info.info)
main.add_command(download.download)
main.add_command(install.install)
main.add_command(uninstall.uninstall)
main.add_command(use.use)
main.add_command(installed.installed)
main.add_command(which.which)
main.add_command(update.update)


if __name__ == "__main__":
    main()
