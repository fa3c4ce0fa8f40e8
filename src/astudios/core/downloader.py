"""Download functionality with progress reporting."""

import logging
from pathlib import Path

import httpx
from rich.progress import (
    Progress,
    BarColumn,
    DownloadColumn,
    TransferSpeedColumn,
    TimeRemainingColumn,
)

from astudios.core.errors import DownloadError


logger = logging.getLogger(__name__)


def download_file(
    url: str,
    dest: Path,
    filename: str | None = None,
    show_progress: bool = True,
    timeout: float = 300.0,
    user_agent: str | None = None,
    description: str | None = None,
) -> Path:
    """Download a file from URL.

    Args:
        url: URL to download from
        dest: Destination directory
        filename: Filename to save as (defaults to URL filename)
        show_progress: Whether to show progress bar
        timeout: Network timeout in seconds
        user_agent: User-Agent header to send
        description: Progress bar label (defaults to the filename)

    Returns:
        Path to downloaded file
    """
    dest.mkdir(parents=True, exist_ok=True)

    if filename is None:
        filename = url.split("/")[-1]

    file_path = dest / filename
    headers = {"User-Agent": user_agent} if user_agent else None
    logger.info("Downloading %s to %s", url, file_path)

    try:
        with httpx.stream(
            "GET", url, headers=headers, follow_redirects=True, timeout=timeout
        ) as response:
            if response.status_code != 200:
                raise DownloadError(
                    f"Failed to download {url}: HTTP {response.status_code}"
                )

            total = int(response.headers.get("content-length", 0))

            if show_progress and total > 0:
                with Progress(
                    "[progress.description]{task.description}",
                    BarColumn(),
                    DownloadColumn(),
                    TransferSpeedColumn(),
                    TimeRemainingColumn(),
                ) as progress:
                    task = progress.add_task(
                        f"Downloading {description or filename}", total=total
                    )

                    with open(file_path, "wb") as f:
                        for chunk in response.iter_bytes(chunk_size=65536):
                            f.write(chunk)
                            progress.update(task, advance=len(chunk))
            else:
                with open(file_path, "wb") as f:
                    for chunk in response.iter_bytes(chunk_size=65536):
                        f.write(chunk)
    except httpx.HTTPError as e:
        file_path.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}")

    return file_path
