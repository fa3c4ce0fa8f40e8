"""OS tool wrappers: mount, copy, verify and link app bundles."""

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from astudios.core.errors import InstallationError
from astudios.core.platform import get_platform_info


logger = logging.getLogger(__name__)


def run_tool(args: list[str]) -> subprocess.CompletedProcess:
    """Run an OS tool, raising InstallationError if it cannot be started."""
    logger.debug("Running %s", " ".join(args))
    try:
        return subprocess.run(args, capture_output=True, text=True)
    except OSError as e:
        raise InstallationError(f"Failed to run {args[0]}: {e}")


def _check(result: subprocess.CompletedProcess, action: str) -> None:
    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip()
        detail = detail or f"exit status {result.returncode}"
        raise InstallationError(f"Failed to {action}: {detail}")


def find_app_bundle(directory: Path) -> Path | None:
    """First .app bundle directly inside ``directory`` or, failing that, below it."""
    for entry in sorted(directory.iterdir()):
        if entry.suffix == ".app" and entry.is_dir():
            return entry
    for entry in sorted(directory.rglob("*.app")):
        if entry.is_dir():
            return entry
    return None


def copy_bundle(source: Path, destination: Path) -> None:
    """Copy an app bundle with ditto, replacing any existing copy."""
    if destination.exists():
        logger.info("Removing existing %s", destination)
        shutil.rmtree(destination)
    _check(run_tool(["ditto", str(source), str(destination)]), f"copy {source.name}")


def install_from_dmg(archive: Path, destination: Path) -> Path:
    """Mount a disk image, copy its app bundle to ``destination``, detach."""
    with tempfile.TemporaryDirectory(prefix="astudios_mount_") as mount_point:
        _check(
            run_tool([
                "hdiutil", "attach", str(archive),
                "-mountpoint", mount_point, "-nobrowse", "-quiet",
            ]),
            f"mount {archive.name}",
        )
        try:
            bundle = find_app_bundle(Path(mount_point))
            if bundle is None:
                raise InstallationError(f"No .app bundle found in {archive.name}")
            copy_bundle(bundle, destination)
        finally:
            run_tool(["hdiutil", "detach", mount_point, "-quiet"])
    return destination


def install_from_zip(archive: Path, destination: Path) -> Path:
    """Extract a zip with ditto and copy its app bundle to ``destination``."""
    with tempfile.TemporaryDirectory(prefix="astudios_extract_") as extract_dir:
        _check(
            run_tool(["ditto", "-x", "-k", str(archive), extract_dir]),
            f"extract {archive.name}",
        )
        bundle = find_app_bundle(Path(extract_dir))
        if bundle is None:
            raise InstallationError(f"No .app bundle found in {archive.name}")
        copy_bundle(bundle, destination)
    return destination


def install_archive(archive: Path, applications_dir: Path, bundle_name: str) -> Path:
    """Install the app bundle inside ``archive`` as ``applications_dir/bundle_name``."""
    if not get_platform_info().is_macos:
        raise InstallationError("Installing Android Studio bundles requires macOS")

    applications_dir.mkdir(parents=True, exist_ok=True)
    destination = applications_dir / bundle_name
    name = archive.name.lower()

    if name.endswith(".dmg"):
        return install_from_dmg(archive, destination)
    if name.endswith(".zip"):
        return install_from_zip(archive, destination)
    raise InstallationError(f"Don't know how to install {archive.name}")


def verify_code_signature(app: Path) -> bool:
    """Run ``codesign -v``; True when the signature is valid."""
    result = run_tool(["codesign", "-v", str(app)])
    if result.returncode != 0:
        logger.warning("Code signing verification failed for %s", app)
        return False
    return True


def switch_active(target: Path, link: Path) -> None:
    """Point the active-version link at ``target``."""
    if not target.exists():
        raise InstallationError(f"{target} does not exist")

    remove_active_link(link)
    link.parent.mkdir(parents=True, exist_ok=True)
    try:
        link.symlink_to(target, target_is_directory=True)
    except OSError as e:
        raise InstallationError(f"Failed to create {link}: {e}")
    logger.info("Linked %s -> %s", link, target)


def remove_active_link(link: Path) -> None:
    """Remove the active link, or a real bundle sitting in its place."""
    try:
        if link.is_symlink():
            link.unlink()
        elif link.exists():
            shutil.rmtree(link)
    except OSError as e:
        raise InstallationError(f"Failed to remove {link}: {e}")


def remove_bundle(path: Path) -> None:
    """Delete an installed bundle or staging directory."""
    if not path.exists():
        return
    try:
        shutil.rmtree(path)
    except OSError as e:
        raise InstallationError(f"Failed to remove {path}: {e}")
    logger.info("Removed %s", path)
