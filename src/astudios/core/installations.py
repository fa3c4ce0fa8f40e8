"""Installed versions, the active-version link, and catalog reconciliation."""

import logging
import os
from pathlib import Path

from astudios.core.bundle import is_bundle_path, read_installation
from astudios.core.errors import AmbiguousMatch, AstudiosError, VersionNotFound
from astudios.models.installation import Installation, InstalledVersion
from astudios.models.release import Release, ReleaseCatalog


logger = logging.getLogger(__name__)


def release_matches(release: Release, version: InstalledVersion) -> bool:
    """Whether an installed version corresponds to a catalog release.

    Vendors do not guarantee which field lines up, so any one of these is
    enough: version == short version, build id == build version, or
    build id == build number. Reused numbers across channels can give
    false positives.
    """
    return (
        release.version == version.short_version
        or release.build_id == version.build_version
        or release.build_id == version.build_number
    )


def catalog_version(
    installation: Installation, catalog: ReleaseCatalog | None
) -> str | None:
    """Display version of the catalog release with the installation's build."""
    if catalog is None:
        return None
    release = catalog.find_by_build(installation.version.build_version)
    return release.version if release is not None else None


def identifier_matches(
    identifier: str, installation: Installation, catalog: ReleaseCatalog | None = None
) -> bool:
    """Whether a user-supplied identifier names this installation."""
    version = installation.version
    if identifier in (version.short_version, version.build_version, installation.identifier):
        return True

    detailed = catalog_version(installation, catalog)
    if detailed is not None and detailed == identifier:
        return True

    if version.short_version.startswith(identifier):
        return True
    return detailed is not None and detailed.startswith(identifier)


class InstallationManager:
    """Scans an applications directory and tracks the active-version link."""

    def __init__(self, applications_dir: Path, active_link: Path):
        self.applications_dir = Path(applications_dir)
        self.active_link = Path(active_link)

    def list_installed(self) -> list[Installation]:
        """All installations in the applications directory, newest first.

        Symlinks are skipped so the active link is not counted twice. A
        candidate whose metadata cannot be read is logged and skipped.
        """
        if not self.applications_dir.is_dir():
            logger.debug("Applications directory %s does not exist", self.applications_dir)
            return []

        installations = []
        for entry in sorted(self.applications_dir.iterdir()):
            if entry.is_symlink() or not is_bundle_path(entry):
                continue
            try:
                installation = read_installation(entry)
            except (AstudiosError, OSError) as e:
                logger.debug("Skipping %s: %s", entry, e)
                continue
            if installation is not None:
                installations.append(installation)

        installations.sort(reverse=True)
        return installations

    def active_target(self) -> Path | None:
        """Where the active link points, or None if it is not a symlink."""
        if not self.active_link.is_symlink():
            return None
        target = Path(os.readlink(self.active_link))
        if not target.is_absolute():
            target = self.active_link.parent / target
        return target

    def get_active(self) -> Installation | None:
        """The installation the active link resolves to.

        None when the link is absent, broken, or its target is not a
        readable installation.
        """
        target = self.active_target()
        if target is None or not target.exists():
            return None
        try:
            return read_installation(target)
        except (AstudiosError, OSError) as e:
            logger.debug("Active link target %s is unreadable: %s", target, e)
            return None

    def is_installed(self, release: Release) -> bool:
        return any(
            release_matches(release, item.version) for item in self.list_installed()
        )

    def is_active(self, release: Release) -> bool:
        active = self.get_active()
        return active is not None and release_matches(release, active.version)

    def is_active_installation(self, installation: Installation) -> bool:
        target = self.active_target()
        if target is None:
            return False
        try:
            return target.resolve() == installation.path.resolve()
        except OSError:
            return False

    def resolve(self, identifier: str, catalog: ReleaseCatalog | None = None) -> Installation:
        """Find the single installation named by ``identifier``.

        Raises VersionNotFound when nothing matches and AmbiguousMatch,
        listing every candidate, when more than one does.
        """
        identifier = identifier.strip()
        if not identifier:
            raise VersionNotFound(identifier, hint="astudios installed")

        matches = [
            installation
            for installation in self.list_installed()
            if identifier_matches(identifier, installation, catalog)
        ]
        if not matches:
            raise VersionNotFound(identifier, hint="astudios installed")
        if len(matches) > 1:
            raise AmbiguousMatch(identifier, matches)
        return matches[0]


def get_manager(config) -> InstallationManager:
    """InstallationManager for the configured applications directory."""
    return InstallationManager(config.applications_dir, config.active_link)
