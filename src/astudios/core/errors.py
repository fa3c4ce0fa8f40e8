"""Error types shared across astudios."""


class AstudiosError(Exception):
    """Base class for all astudios errors."""

    pass


class ParseError(AstudiosError):
    """Malformed release feed, cache file or bundle metadata."""

    pass


class ConfigError(AstudiosError):
    """Invalid settings file."""

    pass


class FeedError(AstudiosError):
    """The release feed could not be fetched."""

    pass


class BundleReadError(AstudiosError):
    """A bundle metadata file could not be read."""

    pass


class DownloadError(AstudiosError):
    """Error during download."""

    pass


class ChecksumError(AstudiosError):
    """Checksum verification failed."""

    pass


class InstallationError(AstudiosError):
    """An OS tool failed while installing, switching or removing a bundle."""

    pass


class VersionNotFound(AstudiosError):
    """No release or installation matches a query."""

    def __init__(self, query: str, hint: str = "astudios list"):
        self.query = query
        super().__init__(
            f"Version '{query}' not found. Use '{hint}' to see available versions."
        )


class AmbiguousMatch(AstudiosError):
    """More than one installation matches an identifier."""

    def __init__(self, identifier: str, candidates: list):
        self.identifier = identifier
        self.candidates = list(candidates)
        lines = [f"'{identifier}' matches {len(self.candidates)} installations:"]
        for candidate in self.candidates:
            version = candidate.version
            lines.append(
                f"  - {candidate.display_name} "
                f"(version {version.short_version}, build {version.build_version}) "
                f"at {candidate.path}"
            )
        lines.append("Use a more specific version or the full build number.")
        super().__init__("\n".join(lines))
