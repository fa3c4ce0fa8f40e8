"""Configuration and path management for astudios."""

from pathlib import Path
from dataclasses import dataclass
import os

import yaml

from astudios import __version__
from astudios.core.errors import ConfigError


FEED_URL = (
    "https://teamcity.jetbrains.com/guestAuth/repository/download/"
    "AndroidStudioReleasesList/.lastSuccessful/android-studio-releases-list.xml"
)
ACTIVE_LINK_NAME = "Android Studio.app"
CACHE_TTL_SECONDS = 60 * 60 * 24
NETWORK_TIMEOUT_SECONDS = 30.0
DOWNLOAD_TIMEOUT_SECONDS = 300.0


@dataclass
class AstudiosConfig:
    """Configuration for astudios."""

    base_dir: Path
    cache_dir: Path
    versions_dir: Path
    applications_dir: Path
    active_link_name: str = ACTIVE_LINK_NAME
    feed_url: str = FEED_URL
    cache_ttl: int = CACHE_TTL_SECONDS
    network_timeout: float = NETWORK_TIMEOUT_SECONDS
    download_timeout: float = DOWNLOAD_TIMEOUT_SECONDS

    @property
    def cache_path(self) -> Path:
        return self.cache_dir / "releases.json"

    @property
    def settings_path(self) -> Path:
        return self.base_dir / "config.yaml"

    @property
    def active_link(self) -> Path:
        return self.applications_dir / self.active_link_name

    @property
    def user_agent(self) -> str:
        return f"astudios/{__version__}"

    @classmethod
    def default(cls) -> "AstudiosConfig":
        """Create config from defaults, config.yaml, then environment."""
        base = Path(os.environ.get("ASTUDIOS_HOME", Path.home() / ".astudios"))
        config = cls(
            base_dir=base,
            cache_dir=base / "cache",
            versions_dir=base / "versions",
            applications_dir=Path("/Applications"),
        )
        config.apply_settings_file()

        # Environment wins over config.yaml
        if "ASTUDIOS_APPLICATIONS_DIR" in os.environ:
            config.applications_dir = Path(os.environ["ASTUDIOS_APPLICATIONS_DIR"])
        return config

    def apply_settings_file(self) -> None:
        """Override fields from the optional YAML settings file."""
        path = self.settings_path
        if not path.exists():
            return

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping of settings")

        try:
            if "applications_dir" in data:
                self.applications_dir = Path(data["applications_dir"]).expanduser()
            if "feed_url" in data:
                self.feed_url = str(data["feed_url"])
            if "cache_ttl_hours" in data:
                self.cache_ttl = int(float(data["cache_ttl_hours"]) * 3600)
            if "network_timeout" in data:
                self.network_timeout = float(data["network_timeout"])
            if "download_timeout" in data:
                self.download_timeout = float(data["download_timeout"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value in {path}: {e}")

    def ensure_dirs(self) -> None:
        """Ensure all required directories exist."""
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.versions_dir.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: AstudiosConfig | None = None


def get_config() -> AstudiosConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AstudiosConfig.default()
    return _config


def set_config(config: AstudiosConfig | None) -> None:
    """Set a custom configuration (useful for testing)."""
    global _config
    _config = config
