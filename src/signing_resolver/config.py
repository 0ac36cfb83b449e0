"""
Configuration settings for signing-resolver.

Settings come from environment variables, optionally seeded from a ``.env``
file. Variables already present in the environment win over the file.

Environment Variables:
    SIGNING_PROPERTIES_FILE: Properties file with keystore.* keys
        (default: local.properties, relative to the project dir)
    SIGNING_PROJECT_DIR: Directory relative keystore paths are resolved
        against (default: current directory)
    SIGNING_USER_HOME: Home directory holding .android/debug.keystore
        (default: the current user's home)
    SIGNING_MINIFY_ENABLED: Release code shrinking (default: false)
    SIGNING_SHRINK_RESOURCES: Release resource shrinking (default: false)
    LOG_LEVEL: Logging level (default: INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from signing_resolver.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PROPERTIES_FILE = "local.properties"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got {raw!r}")


@dataclass
class SigningSettings:
    """
    Settings for resolving release signing credentials.

    Example:
        >>> settings = SigningSettings.from_env()
        >>> settings.configure_logging()
        >>> plan = plan_signing(settings)
    """
    properties_file: str | None = DEFAULT_PROPERTIES_FILE
    project_dir: Path = Path(".")
    user_home: Path | None = None
    minify_enabled: bool = False
    shrink_resources: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        self.project_dir = Path(self.project_dir)
        if self.user_home is not None:
            self.user_home = Path(self.user_home)
        if not isinstance(getattr(logging, self.log_level.upper(), None), int):
            raise ConfigError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, dotenv_path: str | os.PathLike | None = None) -> "SigningSettings":
        """
        Load settings from environment variables.

        Args:
            dotenv_path: ``.env`` file to load first. When omitted,
                python-dotenv searches upward from the working
                directory.
        """
        load_dotenv(dotenv_path if dotenv_path is not None else find_dotenv(usecwd=True))
        user_home = os.getenv("SIGNING_USER_HOME")
        settings = cls(
            properties_file=os.getenv("SIGNING_PROPERTIES_FILE", DEFAULT_PROPERTIES_FILE) or None,
            project_dir=Path(os.getenv("SIGNING_PROJECT_DIR", ".")).expanduser(),
            user_home=Path(user_home).expanduser() if user_home else None,
            minify_enabled=_env_bool("SIGNING_MINIFY_ENABLED"),
            shrink_resources=_env_bool("SIGNING_SHRINK_RESOURCES"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
        logger.debug(
            "Signing settings: properties=%s project_dir=%s",
            settings.properties_path,
            settings.project_dir,
        )
        return settings

    @property
    def properties_path(self) -> Path | None:
        """The properties file, anchored at ``project_dir`` when relative."""
        if not self.properties_file:
            return None
        path = Path(self.properties_file).expanduser()
        if not path.is_absolute():
            path = self.project_dir / path
        return path

    def configure_logging(self):
        """Configure logging based on settings."""
        logging.basicConfig(
            level=getattr(logging, self.log_level.upper(), logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        )


def load_settings_from_env() -> SigningSettings:
    """
    Convenience function to load settings from the environment.

    Returns:
        SigningSettings loaded from environment variables
    """
    return SigningSettings.from_env()
