"""Configuration management for sitedeploy.

Values are resolved from environment variables first and then from the
config file at ``~/.config/sitedeploy/config``. CLI options override both.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, set_key, unset_key

logger = logging.getLogger(__name__)

ENV_PREFIX = "SITEDEPLOY_"

# Config file keys and their defaults
DEFAULTS: dict[str, Optional[str]] = {
    "BUCKET": None,
    "REGION": None,
    "DISTRIBUTION_ID": None,
    "CLOUDFRONT_REGION": None,
    "BUILD_DIR": "build",
    "SYNC_COMMAND": "yarn synchronize",
}


class Config:
    """Resolves sitedeploy settings from the environment and config file."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_dir: Directory holding the config file
                (defaults to ~/.config/sitedeploy)
        """
        self.config_dir = config_dir or Path.home() / ".config" / "sitedeploy"
        self.config_file = self.config_dir / "config"

    def get_config_path(self) -> Path:
        """Get the path to the configuration file."""
        return self.config_file

    def _read_file(self) -> dict[str, Optional[str]]:
        if not self.config_file.exists():
            return {}
        return dict(dotenv_values(self.config_file))

    def _load_file(self) -> dict[str, str]:
        """Read the config file, keyed by setting name without prefix."""
        values: dict[str, str] = {}
        for key, value in self._read_file().items():
            name = key.upper()
            if name.startswith(ENV_PREFIX):
                name = name[len(ENV_PREFIX) :]
            if value:
                values[name] = value
        return values

    def get(self, name: str) -> Optional[str]:
        """Resolve a single setting.

        Args:
            name: Setting name without prefix (e.g. "BUCKET")

        Returns:
            The resolved value, or the default if unset
        """
        name = name.upper()
        env_value = os.environ.get(ENV_PREFIX + name)
        if env_value:
            return env_value

        file_value = self._load_file().get(name)
        if file_value:
            return file_value

        return DEFAULTS.get(name)

    @property
    def bucket(self) -> Optional[str]:
        return self.get("BUCKET")

    @property
    def region(self) -> Optional[str]:
        return self.get("REGION")

    @property
    def distribution_id(self) -> Optional[str]:
        return self.get("DISTRIBUTION_ID")

    @property
    def cloudfront_region(self) -> Optional[str]:
        return self.get("CLOUDFRONT_REGION")

    @property
    def build_dir(self) -> str:
        return self.get("BUILD_DIR") or "build"

    @property
    def sync_command(self) -> str:
        return self.get("SYNC_COMMAND") or "yarn synchronize"

    def is_configured(self) -> bool:
        """Check whether a target bucket is configured."""
        return self.bucket is not None

    def save(self, values: dict[str, Optional[str]]) -> None:
        """Write settings to the config file, keeping existing entries.

        Args:
            values: Mapping of setting name to value; None removes the entry
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        if not self.config_file.exists():
            self.config_file.write_text(
                "# sitedeploy configuration\n", encoding="utf-8"
            )

        existing = self._read_file()
        for name, value in values.items():
            key = ENV_PREFIX + name.upper()
            if value is not None:
                set_key(self.config_file, key, value)
            elif key in existing:
                unset_key(self.config_file, key)

        # Owner read/write only
        self.config_file.chmod(0o600)
        logger.debug("Saved configuration to %s", self.config_file)


config = Config()
