"""Configuration management using TOML."""

import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from starnamer.core.exceptions import ConfigError

DEFAULT_SETTINGS: dict[str, Any] = {
    "catalog_url": "",
    "catalog_path": "",
    "catalog_already_decompressed": False,
    "catalog_fetch_timeout": 30.0,
    "background_load_delay": 2.0,
    "generator_url": "",
    "generator_api_key": "",
    "generator_timeout": 30.0,
    "proposal_cache_ttl_hours": 24.0,
    "suggestion_count": 5,
}


class ConfigManager:
    """Manages user configuration stored in ~/.starnamer/."""

    DEFAULT_DIR = Path.home() / ".starnamer"
    CONFIG_FILENAME = "config.toml"

    def __init__(self, config_dir: Path | None = None):
        """Initialize config manager.

        Args:
            config_dir: Custom config directory (default: ~/.starnamer/)
        """
        self.config_dir = config_dir or self.DEFAULT_DIR
        self.config_file = self.config_dir / self.CONFIG_FILENAME
        self._config: dict[str, Any] = {}
        self._ensure_config_exists()
        self._load_config()

    def _ensure_config_exists(self) -> None:
        """Create config directory and default config if needed."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        if not self.config_file.exists():
            self._write_config({"settings": dict(DEFAULT_SETTINGS)})

    def _load_config(self) -> None:
        """Load configuration from file."""
        try:
            with open(self.config_file, "rb") as f:
                self._config = tomllib.load(f)
        except Exception as e:
            raise ConfigError(f"Failed to load config: {e}") from e

    def _write_config(self, config: dict[str, Any] | None = None) -> None:
        """Write configuration to file."""
        if config is not None:
            self._config = config
        try:
            with open(self.config_file, "wb") as f:
                tomli_w.dump(self._config, f)
        except Exception as e:
            raise ConfigError(f"Failed to write config: {e}") from e

    def _save(self) -> None:
        """Save current config to file."""
        self._write_config()

    # Settings
    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        if default is None:
            default = DEFAULT_SETTINGS.get(key)
        return self._config.get("settings", {}).get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        """Set a setting value."""
        if "settings" not in self._config:
            self._config["settings"] = {}
        self._config["settings"][key] = value
        self._save()

    def set_setting_from_string(self, key: str, raw: str) -> Any:
        """Set a known setting from command-line text, coercing its type.

        Args:
            key: Setting name
            raw: Value as typed by the user

        Returns:
            The stored value

        Raises:
            ConfigError: If the key is unknown or the value has the wrong type
        """
        if key not in DEFAULT_SETTINGS:
            raise ConfigError(f"Unknown setting '{key}'")

        default = DEFAULT_SETTINGS[key]
        try:
            if isinstance(default, bool):
                lowered = raw.strip().lower()
                if lowered not in ("true", "false", "1", "0", "yes", "no"):
                    raise ValueError(f"expected true/false, got {raw!r}")
                value: Any = lowered in ("true", "1", "yes")
            elif isinstance(default, int):
                value = int(raw)
            elif isinstance(default, float):
                value = float(raw)
            else:
                value = raw
        except ValueError as e:
            raise ConfigError(f"Invalid value for '{key}': {e}") from e

        self.set_setting(key, value)
        return value

    @property
    def settings(self) -> dict[str, Any]:
        """All settings, defaults filled in."""
        merged = dict(DEFAULT_SETTINGS)
        merged.update(self._config.get("settings", {}))
        return merged

    @property
    def catalog_url(self) -> str | None:
        """Catalog URL used when no local path is configured."""
        return self.get_setting("catalog_url") or None

    @property
    def catalog_path(self) -> Path | None:
        """Local catalog file, if configured."""
        path = self.get_setting("catalog_path")
        return Path(path).expanduser() if path else None

    @property
    def catalog_already_decompressed(self) -> bool:
        """Whether the catalog transport delivers plain text."""
        return bool(self.get_setting("catalog_already_decompressed"))

    @property
    def catalog_fetch_timeout(self) -> float:
        """Catalog fetch timeout in seconds."""
        return float(self.get_setting("catalog_fetch_timeout"))

    @property
    def background_load_delay(self) -> float:
        """Delay before the background catalog load, in seconds."""
        return float(self.get_setting("background_load_delay"))

    @property
    def generator_url(self) -> str | None:
        """Star generator endpoint, None if not configured."""
        return self.get_setting("generator_url") or None

    @property
    def generator_api_key(self) -> str | None:
        """Bearer token for the generator."""
        return self.get_setting("generator_api_key") or None

    @property
    def generator_timeout(self) -> float:
        """Generator timeout in seconds."""
        return float(self.get_setting("generator_timeout"))

    @property
    def proposal_cache_ttl_hours(self) -> float:
        """Maximum age of cached generator proposals."""
        return float(self.get_setting("proposal_cache_ttl_hours"))

    @property
    def suggestion_count(self) -> int:
        """Default number of suggestions per request."""
        return int(self.get_setting("suggestion_count"))

    @property
    def data_dir(self) -> Path:
        """Get the data directory for cache, logs, etc."""
        data_dir = self.config_dir / "data"
        data_dir.mkdir(exist_ok=True)
        return data_dir

    @property
    def cache_db_path(self) -> Path:
        """Get the path to the cache database."""
        return self.data_dir / "cache.db"
