"""Global configuration data structures and loading.

Provides immutable config data loaded from ~/.devdash/config.toml, read once
at the CLI entry point.
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, cast

import tomlkit

from devdash.core.checkout_planner import DEFAULT_REMOTE_NAME, NAMING_MODES, NamingMode

DEFAULT_LIST_LIMIT = 30


@dataclass(frozen=True)
class DevDashConfig:
    """Immutable devdash configuration.

    All fields are read-only after construction.
    """

    naming_mode: NamingMode = "standard"
    remote_name: str = DEFAULT_REMOTE_NAME
    debug: bool = False
    list_limit: int = DEFAULT_LIST_LIMIT


CONFIG_KEYS: tuple[str, ...] = ("naming_mode", "remote_name", "debug", "list_limit")


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ValueError(f"Invalid value for '{key}': expected true or false, got {value!r}")


def _parse_int(key: str, value: Any) -> int:
    """Accept TOML integers, integral floats, and decimal strings from the command line.

    bool is a subclass of int, so TOML `true` has to be turned away explicitly.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid value for '{key}': expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"Invalid value for '{key}': {value!r} is not an integer")


def _parse_value(key: str, value: Any) -> Any:
    if key == "naming_mode":
        if value not in NAMING_MODES:
            choices = ", ".join(NAMING_MODES)
            raise ValueError(f"Invalid value for 'naming_mode': {value!r} (choose from {choices})")
        return cast(NamingMode, value)
    if key == "remote_name":
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Invalid value for 'remote_name': must be a non-empty string")
        return value.strip()
    if key == "debug":
        return _parse_bool(key, value)
    if key == "list_limit":
        limit = _parse_int(key, value)
        if not 1 <= limit <= 100:
            raise ValueError("Invalid value for 'list_limit': must be between 1 and 100")
        return limit
    raise ValueError(f"Unknown config key: {key}")


def config_from_mapping(data: dict[str, Any]) -> DevDashConfig:
    """Validate a raw TOML table into a DevDashConfig.

    Raises:
        ValueError: On unknown keys or invalid values
    """
    values = {key: _parse_value(key, value) for key, value in data.items()}
    return DevDashConfig(**values)


def with_value(config: DevDashConfig, key: str, raw_value: str) -> DevDashConfig:
    """Return a copy of `config` with `key` set from a command-line string."""
    return replace(config, **{key: _parse_value(key, raw_value)})


def config_as_dict(config: DevDashConfig) -> dict[str, Any]:
    return {key: getattr(config, key) for key in CONFIG_KEYS}


class ConfigStore(ABC):
    """Abstract interface for config access.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if config exists."""
        ...

    @abstractmethod
    def load(self) -> DevDashConfig:
        """Load config, falling back to defaults when none exists.

        Raises:
            ValueError: If config has unknown keys or invalid values
        """
        ...

    @abstractmethod
    def save(self, config: DevDashConfig) -> None:
        """Save config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for messages and debugging)."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.devdash/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        if config_path is None:
            config_path = Path.home() / ".devdash" / "config.toml"
        self._path = config_path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> DevDashConfig:
        if not self._path.exists():
            return DevDashConfig()

        try:
            data = tomllib.loads(self._path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Malformed config at {self._path}: {e}") from e

        try:
            return config_from_mapping(data)
        except ValueError as e:
            raise ValueError(f"{e} (in {self._path})") from e

    def save(self, config: DevDashConfig) -> None:
        """Save config, preserving comments and formatting of an existing file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)

        if self._path.exists():
            doc = tomlkit.parse(self._path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("devdash configuration"))

        for key, value in config_as_dict(config).items():
            doc[key] = value

        self._path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def path(self) -> Path:
        return self._path


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: DevDashConfig | None = None) -> None:
        """Initialize in-memory config store.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> DevDashConfig:
        if self._config is None:
            return DevDashConfig()
        return self._config

    def save(self, config: DevDashConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/devdash/config.toml")
