"""Configuration Management Package"""

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

from conventionalize import DEFAULT_BRANCH_KEY
from conventionalize.output import print_warning

DEFAULT_SKIP_SOURCES = ["merge", "squash"]

# Git passes these as the second hook argument
VALID_COMMIT_SOURCES = {"message", "template", "merge", "squash", "commit"}

TRUTHY = "true"


@dataclass
class Config:
    """User configuration with sensible defaults."""
    default_branch_key: str = DEFAULT_BRANCH_KEY
    interactive: bool = True
    embed_ticket: bool = True
    skip_sources: list[str] = field(default_factory=lambda: list(DEFAULT_SKIP_SOURCES))
    debug: bool = False
    dry_run: bool = False

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.default_branch_key, str) or not self.default_branch_key.strip():
            warnings.append(f"Invalid default_branch_key '{self.default_branch_key}', using '{defaults.default_branch_key}'")
            self.default_branch_key = defaults.default_branch_key

        for name in ("interactive", "embed_ticket", "debug", "dry_run"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                warnings.append(f"Invalid {name} '{value}', using {str(getattr(defaults, name)).lower()}")
                setattr(self, name, getattr(defaults, name))

        if not isinstance(self.skip_sources, list) or any(s not in VALID_COMMIT_SOURCES for s in self.skip_sources):
            warnings.append(f"Invalid skip_sources {self.skip_sources!r}, using {defaults.skip_sources!r}")
            self.skip_sources = defaults.skip_sources

        return warnings

    def apply_env(self, env: Mapping[str, str]) -> 'Config':
        """Apply DEBUG=true / TEST=true overrides from the environment."""
        if env.get("DEBUG") == TRUTHY:
            self.debug = True
        if env.get("TEST") == TRUTHY:
            self.dry_run = True
        return self

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print_warning(f"Config warning: {warning}")
        return config


class ConfigManager:
    """Manages loading configuration.

    Lookup order:
    1. .conventionalizerc in current directory
    2. .conventionalizerc in home directory
    3. Defaults
    """

    CONFIG_FILENAME = ".conventionalizerc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print_warning(f"Could not load {path}: {e}")
            return Config()
        if not isinstance(data, dict):
            print_warning(f"Could not load {path}: expected a JSON object")
            return Config()
        return Config.from_dict(data)

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """Load the config file, then layer DEBUG/TEST from the environment on top."""
    config = replace(_manager.load())
    return config.apply_env(os.environ if env is None else env)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "get_config_path",
    "DEFAULT_SKIP_SOURCES",
    "VALID_COMMIT_SOURCES",
]
